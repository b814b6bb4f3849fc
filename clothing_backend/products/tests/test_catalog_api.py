# products/tests/test_catalog_api.py

"""
CATALOG API TESTS

Run with:
    python manage.py test products -v 2
"""

import math
import uuid
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from common.factories import make_product
from products.choices import Category
from products.models import Product


class CatalogPaginationTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        base = timezone.now() - timedelta(days=1)
        for i in range(21):
            product = make_product(name=f"Item {i:02d}", price=str(10 + i))
            # distinct timestamps so "newest first" is deterministic
            Product.objects.filter(pk=product.pk).update(created_at=base + timedelta(minutes=i))

    def setUp(self):
        self.client = APIClient()

    def test_first_page_of_21_with_limit_10(self):
        res = self.client.get(reverse("products-list"), {"limit": 10})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["products"]), 10)
        self.assertEqual(res.data["currentPage"], 1)
        self.assertEqual(res.data["totalPages"], 3)
        self.assertEqual(res.data["totalProducts"], 21)
        self.assertTrue(res.data["hasNextPage"])
        self.assertFalse(res.data["hasPrevPage"])

    def test_last_page(self):
        res = self.client.get(reverse("products-list"), {"limit": 10, "page": 3})

        self.assertEqual(len(res.data["products"]), 1)
        self.assertFalse(res.data["hasNextPage"])
        self.assertTrue(res.data["hasPrevPage"])

    def test_page_past_end_is_empty(self):
        res = self.client.get(reverse("products-list"), {"limit": 10, "page": 9})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["products"], [])
        self.assertEqual(res.data["totalProducts"], 21)

    def test_default_page_size(self):
        res = self.client.get(reverse("products-list"))
        self.assertEqual(len(res.data["products"]), 10)

    def test_newest_first(self):
        res = self.client.get(reverse("products-list"), {"limit": 21})
        names = [p["name"] for p in res.data["products"]]
        self.assertEqual(names[0], "Item 20")
        self.assertEqual(names[-1], "Item 00")

    def test_invalid_page_and_limit(self):
        for params in ({"page": 0}, {"limit": 0}, {"page": "abc"}):
            res = self.client.get(reverse("products-list"), params)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST, params)
            self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")


class CatalogFilterTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.tee = make_product(name="Classic Tee", price="19.99", category=Category.MEN, sizes=("S", "M"))
        cls.dress = make_product(
            name="Summer Dress",
            price="59.99",
            category=Category.WOMEN,
            sizes=("XS", "S"),
            description="Light and breezy",
        )
        cls.jeans = make_product(name="Slim Jeans", price="45.00", category=Category.MEN, sizes=("30", "32"))
        cls.cap = make_product(name="Cap", price="20.00", category=Category.ACCESSORIES, sizes=("OS",))

    def setUp(self):
        self.client = APIClient()

    def _names(self, **params):
        res = self.client.get(reverse("products-list"), params)
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        return {p["name"] for p in res.data["products"]}, res.data

    def test_price_range_is_inclusive(self):
        names, data = self._names(minPrice=20, maxPrice=50, limit=1)

        self.assertEqual(data["totalProducts"], 2)
        self.assertEqual(data["totalPages"], math.ceil(data["totalProducts"] / 1))
        self.assertEqual(data["hasNextPage"], data["currentPage"] < data["totalPages"])

        names, _ = self._names(minPrice=20, maxPrice=50)
        self.assertEqual(names, {"Slim Jeans", "Cap"})

    def test_search_matches_name_or_description(self):
        self.assertEqual(self._names(search="TEE")[0], {"Classic Tee"})
        self.assertEqual(self._names(search="breezy")[0], {"Summer Dress"})

    def test_category_and_all(self):
        self.assertEqual(self._names(category="Men")[0], {"Classic Tee", "Slim Jeans"})
        self.assertEqual(len(self._names(category="All")[0]), 4)

    def test_size_filter(self):
        self.assertEqual(self._names(size="S")[0], {"Classic Tee", "Summer Dress"})

    def test_filters_are_combined(self):
        self.assertEqual(self._names(category="Men", size="S", maxPrice=30)[0], {"Classic Tee"})

    def test_unknown_facet_values_rejected(self):
        for params in ({"category": "Pets"}, {"size": "XXXL"}, {"minPrice": "cheap"}):
            res = self.client.get(reverse("products-list"), params)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST, params)

    def test_detail(self):
        res = self.client.get(reverse("products-detail", args=[self.dress.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["sizes"], ["XS", "S"])
        self.assertEqual(res.data["price"], "59.99")

    def test_detail_not_found(self):
        res = self.client.get(reverse("products-detail", args=[uuid.uuid4()]))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "PRODUCT_NOT_FOUND")

    def test_facets(self):
        res = self.client.get(reverse("products-categories"))
        self.assertEqual(res.data, ["All", "Men", "Women", "Accessories"])

        res = self.client.get(reverse("products-sizes"))
        self.assertEqual(res.data, ["30", "32", "M", "OS", "S", "XS"])
