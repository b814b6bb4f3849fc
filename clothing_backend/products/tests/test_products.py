# products/tests/test_products.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from common.factories import make_product
from products.choices import sort_sizes
from products.models import Product, ProductSize


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - Products can be created safely
    - Stock / price can never be negative at the DB level
    - Sizes come from the closed enumeration, one row per size
    """

    def test_product_creation(self):
        """A valid product should be created successfully."""
        product = make_product(name="Linen Shirt", price="45.00", sizes=("M", "S"))

        self.assertEqual(product.name, "Linen Shirt")
        self.assertEqual(product.size_list, ["S", "M"])
        self.assertTrue(product.offers_size("M"))
        self.assertFalse(product.offers_size("XL"))

    def test_negative_stock_rejected_by_database(self):
        product = make_product()

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Product.objects.filter(pk=product.pk).update(stock=-1)

    def test_negative_price_fails_validation(self):
        product = make_product()
        product.price = Decimal("-1.00")

        with self.assertRaises(ValidationError):
            product.full_clean()

    def test_set_sizes_replaces_and_rejects_unknown(self):
        product = make_product(sizes=("S", "M"))

        product.set_sizes(["M", "L"])
        self.assertEqual(
            sorted(ProductSize.objects.filter(product=product).values_list("size", flat=True)),
            ["L", "M"],
        )

        with self.assertRaises(ValidationError):
            product.set_sizes(["XXXL"])

    def test_size_sort_follows_enumeration(self):
        self.assertEqual(sort_sizes(["32", "XL", "S", "OS", "28"]), ["S", "XL", "28", "32", "OS"])

    def test_product_string_representation(self):
        """__str__ should be human readable."""
        product = make_product(name="Cargo Pants")
        self.assertIn("Cargo Pants", str(product))
