from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from products.management.commands.seed_products import PRODUCTS_DATA
from products.models import Product


class SeedProductsCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_products", stdout=StringIO())
        call_command("seed_products", stdout=StringIO())

        self.assertEqual(Product.objects.count(), len(PRODUCTS_DATA))
        self.assertEqual(len(PRODUCTS_DATA), 21)

        jeans = Product.objects.prefetch_related("sizes").get(name="Slim Fit Jeans")
        self.assertEqual(jeans.size_list, ["28", "30", "32", "34", "36"])

    def test_reset_reseeds(self):
        call_command("seed_products", stdout=StringIO())
        Product.objects.filter(name="Denim Jacket").update(stock=0)

        call_command("seed_products", "--reset", stdout=StringIO())

        self.assertEqual(Product.objects.get(name="Denim Jacket").stock, 30)
