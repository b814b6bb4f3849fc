from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Product

UNSPLASH = "https://images.unsplash.com/photo-{}?w=500"

# (name, description, price, category, sizes, stock, image id)
PRODUCTS_DATA = [
    ("Classic White T-Shirt", "Comfortable cotton t-shirt perfect for everyday wear", "19.99", "Men", ["S", "M", "L", "XL"], 50, "1521572163474-6864f9cf17ab"),
    ("Denim Jacket", "Classic denim jacket with modern fit", "89.99", "Men", ["S", "M", "L", "XL", "XXL"], 30, "1594634319156-319c9a82198f"),
    ("Black Hoodie", "Cozy hoodie perfect for cold weather", "49.99", "Men", ["S", "M", "L", "XL", "XXL"], 40, "1556821840-3a63f9560941"),
    ("Slim Fit Jeans", "Modern slim fit jeans with stretch", "69.99", "Men", ["28", "30", "32", "34", "36"], 35, "1542272604-787c3835535d"),
    ("Summer Dress", "Light and breezy summer dress", "59.99", "Women", ["XS", "S", "M", "L", "XL"], 25, "1539008835657-9e8e9680c956"),
    ("Women's Blazer", "Professional blazer for business casual", "119.99", "Women", ["XS", "S", "M", "L", "XL"], 20, "1594634319156-319c9a82198f"),
    ("Yoga Leggings", "High-waisted leggings perfect for workout", "39.99", "Women", ["XS", "S", "M", "L", "XL"], 45, "1571019613454-1cb2f99b2d8b"),
    ("Kids Rainbow T-Shirt", "Colorful t-shirt for kids", "15.99", "Kids", ["XS", "S", "M", "L"], 60, "1516478177764-9fe5ae0e4443"),
    ("Kids Denim Shorts", "Comfortable denim shorts for active kids", "24.99", "Kids", ["XS", "S", "M", "L"], 40, "1541099649105-f69ad21f3246"),
    ("Baseball Cap", "Classic baseball cap with adjustable strap", "19.99", "Accessories", ["OS"], 100, "1521319422675-83cb779e0c69"),
    ("Leather Belt", "Genuine leather belt with classic buckle", "34.99", "Accessories", ["S", "M", "L"], 50, "1549298916-b41d501d3772"),
    ("Wool Scarf", "Warm wool scarf for winter", "29.99", "Accessories", ["OS"], 30, "1549298916-b41d501d3772"),
    ("Polo Shirt", "Classic polo shirt for casual wear", "34.99", "Men", ["S", "M", "L", "XL"], 35, "1596755094514-f87e34085b2c"),
    ("Winter Coat", "Warm winter coat with hood", "149.99", "Women", ["XS", "S", "M", "L", "XL"], 25, "1549298916-b41d501d3772"),
    ("Kids Hoodie", "Cozy hoodie for kids", "29.99", "Kids", ["XS", "S", "M", "L"], 45, "1556821840-3a63f9560941"),
    ("Sunglasses", "Stylish sunglasses with UV protection", "24.99", "Accessories", ["OS"], 80, "1473496169904-658ba7c44d8f"),
    ("Backpack", "Durable backpack for school or travel", "44.99", "Accessories", ["OS"], 35, "1553062407-98eeb64c6a62"),
    ("Women's Top", "Casual top perfect for everyday wear", "29.99", "Women", ["XS", "S", "M", "L", "XL"], 40, "1434389677669-e08b4cac3105"),
    ("Men's Shorts", "Comfortable shorts for summer", "32.99", "Men", ["S", "M", "L", "XL"], 30, "1594634319156-319c9a82198f"),
    ("Kids T-Shirt Set", "Pack of 3 colorful t-shirts for kids", "34.99", "Kids", ["XS", "S", "M", "L"], 25, "1516478177764-9fe5ae0e4443"),
    ("Wrist Watch", "Classic analog watch", "79.99", "Accessories", ["OS"], 40, "1523275335684-37898b6baf30"),
]


class Command(BaseCommand):
    help = "Seed the storefront catalog with demo products"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every existing product (and dependent cart lines) first.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products..."))

        if options["reset"]:
            deleted, _ = Product.objects.all().delete()
            self.stdout.write(f"Cleared existing products ({deleted} rows).")

        created_count = 0
        for name, description, price, category, sizes, stock, image_id in PRODUCTS_DATA:
            product, created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": Decimal(price),
                    "category": category,
                    "stock": stock,
                    "image": UNSPLASH.format(image_id),
                },
            )
            if created:
                product.set_sizes(sizes)
                created_count += 1

        self.stdout.write(
            self.style.SUCCESS(f"✅ {created_count} products seeded ({len(PRODUCTS_DATA)} in catalog).")
        )
