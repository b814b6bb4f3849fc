# common/factories.py

"""
Shared test seeding helpers (products, users, authenticated clients).
"""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from products.choices import Category
from products.models import Product

User = get_user_model()

DEFAULT_PASSWORD = "Str0ng-Passw0rd!"


def make_product(
    *,
    name="Classic Tee",
    price="25.00",
    stock=10,
    sizes=("S", "M", "L"),
    category=Category.MEN,
    description="Soft cotton t-shirt",
) -> Product:
    product = Product.objects.create(
        name=name,
        description=description,
        price=Decimal(str(price)),
        image="https://example.com/img.png",
        category=category,
        stock=stock,
    )
    product.set_sizes(sizes)
    return product


def make_user(*, email="buyer@example.com", name="Buyer", password=DEFAULT_PASSWORD, role=None):
    extra = {"role": role} if role else {}
    return User.objects.create_user(email=email, password=password, name=name, **extra)


def auth_client(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client
