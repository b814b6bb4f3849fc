# cart/services/cart_service.py

"""
CART SERVICE (SERVER CARTS)

Purpose:
- All mutations of an authenticated user's cart, keyed by
  (user, product, size).
- Shared product/size/quantity validation, reused by the guest storage.

Hard rules:
- add merges into an existing (product, size) line, never inserts a duplicate.
- update rejects quantity < 1 before looking the line up.
- remove of a pair that is not in the cart is a no-op success.
- Mutations lock the cart row so concurrent requests of one user serialize.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from django.db import transaction
from django.db.models import F

from cart.models import Cart, CartItem
from common.exceptions import (
    InvalidQuantityError,
    InvalidSizeError,
    ItemNotFoundError,
    ProductNotFoundError,
)
from products.models import Product

logger = logging.getLogger(__name__)


# ============================================================
# VALIDATION HELPERS
# ============================================================

def to_quantity(value) -> int:
    """
    Quantity normalizer.
    HARD RULE: quantities are whole units >= 1.
    """
    if isinstance(value, bool):
        raise InvalidQuantityError()
    try:
        qty = int(value)
    except (TypeError, ValueError):
        raise InvalidQuantityError("Quantity must be a whole number.")
    if qty < 1:
        raise InvalidQuantityError()
    return qty


def parse_product_id(product_id) -> uuid.UUID:
    if isinstance(product_id, uuid.UUID):
        return product_id
    try:
        return uuid.UUID(str(product_id))
    except (TypeError, ValueError, AttributeError):
        raise ProductNotFoundError()


def resolve_product(*, product_id, size: str) -> Product:
    """
    Load the product and check the size belongs to its allowed sizes.
    """
    pid = parse_product_id(product_id)
    product = Product.objects.prefetch_related("sizes").filter(pk=pid).first()
    if product is None:
        raise ProductNotFoundError()

    if not product.offers_size(size):
        raise InvalidSizeError()

    return product


# ============================================================
# CART ACCESS
# ============================================================

def get_or_create_cart(*, user) -> Cart:
    cart, created = Cart.objects.get_or_create(user=user)
    if created:
        logger.info("Cart created", extra={"user_id": str(user.pk)})
    return cart


def load_cart(*, user) -> Cart:
    """
    The user's cart expanded with current product data (lazy create).
    """
    cart = get_or_create_cart(user=user)
    return Cart.objects.prefetch_related("items__product").get(pk=cart.pk)


def _locked_cart(*, user) -> Cart:
    cart = get_or_create_cart(user=user)
    return Cart.objects.select_for_update().get(pk=cart.pk)


def _add_quantity(*, cart: Cart, product: Product, size: str, quantity: int) -> None:
    updated = CartItem.objects.filter(cart=cart, product=product, size=size).update(
        quantity=F("quantity") + quantity
    )
    if not updated:
        CartItem.objects.create(cart=cart, product=product, size=size, quantity=quantity)


# ============================================================
# MUTATIONS
# ============================================================

@transaction.atomic
def add_item(*, user, product_id, size: str, quantity) -> Cart:
    qty = to_quantity(quantity)
    product = resolve_product(product_id=product_id, size=size)

    cart = _locked_cart(user=user)
    _add_quantity(cart=cart, product=product, size=size, quantity=qty)
    return load_cart(user=user)


@transaction.atomic
def update_item(*, user, product_id, size: str, quantity) -> Cart:
    qty = to_quantity(quantity)
    pid = parse_product_id(product_id)

    cart = _locked_cart(user=user)
    updated = CartItem.objects.filter(cart=cart, product_id=pid, size=size).update(quantity=qty)
    if not updated:
        raise ItemNotFoundError()
    return load_cart(user=user)


@transaction.atomic
def remove_item(*, user, product_id, size: str) -> Cart:
    cart = _locked_cart(user=user)
    try:
        pid = parse_product_id(product_id)
    except ProductNotFoundError:
        return load_cart(user=user)

    CartItem.objects.filter(cart=cart, product_id=pid, size=size).delete()
    return load_cart(user=user)


@transaction.atomic
def clear_cart(*, user) -> Cart:
    cart = _locked_cart(user=user)
    cart.items.all().delete()
    return load_cart(user=user)


# ============================================================
# GUEST -> ACCOUNT MERGE
# ============================================================

def _union_by_pair(lines) -> "OrderedDict[tuple[str, str], int]":
    merged: "OrderedDict[tuple[str, str], int]" = OrderedDict()
    for line in lines or []:
        key = (str(line["productId"]), str(line["size"]))
        merged[key] = merged.get(key, 0) + int(line["qty"])
    return merged


@transaction.atomic
def merge_guest_cart(*, user, lines) -> Cart:
    """
    Union guest lines into the user's cart by (product, size), summing
    quantities. Lines whose product vanished or whose size is no longer
    offered are skipped (logged), never fatal for the login.
    """
    cart = _locked_cart(user=user)

    merged = 0
    for (product_id, size), qty in _union_by_pair(lines).items():
        try:
            qty = to_quantity(qty)
            product = resolve_product(product_id=product_id, size=size)
        except (ProductNotFoundError, InvalidSizeError, InvalidQuantityError) as exc:
            logger.warning(
                "Skipping guest cart line during merge",
                extra={"user_id": str(user.pk), "product_id": product_id, "size": size, "reason": exc.code},
            )
            continue

        _add_quantity(cart=cart, product=product, size=size, quantity=qty)
        merged += 1

    if merged:
        logger.info("Guest cart merged", extra={"user_id": str(user.pk), "lines": merged})

    return load_cart(user=user)
