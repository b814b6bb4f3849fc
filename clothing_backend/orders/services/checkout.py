# orders/services/checkout.py

"""
CART-TO-ORDER CONVERSION (APPLICATION SERVICE)

Purpose:
- Turn the caller's cart into an immutable Order (atomic, all-or-nothing).
- Validate + decrement stock against one locked product snapshot.
- Queue the order confirmation email (delivered after commit).

Hard rules:
- Checkout is serialized per user: the cart row is locked first, so a
  concurrent second checkout waits and then sees an empty cart.
- Requested quantity is validated per product, summed over its sizes.
- Product rows are locked in primary-key order (no lock-order deadlocks).
- Every decrement is conditional (stock >= qty); zero rows updated aborts
  the whole checkout. Stock can never go negative.
- Order items copy name / size / quantity / unit price from the snapshot;
  total = sum(price x quantity), computed once.
- Notification delivery never fails or rolls back the order.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal

from django.db import transaction
from django.db.models import F

from cart.models import Cart
from common.exceptions import EmptyCartError, InsufficientStockError, ProductNotFoundError
from notifications.services.dispatcher import queue_order_confirmation
from orders.models import Order, OrderItem
from products.models import Product

logger = logging.getLogger(__name__)


def _requested_per_product(cart_items) -> "OrderedDict":
    requested = OrderedDict()
    for item in cart_items:
        requested[item.product_id] = requested.get(item.product_id, 0) + int(item.quantity)
    return requested


def _lock_products(product_ids) -> dict:
    locked = (
        Product.objects.select_for_update()
        .filter(pk__in=list(product_ids))
        .order_by("pk")
    )
    return {p.pk: p for p in locked}


def _decrement_stock(*, product: Product, quantity: int) -> None:
    updated = Product.objects.filter(pk=product.pk, stock__gte=quantity).update(
        stock=F("stock") - quantity
    )
    if not updated:
        current = Product.objects.filter(pk=product.pk).values_list("stock", flat=True).first()
        raise InsufficientStockError(
            product_name=product.name,
            available=int(current or 0),
            requested=quantity,
        )


@transaction.atomic
def _convert_cart(*, user) -> Order:
    cart = Cart.objects.select_for_update().filter(user=user).first()
    if cart is None:
        raise EmptyCartError()

    cart_items = list(cart.items.order_by("created_at", "id"))
    if not cart_items:
        raise EmptyCartError()

    requested = _requested_per_product(cart_items)
    snapshot = _lock_products(requested.keys())

    # Validation reads the same locked rows used for items + decrements.
    for product_id, qty in requested.items():
        product = snapshot.get(product_id)
        if product is None:
            raise ProductNotFoundError()
        if product.stock < qty:
            logger.warning(
                "Checkout rejected: insufficient stock",
                extra={
                    "user_id": str(user.pk),
                    "product_id": str(product_id),
                    "available": product.stock,
                    "requested": qty,
                },
            )
            raise InsufficientStockError(
                product_name=product.name,
                available=product.stock,
                requested=qty,
            )

    order_lines = [
        OrderItem(
            product=snapshot[item.product_id],
            name=snapshot[item.product_id].name,
            size=item.size,
            quantity=item.quantity,
            price=snapshot[item.product_id].price,
        )
        for item in cart_items
    ]
    total = sum((line.line_total for line in order_lines), Decimal("0.00"))

    order = Order.objects.create(user=user, total_price=total)
    for line in order_lines:
        line.order = order
    OrderItem.objects.bulk_create(order_lines)

    for product_id in sorted(requested):
        _decrement_stock(product=snapshot[product_id], quantity=requested[product_id])

    cart.items.all().delete()

    queue_order_confirmation(order)

    logger.info(
        "Order placed",
        extra={
            "order_id": str(order.id),
            "order_no": order.order_no,
            "user_id": str(user.pk),
            "total_price": str(total),
            "lines": len(order_lines),
        },
    )
    return order


def place_order(*, user) -> Order:
    """
    Convert the user's cart into an order.

    Raises:
    - EmptyCartError: no cart or no items (nothing written)
    - InsufficientStockError: some product's summed quantity exceeds stock
      (stock, cart and orders unchanged)
    """
    order = _convert_cart(user=user)
    return (
        Order.objects.select_related("user")
        .prefetch_related("items__product")
        .get(pk=order.pk)
    )
