# common/exceptions.py

"""
STOREFRONT DOMAIN ERRORS

Centralized error kinds raised by the catalog, cart, order and notification
services. Views never build error payloads by hand: every ShopError carries a
stable machine code + HTTP status and is rendered by common.api.exception_handler
as {"error": {"code": ..., "message": ...}}.

Kinds:
- NotFoundError           (404) missing product / cart / order / line item
- ValidationError         (400) bad size, quantity < 1, missing field
- InsufficientStockError  (409) requested quantity exceeds stock
- EmptyCartError          (400) checkout on an empty / missing cart
- AuthorizationError      (403) viewing another user's order
- UpstreamNotificationError     non-fatal, logged only (never reaches a client)
"""

from __future__ import annotations


class ShopError(Exception):
    """Base exception for all storefront service failures."""

    code = "SHOP_ERROR"
    http_status = 400
    default_message = "Request could not be processed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------- NOT FOUND ----------------
class NotFoundError(ShopError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Not found."


class ProductNotFoundError(NotFoundError):
    code = "PRODUCT_NOT_FOUND"
    default_message = "Product not found."


class CartNotFoundError(NotFoundError):
    code = "CART_NOT_FOUND"
    default_message = "Cart not found."


class OrderNotFoundError(NotFoundError):
    code = "ORDER_NOT_FOUND"
    default_message = "Order not found."


class ItemNotFoundError(NotFoundError):
    code = "ITEM_NOT_FOUND"
    default_message = "Item not found in cart."


# ---------------- VALIDATION ----------------
class ValidationError(ShopError):
    code = "VALIDATION_ERROR"
    http_status = 400
    default_message = "Invalid request."


class InvalidSizeError(ValidationError):
    code = "INVALID_SIZE"
    default_message = "Size not available for this product."


class InvalidQuantityError(ValidationError):
    code = "INVALID_QUANTITY"
    default_message = "Quantity must be at least 1."


# ---------------- CHECKOUT ----------------
class CheckoutError(ShopError):
    """Base checkout exception"""

    code = "CHECKOUT_FAILED"


class EmptyCartError(CheckoutError):
    code = "EMPTY_CART"
    default_message = "Cart is empty."


class InsufficientStockError(CheckoutError):
    code = "INSUFFICIENT_STOCK"
    http_status = 409

    def __init__(self, *, product_name: str, available: int, requested: int | None = None):
        self.product_name = product_name
        self.available = int(available)
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. Only {self.available} available."
        )


# ---------------- ACCESS ----------------
class AuthorizationError(ShopError):
    code = "NOT_AUTHORIZED"
    http_status = 403
    default_message = "Not authorized to view this order."


# ---------------- NOTIFICATIONS ----------------
class UpstreamNotificationError(ShopError):
    """Raised by the mail transport wrapper; callers log it and move on."""

    code = "NOTIFICATION_FAILED"
    http_status = 502
    default_message = "Failed to send order confirmation email."
