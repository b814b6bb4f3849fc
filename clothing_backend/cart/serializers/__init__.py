from .cart import (
    CartItemInputSerializer,
    CartItemKeySerializer,
    CartLineSerializer,
    CartSerializer,
    GuestCartLineInputSerializer,
)

__all__ = [
    "CartItemInputSerializer",
    "CartItemKeySerializer",
    "CartLineSerializer",
    "CartSerializer",
    "GuestCartLineInputSerializer",
]
