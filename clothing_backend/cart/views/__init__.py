from .api import (
    AddCartItemView,
    CartView,
    ClearCartView,
    RemoveCartItemView,
    UpdateCartItemView,
)

__all__ = [
    "AddCartItemView",
    "CartView",
    "ClearCartView",
    "RemoveCartItemView",
    "UpdateCartItemView",
]
