"""
PATH: cart/urls.py

CART URLS

- Current cart (guest or signed-in)
- Line operations keyed by (productId, size) in the request body
"""

from django.urls import path

from cart.views import (
    AddCartItemView,
    CartView,
    ClearCartView,
    RemoveCartItemView,
    UpdateCartItemView,
)

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("add/", AddCartItemView.as_view(), name="add"),
    path("update/", UpdateCartItemView.as_view(), name="update"),
    path("remove/", RemoveCartItemView.as_view(), name="remove"),
    path("clear/", ClearCartView.as_view(), name="clear"),
]
