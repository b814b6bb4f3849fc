# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Cart lifecycle for both guests (session) and signed-in users (server).
- Views stay thin: parse input, pick the storage, serialize the snapshot.

Hard rules:
- Storage is chosen per request via get_cart_storage (never global state).
- Money is server-owned: line totals + subtotal use current catalog prices.
- Domain errors propagate to common.api.exception_handler.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from cart.serializers import CartItemInputSerializer, CartItemKeySerializer, CartSerializer
from cart.services.storage import get_cart_storage


class CartBaseView(APIView):
    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @staticmethod
    def _respond(snapshot):
        return Response(CartSerializer(snapshot).data, status=status.HTTP_200_OK)


class CartWriteView(CartBaseView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "cart_write"


# =====================================================
# READ
# =====================================================

class CartView(CartBaseView):
    """
    Current cart (created lazily for signed-in users).
    """

    @extend_schema(responses={200: CartSerializer}, description="Get the current cart")
    def get(self, request):
        return self._respond(get_cart_storage(request).snapshot())


# =====================================================
# MUTATIONS
# =====================================================

class AddCartItemView(CartWriteView):
    @extend_schema(
        request=CartItemInputSerializer,
        responses={200: CartSerializer},
        description="Add a product/size to the cart (increments quantity if the pair exists)",
    )
    def post(self, request):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        snapshot = get_cart_storage(request).add(
            product_id=data["productId"],
            size=data["size"],
            quantity=data["qty"],
        )
        return self._respond(snapshot)


class UpdateCartItemView(CartWriteView):
    @extend_schema(
        request=CartItemInputSerializer,
        responses={200: CartSerializer},
        description="Set the quantity of an existing cart line",
    )
    def put(self, request):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        snapshot = get_cart_storage(request).update(
            product_id=data["productId"],
            size=data["size"],
            quantity=data["qty"],
        )
        return self._respond(snapshot)


class RemoveCartItemView(CartWriteView):
    @extend_schema(
        request=CartItemKeySerializer,
        responses={200: CartSerializer},
        description="Remove a product/size line (no-op if absent)",
    )
    def delete(self, request):
        serializer = CartItemKeySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        snapshot = get_cart_storage(request).remove(
            product_id=serializer.validated_data["productId"],
            size=serializer.validated_data["size"],
        )
        return self._respond(snapshot)


class ClearCartView(CartWriteView):
    @extend_schema(request=None, responses={200: CartSerializer}, description="Remove every cart line")
    def delete(self, request):
        return self._respond(get_cart_storage(request).clear())
