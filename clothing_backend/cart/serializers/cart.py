# cart/serializers/cart.py

"""
CART SERIALIZERS

Input:
- GuestCartLineInputSerializer: one line of a client-held guest cart
  (posted with register/login).
- CartItemInputSerializer / CartItemKeySerializer: cart mutation bodies.

Output:
- CartSerializer: CartSnapshot (server or guest) in a frontend-friendly
  shape. Totals are always server-derived at current catalog prices.
"""

from rest_framework import serializers

from products.serializers import ProductSummarySerializer


# =====================================================
# INPUT
# =====================================================

class CartItemKeySerializer(serializers.Serializer):
    productId = serializers.UUIDField()
    # Membership in the product's sizes is checked by the service (INVALID_SIZE)
    size = serializers.CharField(max_length=8)


class CartItemInputSerializer(CartItemKeySerializer):
    # Lower bound is enforced by the service (INVALID_QUANTITY)
    qty = serializers.IntegerField()


class GuestCartLineInputSerializer(CartItemKeySerializer):
    qty = serializers.IntegerField(min_value=1)


# =====================================================
# OUTPUT
# =====================================================

class CartLineSerializer(serializers.Serializer):
    product = ProductSummarySerializer(read_only=True)
    size = serializers.CharField(read_only=True)
    qty = serializers.IntegerField(source="quantity", read_only=True)
    lineTotal = serializers.DecimalField(source="line_total", max_digits=12, decimal_places=2, read_only=True)


class CartSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True, allow_null=True)
    guest = serializers.BooleanField(read_only=True)
    items = CartLineSerializer(source="lines", many=True, read_only=True)
    itemCount = serializers.IntegerField(source="item_count", read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
