# orders/serializers/order.py

"""
ORDER SERIALIZERS

- OrderSerializer: order with frozen line items and the owner's display
  fields (name, email).
- OrderStatusUpdateSerializer: admin fulfilment input.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderProductSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    image = serializers.URLField(read_only=True)


class OrderItemSerializer(serializers.ModelSerializer):
    # null once the catalog product has been deleted
    product = OrderProductSerializer(read_only=True, allow_null=True)
    qty = serializers.IntegerField(source="quantity", read_only=True)
    lineTotal = serializers.DecimalField(source="line_total", max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["product", "name", "size", "qty", "price", "lineTotal"]
        read_only_fields = fields


class OrderUserSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class OrderSerializer(serializers.ModelSerializer):
    orderNo = serializers.CharField(source="order_no", read_only=True)
    user = OrderUserSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    totalPrice = serializers.DecimalField(source="total_price", max_digits=12, decimal_places=2, read_only=True)
    orderDate = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNo",
            "user",
            "items",
            "totalPrice",
            "status",
            "orderDate",
            "updatedAt",
        ]
        read_only_fields = fields


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
