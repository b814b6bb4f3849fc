from .order import OrderItemSerializer, OrderSerializer, OrderStatusUpdateSerializer

__all__ = ["OrderItemSerializer", "OrderSerializer", "OrderStatusUpdateSerializer"]
