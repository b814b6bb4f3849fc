from .order import OrderDetailView, OrderListCreateView, OrderStatusView

__all__ = ["OrderDetailView", "OrderListCreateView", "OrderStatusView"]
