from .order_notification import OrderNotification

__all__ = ["OrderNotification"]
