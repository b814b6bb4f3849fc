# orders/urls.py

from django.urls import path

from .views import OrderDetailView, OrderListCreateView, OrderStatusView

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="list-create"),
    path("<uuid:order_id>/", OrderDetailView.as_view(), name="detail"),
    path("<uuid:order_id>/status/", OrderStatusView.as_view(), name="status"),
]
