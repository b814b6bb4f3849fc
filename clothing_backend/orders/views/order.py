# orders/views/order.py

"""
ORDER API VIEWS

- POST /orders/             checkout the caller's cart (201)
- GET  /orders/             caller's orders, newest first
- GET  /orders/<id>/        one order (owner only)
- PATCH /orders/<id>/status/ fulfilment status (admin)
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import AuthorizationError, OrderNotFoundError
from orders.models import Order
from orders.serializers import OrderSerializer, OrderStatusUpdateSerializer
from orders.services.checkout import place_order
from users.permissions import IsAdmin

logger = logging.getLogger(__name__)


def _orders_queryset():
    return Order.objects.select_related("user").prefetch_related("items__product")


def _get_order(order_id) -> Order:
    try:
        return _orders_queryset().get(pk=order_id)
    except (Order.DoesNotExist, DjangoValidationError, ValueError):
        raise OrderNotFoundError()


class OrderListCreateView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, description="List my orders (newest first)")
    def get(self, request):
        orders = _orders_queryset().filter(user=request.user).order_by("-created_at")
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=None,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="EMPTY_CART"),
            409: OpenApiResponse(description="INSUFFICIENT_STOCK"),
        },
        description="Checkout: convert my cart into an order",
    )
    def post(self, request):
        order = place_order(user=request.user)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(
        responses={200: OrderSerializer, 403: OpenApiResponse(description="NOT_AUTHORIZED")},
        description="Get one of my orders",
    )
    def get(self, request, order_id):
        order = _get_order(order_id)
        if order.user_id != request.user.pk:
            logger.warning(
                "Order access denied",
                extra={"order_id": str(order.pk), "user_id": str(request.user.pk)},
            )
            raise AuthorizationError()
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderStatusUpdateSerializer

    @extend_schema(
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer},
        description="Admin: move an order through fulfilment",
    )
    def patch(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = _get_order(order_id)
        previous = order.status
        order.status = serializer.validated_data["status"]
        order.save(update_fields=["status", "updated_at"])

        logger.info(
            "Order status changed",
            extra={"order_id": str(order.pk), "from": previous, "to": order.status, "by": str(request.user.pk)},
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
