"""
PATH: notifications/models/order_notification.py

ORDER NOTIFICATION (OUTBOX ROW)

Purpose:
- Durable record of "this order still needs its confirmation email".
- Written in the same transaction as the order, so a committed order always
  has a notification row and a rolled-back checkout never has one.

Lifecycle:
- pending -> sent
- pending -> failed -> (retry) -> sent | failed
"""

import uuid

from django.db import models


class OrderNotification(models.Model):
    KIND_ORDER_CONFIRMATION = "order_confirmation"

    KIND_CHOICES = [
        (KIND_ORDER_CONFIRMATION, "Order confirmation"),
    ]

    STATUS_PENDING = "pending"
    STATUS_SENT = "sent"
    STATUS_FAILED = "failed"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_SENT, "Sent"),
        (STATUS_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    kind = models.CharField(max_length=32, choices=KIND_CHOICES, default=KIND_ORDER_CONFIRMATION)
    recipient = models.EmailField()

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="notification_status_idx"),
        ]

    @property
    def is_sent(self) -> bool:
        return self.status == self.STATUS_SENT

    def __str__(self):
        return f"{self.kind} -> {self.recipient} ({self.status})"
