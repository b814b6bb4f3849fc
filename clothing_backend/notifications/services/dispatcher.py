# notifications/services/dispatcher.py

"""
NOTIFICATION DISPATCHER

Purpose:
- Outbox writer used inside the checkout transaction.
- After commit, hand the notification to a bounded thread pool
  (or deliver inline when NOTIFICATIONS_ASYNC is off, e.g. tests).
- Delivery records its outcome on the row; it never raises to the caller.

GUARANTEES:
- At-least-once: rows that are still pending/failed are picked up again by
  `manage.py send_pending_notifications` (bounded by max attempts).
- A failed send never touches the order.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import close_old_connections, transaction
from django.utils import timezone

from common.exceptions import UpstreamNotificationError
from notifications.models import OrderNotification
from notifications.services.email import send_order_confirmation

logger = logging.getLogger(__name__)

_executor = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=settings.NOTIFICATIONS_MAX_WORKERS,
                thread_name_prefix="notifications",
            )
        return _executor


# ============================================================
# OUTBOX WRITE (inside the order transaction)
# ============================================================

def queue_order_confirmation(order) -> OrderNotification:
    notification = OrderNotification.objects.create(
        order=order,
        kind=OrderNotification.KIND_ORDER_CONFIRMATION,
        recipient=order.user.email,
    )
    transaction.on_commit(lambda: dispatch(notification.pk))
    return notification


def dispatch(notification_id) -> None:
    """
    Runs as an on_commit hook: the order is already committed, so nothing
    raised here may reach the checkout caller.
    """
    if settings.NOTIFICATIONS_ASYNC:
        get_executor().submit(_deliver_in_worker, notification_id)
    else:
        _deliver_logged(notification_id)


def _deliver_logged(notification_id) -> None:
    try:
        deliver(notification_id)
    except Exception:
        logger.exception("Notification delivery crashed", extra={"notification_id": str(notification_id)})


def _deliver_in_worker(notification_id) -> None:
    # Worker threads own their DB connections.
    close_old_connections()
    try:
        _deliver_logged(notification_id)
    finally:
        close_old_connections()


# ============================================================
# DELIVERY
# ============================================================

def deliver(notification_id) -> bool:
    """
    Send one notification and record the outcome. Returns True when sent.
    """
    notification = (
        OrderNotification.objects.select_related("order", "order__user")
        .filter(pk=notification_id)
        .first()
    )
    if notification is None:
        logger.warning("Notification vanished before delivery", extra={"notification_id": str(notification_id)})
        return False

    if notification.is_sent:
        return True

    notification.attempts += 1

    try:
        send_order_confirmation(order=notification.order, recipient=notification.recipient)
    except UpstreamNotificationError as exc:
        notification.status = OrderNotification.STATUS_FAILED
        notification.last_error = exc.message
        notification.save(update_fields=["status", "attempts", "last_error"])

        logger.error(
            "Order confirmation email failed",
            extra={
                "notification_id": str(notification.pk),
                "order_id": str(notification.order_id),
                "attempts": notification.attempts,
                "error": exc.message,
            },
        )
        return False
    except Exception as exc:
        notification.status = OrderNotification.STATUS_FAILED
        notification.last_error = str(exc)[:500] or exc.__class__.__name__
        notification.save(update_fields=["status", "attempts", "last_error"])

        logger.exception(
            "Order confirmation email crashed",
            extra={
                "notification_id": str(notification.pk),
                "order_id": str(notification.order_id),
                "attempts": notification.attempts,
            },
        )
        return False

    notification.status = OrderNotification.STATUS_SENT
    notification.last_error = ""
    notification.sent_at = timezone.now()
    notification.save(update_fields=["status", "attempts", "last_error", "sent_at"])

    logger.info(
        "Order confirmation email sent",
        extra={"notification_id": str(notification.pk), "order_id": str(notification.order_id)},
    )
    return True


def retry_pending(*, limit: int | None = None) -> dict:
    """
    Re-deliver pending/failed notifications below the attempt ceiling.
    """
    qs = OrderNotification.objects.filter(
        status__in=[OrderNotification.STATUS_PENDING, OrderNotification.STATUS_FAILED],
        attempts__lt=settings.NOTIFICATIONS_MAX_ATTEMPTS,
    ).order_by("created_at")
    if limit:
        qs = qs[:limit]

    summary = {"sent": 0, "failed": 0}
    for notification_id in list(qs.values_list("pk", flat=True)):
        if deliver(notification_id):
            summary["sent"] += 1
        else:
            summary["failed"] += 1
    return summary
