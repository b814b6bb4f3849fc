# notifications/tests/test_dispatch.py

import smtplib
from io import StringIO
from unittest import mock

from django.core import mail
from django.core.management import call_command
from django.test import TestCase, TransactionTestCase, override_settings

from cart.services import cart_service
from common.exceptions import InsufficientStockError
from common.factories import make_product, make_user
from notifications.models import OrderNotification
from notifications.services.dispatcher import deliver, dispatch, retry_pending
from orders.models import Order
from orders.services.checkout import place_order

SMTP_SEND = "django.core.mail.EmailMultiAlternatives.send"


@override_settings(NOTIFICATIONS_ASYNC=False, NOTIFICATIONS_MAX_ATTEMPTS=3)
class OrderConfirmationTests(TestCase):
    """
    Confirmation email (outbox + dispatcher).

    GUARANTEES:
    - the outbox row commits with the order
    - the email goes out after commit, never before
    - a failing transport is recorded and logged, the order stays intact
    """

    def setUp(self):
        self.user = make_user(email="shopper@example.com", name="Shopper")
        self.tee = make_product(name="Tee", price="12.50", stock=5, sizes=("M",))
        cart_service.add_item(user=self.user, product_id=self.tee.id, size="M", quantity=2)

    def test_email_sent_after_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            order = place_order(user=self.user)

        notification = OrderNotification.objects.get(order=order)
        self.assertEqual(notification.status, OrderNotification.STATUS_PENDING)
        self.assertEqual(len(mail.outbox), 0)

        for callback in callbacks:
            callback()

        notification.refresh_from_db()
        self.assertEqual(notification.status, OrderNotification.STATUS_SENT)
        self.assertEqual(notification.attempts, 1)
        self.assertIsNotNone(notification.sent_at)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ["shopper@example.com"])
        self.assertIn(order.order_no, message.subject)
        self.assertIn("Tee", message.body)
        self.assertIn("25.00", message.body)
        self.assertEqual(message.alternatives[0][1], "text/html")

    def test_transport_failure_does_not_affect_order(self):
        with mock.patch(SMTP_SEND, side_effect=smtplib.SMTPException("relay down")):
            with self.assertLogs("notifications.services.dispatcher", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    order = place_order(user=self.user)

        self.assertTrue(Order.objects.filter(pk=order.pk).exists())
        self.tee.refresh_from_db()
        self.assertEqual(self.tee.stock, 3)

        notification = OrderNotification.objects.get(order=order)
        self.assertEqual(notification.status, OrderNotification.STATUS_FAILED)
        self.assertIn("relay down", notification.last_error)

    def test_unexpected_send_error_does_not_fail_checkout(self):
        with mock.patch(SMTP_SEND, side_effect=RuntimeError("provider 500")):
            with self.assertLogs("notifications.services.dispatcher", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    order = place_order(user=self.user)

        self.assertEqual(Order.objects.count(), 1)
        self.tee.refresh_from_db()
        self.assertEqual(self.tee.stock, 3)
        self.assertTrue(cart_service.load_cart(user=self.user).is_empty)

        notification = OrderNotification.objects.get(order=order)
        self.assertEqual(notification.status, OrderNotification.STATUS_FAILED)
        self.assertEqual(notification.attempts, 1)
        self.assertIn("provider 500", notification.last_error)

        # still eligible for the retry command
        self.assertEqual(retry_pending(), {"sent": 1, "failed": 0})
        self.assertEqual(len(mail.outbox), 1)

    def test_delivery_crash_is_logged_not_raised(self):
        order = place_order(user=self.user)
        notification = OrderNotification.objects.get(order=order)

        with mock.patch(
            "notifications.services.dispatcher.deliver",
            side_effect=RuntimeError("database went away"),
        ):
            with self.assertLogs("notifications.services.dispatcher", level="ERROR") as logs:
                dispatch(notification.pk)

        self.assertIn("Notification delivery crashed", logs.output[0])
        notification.refresh_from_db()
        self.assertEqual(notification.status, OrderNotification.STATUS_PENDING)

    def test_rolled_back_checkout_writes_no_notification(self):
        self.tee.stock = 1
        self.tee.save(update_fields=["stock"])

        with self.assertRaises(InsufficientStockError):
            place_order(user=self.user)

        self.assertFalse(OrderNotification.objects.exists())

    def test_retry_pending_until_sent(self):
        with mock.patch(SMTP_SEND, side_effect=OSError("connection refused")):
            with self.captureOnCommitCallbacks(execute=True):
                order = place_order(user=self.user)

        summary = retry_pending()
        self.assertEqual(summary, {"sent": 1, "failed": 0})

        notification = OrderNotification.objects.get(order=order)
        self.assertEqual(notification.status, OrderNotification.STATUS_SENT)
        self.assertEqual(notification.attempts, 2)
        self.assertEqual(len(mail.outbox), 1)

        # already sent: nothing left to retry, no duplicate email
        self.assertEqual(retry_pending(), {"sent": 0, "failed": 0})
        self.assertTrue(deliver(notification.pk))
        self.assertEqual(len(mail.outbox), 1)

    def test_retry_respects_max_attempts(self):
        order = place_order(user=self.user)
        OrderNotification.objects.filter(order=order).update(
            status=OrderNotification.STATUS_FAILED,
            attempts=3,
        )

        self.assertEqual(retry_pending(), {"sent": 0, "failed": 0})
        self.assertEqual(len(mail.outbox), 0)

    def test_management_command(self):
        place_order(user=self.user)

        out = StringIO()
        call_command("send_pending_notifications", stdout=out)

        self.assertIn("sent=1", out.getvalue())
        self.assertEqual(len(mail.outbox), 1)


@override_settings(NOTIFICATIONS_ASYNC=False)
class InlineDeliveryAfterRealCommitTests(TransactionTestCase):
    def test_send_error_after_commit_returns_the_order(self):
        user = make_user(email="buyer@example.com")
        product = make_product(name="Scarf", price="15.00", stock=2, sizes=("OS",))
        cart_service.add_item(user=user, product_id=product.id, size="OS", quantity=1)

        with mock.patch(SMTP_SEND, side_effect=RuntimeError("provider 500")):
            with self.assertLogs("notifications.services.dispatcher", level="ERROR"):
                order = place_order(user=user)

        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(
            OrderNotification.objects.get(order=order).status,
            OrderNotification.STATUS_FAILED,
        )
