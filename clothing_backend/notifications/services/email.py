# notifications/services/email.py

"""
ORDER EMAILS

Renders the confirmation from templates and hands it to Django's configured
email backend (SMTP in production, console in dev, locmem under tests).
Transport failures surface as UpstreamNotificationError.
"""

from __future__ import annotations

import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from common.exceptions import UpstreamNotificationError


def build_order_context(order) -> dict:
    return {
        "order": order,
        "items": list(order.items.all()),
        "customer_name": order.user.display_name,
        "store_name": settings.STORE_NAME,
        "frontend_base_url": settings.FRONTEND_BASE_URL,
    }


def send_order_confirmation(*, order, recipient: str) -> None:
    context = build_order_context(order)

    subject = f"Order Confirmation - #{order.order_no}"
    text_body = render_to_string("notifications/order_confirmation.txt", context)
    html_body = render_to_string("notifications/order_confirmation.html", context)

    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient],
    )
    message.attach_alternative(html_body, "text/html")

    try:
        message.send(fail_silently=False)
    except (smtplib.SMTPException, OSError) as exc:
        raise UpstreamNotificationError(f"Failed to send order confirmation email: {exc}") from exc
