"""Order e-mails.

Both messages are rendered from Django templates (HTML + plain text) and
sent through Django's mail framework, so the backend and timeout come
from ``EMAIL_*`` settings.  Sending errors propagate to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from modules.orders.models import Order

logger = structlog.get_logger(__name__)

OWNER_TEMPLATE = "notifications/owner_notification"
CUSTOMER_TEMPLATE = "notifications/customer_confirmation"


def paypal_link(order: Order) -> Optional[str]:
    """``PAYPAL_ME_URL/<total>``, or ``None`` when no PayPal.me URL is set."""
    base = (settings.PAYPAL_ME_URL or "").rstrip("/")
    if not base:
        return None
    return f"{base}/{order.total:.2f}"


def _context(order: Order, **extra: Any) -> Dict[str, Any]:
    context = {
        "order": order,
        "items": list(order.items.all()),
        "shipping": order.shipping or {},
        "address": order.shipping_address,
        "shipping_amount": order.shipping_amount,
        "currency": (order.shipping or {}).get("currency") or "AUD",
        "shop_name": settings.SHOP_NAME,
        "owner_email": settings.OWNER_EMAIL,
    }
    context.update(extra)
    return context


def _send(template: str, subject: str, to: str, context: Dict[str, Any]) -> None:
    message = EmailMultiAlternatives(
        subject=subject,
        body=render_to_string(f"{template}.txt", context),
        from_email=f"{settings.SHOP_NAME} <{settings.DEFAULT_FROM_EMAIL}>",
        to=[to],
    )
    message.attach_alternative(render_to_string(f"{template}.html", context), "text/html")
    message.send(fail_silently=False)


def send_owner_notification(order: Order) -> bool:
    """Tell the shop owner about a new order.

    Returns ``False`` without sending when ``OWNER_EMAIL`` is not set.
    """
    if not settings.OWNER_EMAIL:
        logger.warning("notification.owner_email_missing", order_id=order.order_id)
        return False

    _send(
        OWNER_TEMPLATE,
        f"New Order #{order.order_id} - ${order.total:.2f}",
        settings.OWNER_EMAIL,
        _context(order),
    )
    return True


def send_customer_confirmation(order: Order) -> bool:
    """Send the order confirmation with payment instructions."""
    _send(
        CUSTOMER_TEMPLATE,
        f"Order Confirmed - #{order.order_id} - {settings.SHOP_NAME}",
        order.customer_email,
        _context(order, paypal_url=paypal_link(order)),
    )
    return True
