"""Asynchronous notification tasks.

Each e-mail is its own task so one failing never blocks the other.
Failures are logged and returned as the task result; tasks are not
retried and never raise.
"""

from typing import Callable, Dict

import structlog
from celery import shared_task
from django.conf import settings

from modules.notifications import mailer
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository

logger = structlog.get_logger(__name__)


def _deliver(kind: str, send: Callable[[Order], bool], order_id: str) -> Dict[str, str]:
    log = logger.bind(order_id=order_id, notification=kind)
    try:
        order = OrderDjangoRepository().find(order_id)
        sent = send(order)
    except Exception as exc:
        log.error("notification.failed", error=str(exc), error_type=type(exc).__name__)
        return {"status": "failed", "order_id": order_id, "error": str(exc)}

    if not sent:
        log.info("notification.skipped")
        return {"status": "skipped", "order_id": order_id}

    log.info("notification.sent")
    return {"status": "sent", "order_id": order_id}


@shared_task(
    name="notifications.send_owner_notification",
    soft_time_limit=settings.NOTIFICATION_TIME_LIMIT,
)
def send_owner_notification(order_id: str) -> Dict[str, str]:
    """E-mail the shop owner about a new order."""
    return _deliver("owner", mailer.send_owner_notification, order_id)


@shared_task(
    name="notifications.send_customer_confirmation",
    soft_time_limit=settings.NOTIFICATION_TIME_LIMIT,
)
def send_customer_confirmation(order_id: str) -> Dict[str, str]:
    """E-mail the customer their confirmation and payment instructions."""
    return _deliver("customer", mailer.send_customer_confirmation, order_id)
