"""Fire-and-forget order notifications.

``notify`` only enqueues; delivery happens in Celery workers (inline when
``CELERY_TASK_ALWAYS_EAGER`` is on).  Nothing raised here reaches the
caller: an order that is stored stays a successful submission.
"""

from __future__ import annotations

import structlog

from modules.notifications import tasks
from modules.orders.models import Order

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Enqueues the owner and customer e-mails independently."""

    def __init__(self, task_list=None) -> None:
        self._tasks = task_list or (
            tasks.send_owner_notification,
            tasks.send_customer_confirmation,
        )

    def notify(self, order: Order) -> None:
        for task in self._tasks:
            try:
                task.delay(order.order_id)
            except Exception as exc:
                logger.error(
                    "notification.enqueue_failed",
                    order_id=order.order_id,
                    task=task.name,
                    error=str(exc),
                )
