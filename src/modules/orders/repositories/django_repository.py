"""Django ORM implementation of the Order repository.

Each order is its own row, so appends never rewrite other orders.
Creation runs in ``transaction.atomic()`` (order + items together) and
updates take a row lock with ``select_for_update()``.  Database errors
surface as ``OrderStorageError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.orders.exceptions import OrderNotFound, OrderStorageError
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def append(self, data: Dict[str, Any]) -> Order:
        items = data.get("items", [])
        try:
            with transaction.atomic():
                order = Order(
                    customer_name=data["customer_name"],
                    customer_email=data["customer_email"],
                    customer_phone=data.get("customer_phone") or "",
                    shipping=data.get("shipping") or {},
                    payment_method=data["payment_method"],
                    subtotal=data["subtotal"],
                    total=data["total"],
                )
                order.save()
                OrderItem.objects.bulk_create(
                    [OrderItem(order=order, **item_data) for item_data in items]
                )
        except DatabaseError as exc:
            logger.error("order.persist_failed", error=str(exc))
            raise OrderStorageError("Order could not be saved.") from exc

        logger.info(
            "order.persisted", order_id=order.order_id, item_count=len(items)
        )
        return self.find(order.order_id)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, order_id: str, data: Dict[str, Any]) -> Order:
        try:
            with transaction.atomic():
                order = (
                    Order.objects.select_for_update().filter(order_id=order_id).first()
                )
                if not order:
                    raise OrderNotFound(f"Order {order_id} not found.")

                previous = {field: getattr(order, field) for field in data}
                for field, value in data.items():
                    setattr(order, field, value)
                order.save(update_fields=list(data))
        except DatabaseError as exc:
            logger.error("order.update_failed", order_id=order_id, error=str(exc))
            raise OrderStorageError(f"Order {order_id} could not be updated.") from exc

        logger.info(
            "order.updated",
            order_id=order_id,
            changes={
                field: [str(previous[field]), str(value)]
                for field, value in data.items()
            },
        )
        return self.find(order_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find(self, order_id: str) -> Order:
        order = (
            Order.objects.prefetch_related("items").filter(order_id=order_id).first()
        )
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders (newest first) with items prefetched.

        Supported filter keys:
        - ``status``
        - ``customer_email``
        """
        queryset = Order.objects.prefetch_related("items")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)
