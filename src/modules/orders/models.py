"""Order and OrderItem models.

- ``order_id`` is the public, human-legible identifier
  (``<PREFIX>-XXXXXXXX``), generated once on first save and never changed.
  The UUIDv7 ``id`` stays internal.
- ``total`` is always ``subtotal + shipping amount``, computed by the
  service layer; a client-supplied total is never stored.
- ``status`` is free text (see ``constants``).
- ``shipping`` is a snapshot of the quote the customer picked; the live
  quote is not kept.
- OrderItem snapshots name and unit price at order time.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.core.money import to_money
from modules.orders.constants import (
    DEFAULT_PAYMENT_METHOD,
    ORDER_ID_MAX_RETRIES,
    ORDER_ID_RANDOM_BYTES,
    STATUS_MAX_LENGTH,
    OrderStatus,
)
from modules.orders.exceptions import OrderStorageError

logger = structlog.get_logger(__name__)


class Order(BaseModel):
    """Order aggregate root."""

    order_id: models.CharField = models.CharField(
        max_length=32, unique=True, editable=False
    )
    status: models.CharField = models.CharField(
        max_length=STATUS_MAX_LENGTH,
        default=OrderStatus.PENDING,
    )
    customer_name: models.CharField = models.CharField(max_length=200)
    customer_email: models.CharField = models.CharField(max_length=254)
    customer_phone: models.CharField = models.CharField(
        max_length=50, blank=True, default=""
    )
    shipping: models.JSONField = models.JSONField(default=dict)
    payment_method: models.CharField = models.CharField(
        max_length=100, default=DEFAULT_PAYMENT_METHOD
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    total: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def shipping_amount(self) -> Decimal:
        return to_money((self.shipping or {}).get("amount"))

    @property
    def shipping_address(self) -> dict:
        return (self.shipping or {}).get("address") or {}

    @property
    def customer_first_name(self) -> str:
        parts = self.customer_name.split()
        return parts[0] if parts else self.customer_name

    # ------------------------------------------------------------------
    # Order id generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_id() -> str:
        """Generate a public identifier: ``GRX-1A2B3C4D``."""
        suffix = secrets.token_hex(ORDER_ID_RANDOM_BYTES).upper()
        return f"{settings.ORDER_ID_PREFIX}-{suffix}"

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_id:
            for attempt in range(ORDER_ID_MAX_RETRIES):
                candidate = self.generate_order_id()
                if not Order.objects.filter(order_id=candidate).exists():
                    self.order_id = candidate
                    break
                logger.warning("order.id_collision", attempt=attempt + 1)
            else:
                raise OrderStorageError(
                    f"Failed to generate unique order_id after "
                    f"{ORDER_ID_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.order_id} ({self.status})"


class OrderItem(BaseModel):
    """Line item owned by exactly one Order.

    ``product_id`` is the catalog id or SKU as sent by the storefront;
    items are snapshots and do not reference catalog rows.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product_id: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    name: models.CharField = models.CharField(max_length=255, blank=True, default="")
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    category: models.CharField = models.CharField(max_length=50, blank=True, default="")
    fitment_make: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    fitment_model: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    fitment_year: models.CharField = models.CharField(
        max_length=20, blank=True, default=""
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def fitment(self) -> str:
        return " ".join(
            part for part in (self.fitment_make, self.fitment_model, self.fitment_year) if part
        )

    def __str__(self) -> str:
        return f"{self.name or self.product_id} x{self.quantity}"
