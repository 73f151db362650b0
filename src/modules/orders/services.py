"""Order service layer (Use Cases).

Orchestrates order submission and status changes.

Rules enforced:
- A submission needs customer name + email, at least one item and a
  shipping selection.
- ``total`` is recomputed from subtotal + shipping amount; the client's
  figure is ignored.
- The order is durably stored before anything else happens.  Storage
  failure fails the submission and no notification is sent.
- Notifications are dispatched after storage and can never fail the
  submission.
- Status is an open label; every non-blank value is accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Protocol, Sequence

import structlog
from pydantic import ValidationError

from modules.orders.constants import STATUS_MAX_LENGTH
from modules.orders.dtos import SubmitOrderDTO
from modules.orders.exceptions import InvalidOrder

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderNotifier(Protocol):
    def notify(self, order: Order) -> None: ...


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    message = error.get("msg", "Invalid order.")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {message}" if location else message


class OrderService:
    """Application service for Order use-cases.

    Receives the repository and the notifier via constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        notifier: Optional[OrderNotifier] = None,
    ) -> None:
        self._order_repo = order_repository
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit(
        self,
        customer: Optional[Mapping[str, Any]],
        items: Optional[Sequence[Mapping[str, Any]]],
        shipping: Optional[Mapping[str, Any]],
        payment_method: Optional[str] = None,
        subtotal: Any = None,
    ) -> Order:
        """Validate, price and persist a new order, then notify.

        Raises:
            InvalidOrder: customer name/email missing, no items, no
                shipping selection, or a malformed item.
            OrderStorageError: the order could not be persisted.
        """
        if not customer or not items or not shipping:
            raise InvalidOrder("Missing required order fields.")

        try:
            dto = SubmitOrderDTO.model_validate(
                {
                    "customer": customer,
                    "items": items,
                    "shipping": shipping,
                    "payment_method": payment_method,
                    "subtotal": subtotal,
                }
            )
        except ValidationError as exc:
            logger.info("order.rejected", reason=_describe(exc))
            raise InvalidOrder(_describe(exc)) from exc

        log = logger.bind(
            customer_email=dto.customer.email,
            item_count=len(dto.items),
        )
        log.info("order.submission_started")

        order = self._order_repo.append(
            {
                "customer_name": dto.customer.name,
                "customer_email": dto.customer.email,
                "customer_phone": dto.customer.phone or "",
                "items": [
                    {
                        "product_id": item.product_id,
                        "name": item.name,
                        "unit_price": item.unit_price,
                        "quantity": item.quantity,
                        "category": item.category or "",
                        "fitment_make": item.make or "",
                        "fitment_model": item.model or "",
                        "fitment_year": item.year or "",
                    }
                    for item in dto.items
                ],
                "shipping": dto.shipping.to_snapshot(),
                "payment_method": dto.payment_method,
                "subtotal": dto.subtotal,
                "total": dto.total,
            }
        )

        log.info("order.submitted", order_id=order.order_id, total=str(order.total))
        if self._notifier is not None:
            self._notifier.notify(order)
        return order

    def transition(self, order_id: str, new_status: Any) -> Order:
        """Set the status label of an order.

        No transition table is applied; any non-blank label is stored.

        Raises:
            InvalidOrder: the status is blank, not text, or too long.
            OrderNotFound: no order has ``order_id``.
        """
        if not isinstance(new_status, str) or not new_status.strip():
            raise InvalidOrder("Field 'status' is required.")
        status = new_status.strip()
        if len(status) > STATUS_MAX_LENGTH:
            raise InvalidOrder(
                f"Status must be at most {STATUS_MAX_LENGTH} characters."
            )

        order = self._order_repo.update(order_id, {"status": status})
        logger.info("order.status_updated", order_id=order_id, new_status=status)
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` if the order does not exist."""
        return self._order_repo.find(order_id)

    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        """Return every order, newest first, optionally filtered by status."""
        filters = {"status": status} if status else None
        return self._order_repo.list(filters)
