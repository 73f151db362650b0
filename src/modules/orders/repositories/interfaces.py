"""Order repository interface.

Extends ``IRepository[Order]`` with the mutations the Order aggregate
needs: atomic creation with items and field updates under a row lock.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Every mutation
    is atomic and serialized per order, so concurrent submissions and
    status changes never overwrite each other.
    """

    @abstractmethod
    def append(self, data: Dict[str, Any]) -> Order:
        """Persist a new order with its items atomically.

        ``data`` keys: ``customer_name``, ``customer_email``,
        ``customer_phone``, ``items`` (list of dicts), ``shipping``
        (snapshot dict), ``payment_method``, ``subtotal``, ``total``.

        Raises ``OrderStorageError`` when nothing could be saved.
        """

    @abstractmethod
    def update(self, order_id: str, data: Dict[str, Any]) -> Order:
        """Update fields of an existing order (e.g. ``status``).

        Raises ``OrderNotFound`` for unknown ids.
        """

    @abstractmethod
    def find(self, order_id: str) -> Order:
        """Retrieve an order with its items, or raise ``OrderNotFound``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders, newest first, with optional filters."""
