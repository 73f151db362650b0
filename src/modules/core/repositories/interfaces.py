"""Base repository contract.

Services talk to ``IRepository[T]`` subclasses and never to the ORM, so
tests can hand them an in-memory or mocked implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Lookup and listing by public identifier for aggregate ``T``."""

    @abstractmethod
    def find(self, id: str) -> T:
        """Return the entity or raise the owning module's ``NotFound`` subclass."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """Return entities matching ``filters`` (field -> value equality)."""
