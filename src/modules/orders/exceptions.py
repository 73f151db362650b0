"""Order domain exceptions.

Raised by the Service Layer and the repository.  The API layer (Views)
catches these and translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFound, StorageError, ValidationFailed


class InvalidOrder(ValidationFailed):
    """The submission lacks customer name/email, items or shipping, or a
    field is malformed."""


class OrderNotFound(NotFound):
    """No order carries the requested public identifier."""


class OrderStorageError(StorageError):
    """The order could not be persisted; the caller must not assume it was saved."""
