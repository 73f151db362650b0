"""Error taxonomy shared by every module.

Each bounded context raises its own subclasses; the API layer maps the
base classes onto HTTP status codes:

- ``ValidationFailed``   -> 400 (client error, never retried)
- ``NotFound``           -> 404
- ``UpstreamError``      -> 502 (external API / catalog source failed)
- ``ConfigurationError`` -> 503 (a required credential is missing)
- ``StorageError``       -> 503 (durable write failed, nothing was saved)
"""

from __future__ import annotations


class ValidationFailed(Exception):
    """A request is missing required fields or carries malformed ones."""


class NotFound(Exception):
    """A lookup by identifier matched nothing."""


class UpstreamError(Exception):
    """An external dependency failed or answered with an error."""


class ConfigurationError(Exception):
    """A required external credential or setting is absent."""


class StorageError(Exception):
    """A durable write did not complete."""
