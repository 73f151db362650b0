"""Shipping domain exceptions.

Raised by the rate client when quoting cannot complete.  The API layer
translates them into 503 (not configured) and 502 (upstream failure).
"""

from __future__ import annotations

from modules.core.exceptions import ConfigurationError, UpstreamError


class ShippingNotConfigured(ConfigurationError):
    """No carrier API credential is configured."""


class ShippingUpstreamError(UpstreamError):
    """The carrier API failed, timed out, or answered with an error status."""
