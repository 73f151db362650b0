"""Shared-secret permission for privileged endpoints.

Admin credentials are issued elsewhere; this service only compares the
``X-Admin-Token`` header against ``settings.ADMIN_SECRET``.
"""

from __future__ import annotations

import hmac

import structlog
from django.conf import settings
from rest_framework.permissions import BasePermission

logger = structlog.get_logger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


class HasAdminToken(BasePermission):
    """Allow the request only when it carries the configured admin secret."""

    message = "Unauthorized."

    def has_permission(self, request, view) -> bool:
        secret = getattr(settings, "ADMIN_SECRET", "")
        token = request.headers.get(ADMIN_TOKEN_HEADER, "")
        if not secret or not token:
            return False
        allowed = hmac.compare_digest(token.encode(), secret.encode())
        if not allowed:
            logger.warning("admin_token_rejected", path=request.path)
        return allowed
