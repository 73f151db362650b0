"""Operational endpoints: liveness/readiness and public storefront config."""

import time
from typing import Any, Callable, Dict

import structlog
from django.conf import settings
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

logger = structlog.get_logger()


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


def _probe(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception as exc:
        logger.error("health_check.dependency_down", dependency=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Database and cache reachability; 503 when either is down."""
    services = {
        "database": _probe("database", _check_database),
        "cache": _probe("cache", _check_cache),
    }
    healthy = all(s["status"] == "up" for s in services.values())
    status_label = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=status_label)
    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


class PublicConfigView(APIView):
    """Non-sensitive settings the storefront needs at page load."""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        return Response({"paypalMeUrl": settings.PAYPAL_ME_URL})
