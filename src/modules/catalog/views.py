"""Catalog API views.

Product and gallery reads are public; the refresh endpoint is privileged.
"""

from __future__ import annotations

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.catalog.exceptions import CatalogSourceError
from modules.catalog.services import get_gallery, get_products, refresh_catalog

logger = structlog.get_logger(__name__)


class ProductListView(APIView):
    """GET /api/v1/catalog/products/"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        try:
            products = get_products()
        except CatalogSourceError as exc:
            logger.error("catalog.products_unavailable", error=str(exc))
            return Response(
                {"detail": "Could not load products."},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response({"products": products})


class GalleryListView(APIView):
    """GET /api/v1/catalog/gallery/"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        try:
            gallery = get_gallery()
        except CatalogSourceError as exc:
            logger.error("catalog.gallery_unavailable", error=str(exc))
            return Response(
                {"detail": "Could not load gallery."},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response({"gallery": gallery})


class CatalogRefreshView(APIView):
    """POST /api/v1/catalog/refresh/

    Drops cached snapshots so the next read goes to the spreadsheet.
    Optional body ``{"dataset": "products" | "gallery"}``.
    """

    def post(self, request: Request) -> Response:
        dataset = request.data.get("dataset") if hasattr(request.data, "get") else None
        try:
            refreshed = refresh_catalog(dataset or None)
        except KeyError:
            return Response(
                {"detail": f"Unknown dataset {dataset!r}."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"success": True, "datasets": refreshed})
