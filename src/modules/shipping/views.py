"""Shipping API views.

``POST /api/v1/quote/`` returns marked-up carrier quotes for a cart.
Domain exceptions are translated into HTTP status codes here.
"""

from __future__ import annotations

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.catalog.services import find_product_category
from modules.shipping.client import ShippoRateClient
from modules.shipping.dtos import Address, QuoteItemDTO
from modules.shipping.exceptions import ShippingNotConfigured, ShippingUpstreamError
from modules.shipping.serializers import QuoteRequestSerializer, ShippingQuoteSerializer
from modules.shipping.services import QuoteService

logger = structlog.get_logger(__name__)


class QuoteView(APIView):
    """Public endpoint used by the checkout drawer."""

    permission_classes = [AllowAny]
    throttle_scope = "shipping_quote"

    def post(self, request: Request) -> Response:
        serializer = QuoteRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    "detail": "destination and items are required.",
                    "errors": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = serializer.validated_data
        destination = Address(**data["destination"])
        items = [
            QuoteItemDTO(
                category=item.get("category") or None,
                quantity=item.get("quantity", item.get("qty", 1)),
                product_id=item.get("productId") or None,
            )
            for item in data["items"]
        ]

        service = QuoteService(
            rate_client=ShippoRateClient(),
            category_lookup=find_product_category,
        )
        try:
            quotes = service.quote(items, destination)
        except ShippingNotConfigured:
            return Response(
                {"detail": "Shipping not configured."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        except ShippingUpstreamError as exc:
            logger.error("shipping.quote_failed", error=str(exc))
            return Response(
                {"detail": "Could not fetch shipping rates. Please try again."},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response({"quotes": ShippingQuoteSerializer(quotes, many=True).data})
