"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.

Submission is public.  Listing, retrieval and status changes require
the admin token (the project-wide default permission).
"""

from __future__ import annotations

from typing import Optional

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny, BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.notifications.dispatcher import NotificationDispatcher
from modules.orders.exceptions import InvalidOrder, OrderNotFound, OrderStorageError
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

logger = structlog.get_logger(__name__)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repository and notifier (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    lookup_field = "order_id"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            notifier=NotificationDispatcher(),
        )

    def get_permissions(self) -> list[BasePermission]:
        if self.action == "create":
            return [AllowAny()]
        return super().get_permissions()

    def get_throttles(self) -> list[BaseThrottle]:
        """Scope throttling per action."""
        self.throttle_scope = "order_creation" if self.action == "create" else None
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Returns ``{"success": true, "orderId", "total"}``.  The total is
        computed server-side from the subtotal and the shipping amount.
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        if not create_serializer.is_valid():
            return Response(
                {
                    "detail": "Missing required order fields.",
                    "errors": create_serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = create_serializer.validated_data
        try:
            order = self._service.submit(
                customer=data["customer"],
                items=data["items"],
                shipping=data["shipping"],
                payment_method=data.get("paymentMethod"),
                subtotal=data.get("subtotal"),
            )
        except InvalidOrder as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except OrderStorageError:
            return Response(
                {"detail": "Failed to process order."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(
            {
                "success": True,
                "orderId": order.order_id,
                "total": f"{order.total:.2f}",
            },
            status=status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=<label>

        Newest first.  The whole list is returned; order volume for a
        single shop stays small.
        """
        orders = self._service.list_orders(
            status=request.query_params.get("status") or None
        )
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, order_id: Optional[str] = None) -> Response:
        """GET /api/v1/orders/{order_id}/"""
        try:
            order = self._service.get_order(order_id)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def partial_update(
        self, request: Request, order_id: Optional[str] = None
    ) -> Response:
        """PATCH /api/v1/orders/{order_id}/

        Sets the status label.  Any non-blank label is accepted.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        if not serializer.is_valid() or not serializer.validated_data["status"]:
            return Response(
                {"detail": "Field 'status' is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            order = self._service.transition(
                order_id, serializer.validated_data["status"]
            )
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidOrder as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except OrderStorageError:
            return Response(
                {"detail": "Failed to update order."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response({"success": True, "order": OrderSerializer(order).data})
