"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.

Output keys are camelCase, matching what the storefront and the admin
page read.  Amounts are rendered as decimal strings.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Shape check for the order submission payload.

    Field-level rules (blank name, bad quantity, money parsing) are
    applied by ``SubmitOrderDTO`` in the service layer.
    """

    customer = serializers.DictField()
    items = serializers.ListField(child=serializers.DictField(), allow_empty=False)
    shipping = serializers.DictField()
    paymentMethod = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    subtotal = serializers.JSONField(required=False, allow_null=True)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField(allow_blank=True, trim_whitespace=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order item snapshots."""

    productId = serializers.CharField(source="product_id", read_only=True)
    price = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )
    make = serializers.CharField(source="fitment_make", read_only=True)
    model = serializers.CharField(source="fitment_model", read_only=True)
    year = serializers.CharField(source="fitment_year", read_only=True)
    lineTotal = serializers.DecimalField(
        source="line_total", max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "productId",
            "name",
            "price",
            "quantity",
            "make",
            "model",
            "year",
            "category",
            "lineTotal",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    orderId = serializers.CharField(source="order_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    customer = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)
    shipping = serializers.JSONField(read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)

    class Meta:
        model = Order
        fields = [
            "orderId",
            "createdAt",
            "status",
            "customer",
            "items",
            "shipping",
            "paymentMethod",
            "subtotal",
            "total",
        ]
        read_only_fields = fields

    def get_customer(self, obj: Order) -> dict:
        return {
            "name": obj.customer_name,
            "email": obj.customer_email,
            "phone": obj.customer_phone,
        }
