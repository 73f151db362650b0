"""Shipping DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddressSerializer(serializers.Serializer):
    """Validates a destination address.  Only ``country`` is mandatory."""

    name = serializers.CharField(required=False, allow_blank=True, default="")
    street1 = serializers.CharField(required=False, allow_blank=True, default="")
    street2 = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    city = serializers.CharField(required=False, allow_blank=True, default="")
    state = serializers.CharField(required=False, allow_blank=True, default="")
    zip = serializers.CharField(required=False, allow_blank=True, default="")
    country = serializers.CharField()
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class QuoteItemSerializer(serializers.Serializer):
    """Validates a single cart line for quoting.

    The storefront cart sends ``qty``; ``quantity`` is accepted as well.
    """

    category = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=None
    )
    quantity = serializers.IntegerField(required=False, min_value=1)
    qty = serializers.IntegerField(required=False, min_value=1)
    productId = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=None
    )


class QuoteRequestSerializer(serializers.Serializer):
    """Validates the quote request payload."""

    destination = AddressSerializer()
    items = QuoteItemSerializer(many=True, allow_empty=False)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class ShippingQuoteSerializer(serializers.Serializer):
    id = serializers.CharField()
    provider = serializers.CharField()
    serviceLevel = serializers.CharField(source="service_level")
    durationTerms = serializers.CharField(source="duration_terms", allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
