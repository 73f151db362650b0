"""Unit tests for QuoteService."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.catalog.exceptions import CatalogSourceError
from modules.shipping.dtos import Address, QuoteItemDTO, ShippingQuote
from modules.shipping.exceptions import ShippingUpstreamError
from modules.shipping.services import QuoteService

pytestmark = pytest.mark.unit

DESTINATION = Address(country="US")


@pytest.fixture()
def rate_client():
    client = MagicMock()
    client.quote.return_value = [
        ShippingQuote(id="r1", provider="UPS", amount=Decimal("11.00"))
    ]
    return client


class TestQuoteService:
    def test_quotes_parcel_derived_from_items(self, rate_client):
        service = QuoteService(rate_client=rate_client)

        quotes = service.quote(
            [QuoteItemDTO(category="plastic-kit", quantity=2)], DESTINATION
        )

        assert quotes[0].id == "r1"
        destination, parcel = rate_client.quote.call_args.args
        assert destination == DESTINATION
        assert parcel.mass == Decimal("4.00")
        assert parcel.length == Decimal("60")

    def test_looks_up_category_for_items_without_one(self, rate_client):
        lookup = MagicMock(return_value="plastic-kit")
        service = QuoteService(rate_client=rate_client, category_lookup=lookup)

        service.quote([QuoteItemDTO(product_id="p9")], DESTINATION)

        lookup.assert_called_once_with("p9")
        _, parcel = rate_client.quote.call_args.args
        assert parcel.mass == Decimal("2.00")

    def test_explicit_category_skips_lookup(self, rate_client):
        lookup = MagicMock()
        service = QuoteService(rate_client=rate_client, category_lookup=lookup)

        service.quote([QuoteItemDTO(category="seat-cover", product_id="p4")], DESTINATION)

        lookup.assert_not_called()

    def test_lookup_failure_falls_back_to_default_preset(self, rate_client):
        lookup = MagicMock(side_effect=CatalogSourceError("sheet down"))
        service = QuoteService(rate_client=rate_client, category_lookup=lookup)

        service.quote([QuoteItemDTO(product_id="p1")], DESTINATION)

        _, parcel = rate_client.quote.call_args.args
        assert parcel.mass == Decimal("0.20")

    def test_rate_client_errors_propagate(self, rate_client):
        rate_client.quote.side_effect = ShippingUpstreamError("boom")
        service = QuoteService(rate_client=rate_client)

        with pytest.raises(ShippingUpstreamError):
            service.quote([QuoteItemDTO(category="graphic-kit")], DESTINATION)
