"""Unit tests for the Shippo rate client.

Outbound HTTP is replaced by a mock session; no network access.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from modules.shipping.client import ShippoRateClient, apply_markup, sort_quotes
from modules.shipping.dtos import Address, Parcel, ShippingQuote
from modules.shipping.exceptions import ShippingNotConfigured, ShippingUpstreamError

pytestmark = pytest.mark.unit

DESTINATION = Address(street1="1 Track Rd", city="Austin", state="TX", zip="78701", country="US")
PARCEL = Parcel(mass=Decimal("0.5"), length=Decimal("40"), width=Decimal("30"), height=Decimal("5"))


def _rate(object_id, provider, amount, status="SUCCESS", **extra):
    rate = {
        "object_id": object_id,
        "object_status": status,
        "provider": provider,
        "servicelevel": {"name": f"{provider} Ground"},
        "duration_terms": "2-5 days",
        "amount": amount,
        "currency": "USD",
    }
    rate.update(extra)
    return rate


def _response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = "upstream body"
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _client(session, **kwargs):
    params = {
        "api_key": "shippo_test_key",
        "base_url": "https://shippo.test",
        "origin": {"name": "Shop", "country": "AU"},
        "markup": Decimal("1.10"),
        "timeout": 5,
        "session": session,
    }
    params.update(kwargs)
    return ShippoRateClient(**params)


class TestApplyMarkup:
    def test_rounds_half_up_to_cents(self):
        assert apply_markup(Decimal("10.00"), Decimal("1.10")) == Decimal("11.00")
        assert apply_markup(Decimal("7.35"), Decimal("1.10")) == Decimal("8.09")
        assert apply_markup(Decimal("0.05"), Decimal("1.10")) == Decimal("0.06")

    def test_sort_breaks_ties_by_provider(self):
        quotes = [
            ShippingQuote(id="1", provider="USPS", amount=Decimal("9.00")),
            ShippingQuote(id="2", provider="DHL", amount=Decimal("9.00")),
            ShippingQuote(id="3", provider="UPS", amount=Decimal("4.00")),
        ]

        assert [q.id for q in sort_quotes(quotes)] == ["3", "2", "1"]


class TestShippoRateClient:
    def test_returns_marked_up_sorted_quotes(self):
        session = MagicMock()
        session.post.return_value = _response(
            payload={
                "rates": [
                    _rate("r1", "USPS", "20.00"),
                    _rate("r2", "UPS", "10.00"),
                    _rate("r3", "DHL", "15.50", status="ERROR"),
                ]
            }
        )

        quotes = _client(session).quote(DESTINATION, PARCEL)

        assert [q.id for q in quotes] == ["r2", "r1"]
        assert quotes[0].amount == Decimal("11.00")
        assert quotes[1].amount == Decimal("22.00")
        assert quotes[0].service_level == "UPS Ground"
        assert quotes[0].duration_terms == "2-5 days"
        assert quotes[0].currency == "USD"

    def test_sends_token_origin_destination_and_parcel(self):
        session = MagicMock()
        session.post.return_value = _response(payload={"rates": []})

        _client(session).quote(DESTINATION, PARCEL)

        args, kwargs = session.post.call_args
        assert args[0] == "https://shippo.test/shipments/"
        assert kwargs["headers"]["Authorization"] == "ShippoToken shippo_test_key"
        assert kwargs["timeout"] == 5
        body = kwargs["json"]
        assert body["address_from"] == {"name": "Shop", "country": "AU"}
        assert body["address_to"]["country"] == "US"
        assert body["parcels"] == [PARCEL.to_payload()]
        assert body["async"] is False

    def test_prefers_local_amount_and_currency(self):
        session = MagicMock()
        session.post.return_value = _response(
            payload={
                "rates": [
                    _rate("r1", "USPS", "10.00", amount_local="15.00", currency_local="AUD")
                ]
            }
        )

        [quote] = _client(session).quote(DESTINATION, PARCEL)

        assert quote.amount == Decimal("16.50")
        assert quote.currency == "AUD"

    def test_drops_rates_with_unparseable_amount(self):
        session = MagicMock()
        session.post.return_value = _response(
            payload={"rates": [_rate("bad", "USPS", "n/a"), _rate("ok", "UPS", "5.00")]}
        )

        quotes = _client(session).quote(DESTINATION, PARCEL)

        assert [q.id for q in quotes] == ["ok"]

    def test_empty_rate_list_is_not_an_error(self):
        session = MagicMock()
        session.post.return_value = _response(payload={"rates": []})

        assert _client(session).quote(DESTINATION, PARCEL) == []

    def test_missing_api_key_raises_not_configured(self):
        session = MagicMock()

        with pytest.raises(ShippingNotConfigured):
            _client(session, api_key="").quote(DESTINATION, PARCEL)
        session.post.assert_not_called()

    def test_non_2xx_raises_upstream_error(self):
        session = MagicMock()
        session.post.return_value = _response(status_code=401, payload={})

        with pytest.raises(ShippingUpstreamError, match="401"):
            _client(session).quote(DESTINATION, PARCEL)

    def test_timeout_raises_upstream_error(self):
        session = MagicMock()
        session.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(ShippingUpstreamError):
            _client(session).quote(DESTINATION, PARCEL)

    def test_unreadable_body_raises_upstream_error(self):
        session = MagicMock()
        session.post.return_value = _response(json_error=ValueError("not json"))

        with pytest.raises(ShippingUpstreamError):
            _client(session).quote(DESTINATION, PARCEL)

    def test_defaults_come_from_settings(self, settings):
        settings.SHIPPO_API_KEY = "from-settings"
        settings.SHIPPING_MARKUP = Decimal("1.25")
        session = MagicMock()
        session.post.return_value = _response(payload={"rates": [_rate("r1", "UPS", "8.00")]})

        client = ShippoRateClient(session=session)
        [quote] = client.quote(DESTINATION, PARCEL)

        assert client.is_configured
        assert quote.amount == Decimal("10.00")
