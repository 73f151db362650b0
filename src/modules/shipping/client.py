"""Shippo rate client.

Requests live rates for one parcel between the configured origin and a
destination address.  One synchronous round trip with a bounded timeout
and no retry: a failed quote is reported to the shopper, who can ask
again.

Every surviving rate gets the shop markup (default x1.10, rounded
half-up to cents).  Carrier legs the API marks as failed are dropped.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests
import structlog
from django.conf import settings

from modules.core.money import parse_amount, quantize
from modules.shipping.constants import RATE_SUCCESS_STATUS
from modules.shipping.dtos import Address, Parcel, ShippingQuote
from modules.shipping.exceptions import ShippingNotConfigured, ShippingUpstreamError

logger = structlog.get_logger(__name__)


def apply_markup(amount: Decimal, markup: Decimal) -> Decimal:
    """Return ``amount * markup`` rounded half-up to two decimal places."""
    return quantize(amount * markup)


def sort_quotes(quotes: Iterable[ShippingQuote]) -> List[ShippingQuote]:
    """Cheapest first; equal amounts ordered by provider name."""
    return sorted(quotes, key=lambda q: (q.amount, q.provider))


class ShippoRateClient:
    """Thin client over ``POST /shipments/`` of the Shippo REST API.

    Every constructor argument defaults to the matching Django setting,
    so views build it with no arguments and tests inject what they need.
    ``session`` is anything with a ``requests``-compatible ``post``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        origin: Optional[Mapping[str, Any]] = None,
        markup: Optional[Decimal] = None,
        timeout: Optional[float] = None,
        session: Any = None,
    ) -> None:
        self._api_key = settings.SHIPPO_API_KEY if api_key is None else api_key
        self._base_url = (base_url or settings.SHIPPO_API_URL).rstrip("/")
        self._origin = dict(settings.SHIPPING_ORIGIN if origin is None else origin)
        self._markup = Decimal(
            str(settings.SHIPPING_MARKUP if markup is None else markup)
        )
        self._timeout = settings.SHIPPING_TIMEOUT if timeout is None else timeout
        self._http = session or requests

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def quote(self, destination: Address, parcel: Parcel) -> List[ShippingQuote]:
        """Fetch, mark up and sort rates for ``parcel`` shipped to ``destination``.

        Raises:
            ShippingNotConfigured: no API key is configured.
            ShippingUpstreamError: network failure, timeout, non-2xx status
                or an unreadable response body.
        """
        if not self.is_configured:
            raise ShippingNotConfigured("Shipping not configured.")

        log = logger.bind(
            destination_country=destination.country,
            parcel_mass=str(parcel.mass),
        )
        body = {
            "address_from": self._origin,
            "address_to": destination.to_payload(),
            "parcels": [parcel.to_payload()],
            "async": False,
        }

        try:
            response = self._http.post(
                f"{self._base_url}/shipments/",
                json=body,
                headers={
                    "Authorization": f"ShippoToken {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            log.warning("shipping.request_failed", error=str(exc))
            raise ShippingUpstreamError(f"Shippo request failed: {exc}") from exc

        if not response.ok:
            log.warning(
                "shipping.upstream_error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ShippingUpstreamError(f"Shippo error {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            log.warning("shipping.invalid_body")
            raise ShippingUpstreamError("Shippo returned an unreadable body.") from exc
        if not isinstance(data, dict):
            raise ShippingUpstreamError("Shippo returned an unexpected body.")

        rates = data.get("rates") or []
        quotes = [
            quote
            for quote in (self._to_quote(rate) for rate in rates)
            if quote is not None
        ]
        log.info(
            "shipping.quoted",
            rate_count=len(rates),
            quote_count=len(quotes),
        )
        return sort_quotes(quotes)

    def _to_quote(self, rate: Dict[str, Any]) -> Optional[ShippingQuote]:
        if not isinstance(rate, dict) or rate.get("object_status") != RATE_SUCCESS_STATUS:
            return None

        amount = parse_amount(rate.get("amount_local") or rate.get("amount"))
        if amount is None or amount < 0:
            logger.debug("shipping.rate_discarded", rate_id=rate.get("object_id"))
            return None

        servicelevel = rate.get("servicelevel")
        service_level = ""
        if isinstance(servicelevel, dict):
            service_level = servicelevel.get("name") or ""
        service_level = service_level or rate.get("servicelevel_name") or ""

        return ShippingQuote(
            id=str(rate.get("object_id") or ""),
            provider=str(rate.get("provider") or ""),
            service_level=service_level,
            duration_terms=rate.get("duration_terms"),
            amount=apply_markup(amount, self._markup),
            currency=rate.get("currency_local") or rate.get("currency") or "",
        )
