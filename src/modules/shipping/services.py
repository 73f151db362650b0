"""Shipping quote use case.

Stateless combinator: cart items -> parcel -> marked-up carrier quotes.
Rate client failures propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

import structlog

from modules.catalog.exceptions import CatalogSourceError
from modules.shipping.parcels import derive_parcel

if TYPE_CHECKING:
    from modules.shipping.client import ShippoRateClient
    from modules.shipping.dtos import Address, QuoteItemDTO, ShippingQuote

logger = structlog.get_logger(__name__)

CategoryLookup = Callable[[str], Optional[str]]


class QuoteService:
    """Application service for shipping quotes.

    ``category_lookup`` resolves a product id to its catalog category for
    items sent without one.  Lookup failures fall back to the default
    parcel preset instead of failing the quote.
    """

    def __init__(
        self,
        rate_client: ShippoRateClient,
        category_lookup: Optional[CategoryLookup] = None,
    ) -> None:
        self._rate_client = rate_client
        self._category_lookup = category_lookup

    def quote(
        self, items: Sequence[QuoteItemDTO], destination: Address
    ) -> List[ShippingQuote]:
        resolved = [self._resolve_category(item) for item in items]
        parcel = derive_parcel(resolved)
        logger.info(
            "shipping.parcel_derived",
            item_count=len(resolved),
            mass=str(parcel.mass),
            dimensions=f"{parcel.length}x{parcel.width}x{parcel.height}",
        )
        return self._rate_client.quote(destination, parcel)

    def _resolve_category(self, item: QuoteItemDTO) -> QuoteItemDTO:
        if item.category or not item.product_id or self._category_lookup is None:
            return item
        try:
            category = self._category_lookup(item.product_id)
        except CatalogSourceError as exc:
            logger.warning(
                "shipping.category_lookup_failed",
                product_id=item.product_id,
                error=str(exc),
            )
            return item
        if not category:
            return item
        return item.model_copy(update={"category": category})
