"""Shipping DTOs.

Framework-agnostic value objects using Pydantic v2, all immutable.

- ``Address``: destination (or origin) postal address.
- ``QuoteItemDTO``: a cart line as far as parcel sizing is concerned.
- ``Parcel``: the single box derived from a cart.
- ``ShippingQuote``: one carrier offer, already marked up.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from modules.shipping.constants import DISTANCE_UNIT, MASS_UNIT


class Address(BaseModel):
    """Postal address in the shape the carrier API expects."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    street1: str = ""
    street2: Optional[str] = None
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("country")
    @classmethod
    def country_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Destination country is required.")
        return v

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class QuoteItemDTO(BaseModel):
    """Cart line used for parcel sizing.

    ``category`` selects a parcel preset.  When it is missing,
    ``product_id`` lets the quote service look the category up in the
    catalog.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: Optional[str] = None
    quantity: int = Field(1, validation_alias=AliasChoices("quantity", "qty"))
    product_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("productId", "product_id")
    )

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class Parcel(BaseModel):
    """A single shippable box.  Mass and every dimension are positive."""

    model_config = ConfigDict(frozen=True)

    mass: Decimal = Field(gt=0)
    length: Decimal = Field(gt=0)
    width: Decimal = Field(gt=0)
    height: Decimal = Field(gt=0)
    mass_unit: str = MASS_UNIT
    distance_unit: str = DISTANCE_UNIT

    def to_payload(self) -> Dict[str, str]:
        """Serialize with string values, as the carrier API expects."""
        return {
            "mass_value": str(self.mass),
            "mass_unit": self.mass_unit,
            "length": str(self.length),
            "width": str(self.width),
            "height": str(self.height),
            "distance_unit": self.distance_unit,
        }


class ShippingQuote(BaseModel):
    """One carrier/service offer with the shop markup applied."""

    model_config = ConfigDict(frozen=True)

    id: str
    provider: str
    service_level: str = ""
    duration_terms: Optional[str] = None
    amount: Decimal
    currency: str = ""
