"""Unit tests for parcel derivation.

Covers:
- Mass is the sum of preset mass x quantity.
- Dimensions are the per-axis maximum of the presets touched.
- Unknown / missing categories fall back to the accessory preset.
- Empty carts yield the default parcel.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.shipping.constants import PARCEL_PRESETS
from modules.shipping.dtos import QuoteItemDTO
from modules.shipping.parcels import derive_parcel

pytestmark = pytest.mark.unit


def _item(category=None, quantity=1):
    return QuoteItemDTO(category=category, quantity=quantity)


class TestDeriveParcel:
    def test_single_graphic_kit(self):
        parcel = derive_parcel([_item("graphic-kit")])

        assert parcel.mass == Decimal("0.50")
        assert (parcel.length, parcel.width, parcel.height) == (
            Decimal("40"),
            Decimal("30"),
            Decimal("5"),
        )

    def test_mass_sums_and_dimensions_take_maximum(self):
        parcel = derive_parcel([_item("graphic-kit", 2), _item("plastic-kit", 1)])

        assert parcel.mass == Decimal("3.00")
        assert parcel.length == Decimal("60")
        assert parcel.width == Decimal("40")
        assert parcel.height == Decimal("20")

    def test_unknown_category_uses_accessory_preset(self):
        accessory = PARCEL_PRESETS["accessory"]

        parcel = derive_parcel([_item("spaceship", 3)])

        assert parcel.mass == Decimal("0.60")
        assert parcel.length == accessory.length
        assert parcel.width == accessory.width
        assert parcel.height == accessory.height

    def test_missing_category_uses_accessory_preset(self):
        assert derive_parcel([_item(None)]) == derive_parcel([_item("accessory")])

    def test_empty_cart_returns_default_parcel(self):
        parcel = derive_parcel([])

        assert parcel.mass == Decimal("0.5")
        assert parcel.length == Decimal("40")
        assert parcel.width == Decimal("30")
        assert parcel.height == Decimal("5")

    def test_payload_uses_string_values(self):
        payload = derive_parcel([_item("seat-cover")]).to_payload()

        assert payload == {
            "mass_value": "0.30",
            "mass_unit": "kg",
            "length": "30",
            "width": "25",
            "height": "5",
            "distance_unit": "cm",
        }

    def test_quantity_below_one_rejected(self):
        with pytest.raises(ValueError):
            QuoteItemDTO(category="graphic-kit", quantity=0)
