"""Shipping constants.

Parcel presets per product category (mass in kg, dimensions in cm).
A cart is modelled as a single box: weights are summed, dimensions take
the largest preset touched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, NamedTuple


class ParcelPreset(NamedTuple):
    mass: Decimal
    length: Decimal
    width: Decimal
    height: Decimal


PARCEL_PRESETS: Dict[str, ParcelPreset] = {
    "graphic-kit": ParcelPreset(Decimal("0.5"), Decimal("40"), Decimal("30"), Decimal("5")),
    "seat-cover": ParcelPreset(Decimal("0.3"), Decimal("30"), Decimal("25"), Decimal("5")),
    "plastic-kit": ParcelPreset(Decimal("2.0"), Decimal("60"), Decimal("40"), Decimal("20")),
    "number-plate": ParcelPreset(Decimal("0.2"), Decimal("25"), Decimal("15"), Decimal("2")),
    "accessory": ParcelPreset(Decimal("0.2"), Decimal("20"), Decimal("15"), Decimal("5")),
}

DEFAULT_CATEGORY = "accessory"

# Substituted when the cart is empty or a dimension ends at zero.
DEFAULT_MASS = Decimal("0.5")
DEFAULT_LENGTH = Decimal("40")
DEFAULT_WIDTH = Decimal("30")
DEFAULT_HEIGHT = Decimal("5")

MASS_UNIT = "kg"
DISTANCE_UNIT = "cm"

RATE_SUCCESS_STATUS = "SUCCESS"
