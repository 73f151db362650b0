"""Parcel derivation from cart contents."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from modules.core.money import quantize
from modules.shipping.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_HEIGHT,
    DEFAULT_LENGTH,
    DEFAULT_MASS,
    DEFAULT_WIDTH,
    PARCEL_PRESETS,
)
from modules.shipping.dtos import Parcel, QuoteItemDTO


def derive_parcel(items: Iterable[QuoteItemDTO]) -> Parcel:
    """Derive a single parcel for ``items``.

    Mass is the sum of ``preset.mass * quantity``; each dimension is the
    largest value among the presets touched (items are assumed to pack
    into the biggest box).  Unknown categories use the ``accessory``
    preset.  Never fails: an empty cart yields the default parcel.
    """
    mass = Decimal("0")
    length = width = height = Decimal("0")

    for item in items:
        preset = PARCEL_PRESETS.get(item.category or "", PARCEL_PRESETS[DEFAULT_CATEGORY])
        mass += preset.mass * (item.quantity or 1)
        length = max(length, preset.length)
        width = max(width, preset.width)
        height = max(height, preset.height)

    if mass == 0:
        mass = DEFAULT_MASS

    return Parcel(
        mass=quantize(mass),
        length=length or DEFAULT_LENGTH,
        width=width or DEFAULT_WIDTH,
        height=height or DEFAULT_HEIGHT,
    )
