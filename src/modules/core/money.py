"""Permissive money parsing shared by orders and shipping.

Amounts arrive as JSON numbers or strings from browsers and from the
carrier API.  Malformed input becomes ``0`` rather than an error.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite ``Decimal`` or ``None`` if unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def to_money(value: Any) -> Decimal:
    """Coerce ``value`` to a non-negative amount rounded to cents."""
    amount = parse_amount(value)
    if amount is None or amount < 0:
        return ZERO
    return quantize(amount)


def quantize(amount: Decimal) -> Decimal:
    """Round half-up to two decimal places (standard currency rounding)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
