"""Typed views of spreadsheet rows.

Every cell arrives as text.  Numeric and boolean columns are parsed
permissively: an unparseable or zero number becomes the column default
and a boolean is true only for the literal ``"true"`` (any case).
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from modules.catalog.constants import DEFAULT_GALLERY_ORDER


def to_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Parse an integer cell; blank, unparseable and zero cells give ``default``."""
    text = str(value).strip() if value is not None else ""
    try:
        number = int(text)
    except ValueError:
        try:
            number = int(float(text))
        except (ValueError, OverflowError):
            return default
    return number or default


def to_bool(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == "true"


def coerce_product(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Columns: id, name, category, make, model, year_from, year_to, price,
    sku, image_url, description, in_stock, featured."""
    product = dict(row)
    product["price"] = to_float(row.get("price"))
    product["year_from"] = to_int(row.get("year_from"))
    product["year_to"] = to_int(row.get("year_to"))
    product["in_stock"] = to_bool(row.get("in_stock"))
    product["featured"] = to_bool(row.get("featured"))
    return product


def coerce_gallery_item(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Columns: id, tab, title, bike_make, bike_model, image_url,
    customer_name, featured, order."""
    item = dict(row)
    item["featured"] = to_bool(row.get("featured"))
    item["order"] = to_int(row.get("order"), DEFAULT_GALLERY_ORDER)
    return item
