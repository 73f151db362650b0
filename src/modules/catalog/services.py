"""Catalog read use cases.

One process-wide ``CatalogCache`` fronts the spreadsheet.  While no
spreadsheet is configured the placeholder catalog is served instead.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings

from modules.catalog.cache import CatalogCache
from modules.catalog.constants import (
    GALLERY,
    PLACEHOLDER_GALLERY,
    PLACEHOLDER_PRODUCTS,
    PRODUCTS,
    SHEET_TABS,
)
from modules.catalog.schemas import coerce_gallery_item, coerce_product
from modules.catalog.sources import GoogleSheetsSource

logger = structlog.get_logger(__name__)

_cache: Optional[CatalogCache] = None
_cache_lock = threading.Lock()


def build_catalog_cache(source: Optional[GoogleSheetsSource] = None) -> CatalogCache:
    """Create a cache with the products and gallery datasets registered."""
    source = source or GoogleSheetsSource()
    cache = CatalogCache(
        ttl=settings.CATALOG_CACHE_TTL,
        max_stale=settings.CATALOG_MAX_STALE,
    )
    cache.register(
        PRODUCTS,
        lambda: [coerce_product(r) for r in source.fetch_rows(SHEET_TABS[PRODUCTS])],
    )
    cache.register(
        GALLERY,
        lambda: [coerce_gallery_item(r) for r in source.fetch_rows(SHEET_TABS[GALLERY])],
    )
    return cache


def get_catalog_cache() -> CatalogCache:
    global _cache
    with _cache_lock:
        if _cache is None:
            _cache = build_catalog_cache()
        return _cache


def reset_catalog_cache() -> None:
    """Forget the process-wide cache; the next read rebuilds it from settings."""
    global _cache
    with _cache_lock:
        _cache = None


def is_configured() -> bool:
    return bool(settings.CATALOG_SHEET_ID)


def get_products() -> List[Dict[str, Any]]:
    """Raises ``CatalogSourceError`` when the sheet cannot be read."""
    if not is_configured():
        return copy.deepcopy(PLACEHOLDER_PRODUCTS)
    return get_catalog_cache().read(PRODUCTS)


def get_gallery() -> List[Dict[str, Any]]:
    """Raises ``CatalogSourceError`` when the sheet cannot be read."""
    if not is_configured():
        return copy.deepcopy(PLACEHOLDER_GALLERY)
    return get_catalog_cache().read(GALLERY)


def find_product_category(product_id: str) -> Optional[str]:
    """Category of the product whose ``id`` or ``sku`` is ``product_id``."""
    for product in get_products():
        if product_id in (product.get("id"), product.get("sku")):
            return product.get("category") or None
    return None


def refresh_catalog(dataset: Optional[str] = None) -> List[str]:
    """Invalidate cached snapshots; returns the dataset names affected."""
    cache = get_catalog_cache()
    if dataset is not None and dataset not in cache.datasets:
        raise KeyError(dataset)
    cache.invalidate(dataset)
    return [dataset] if dataset is not None else cache.datasets
