"""Catalog domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import UpstreamError


class CatalogSourceError(UpstreamError):
    """The spreadsheet source failed and no usable snapshot was cached."""
