"""Google Sheets source for the catalog.

Reads a whole tab through the Sheets v4 ``values`` REST endpoint.  The
first row holds the column names; each following row is one record.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests
import structlog
from django.conf import settings

from modules.catalog.exceptions import CatalogSourceError

logger = structlog.get_logger(__name__)


def rows_from_values(values: Sequence[Sequence[Any]]) -> List[Dict[str, str]]:
    """Turn a header row plus data rows into a list of dicts.

    Header names and cells are stripped; short rows are padded with "".
    """
    if not values:
        return []
    headers = [str(h).strip() for h in values[0]]
    rows = []
    for raw in values[1:]:
        rows.append(
            {
                header: (str(raw[i]).strip() if i < len(raw) and raw[i] is not None else "")
                for i, header in enumerate(headers)
            }
        )
    return rows


class GoogleSheetsSource:
    """Fetches spreadsheet tabs with a bounded timeout.  No caching here."""

    def __init__(
        self,
        sheet_id: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Any = None,
    ) -> None:
        self._sheet_id = settings.CATALOG_SHEET_ID if sheet_id is None else sheet_id
        self._api_key = settings.CATALOG_API_KEY if api_key is None else api_key
        self._base_url = (base_url or settings.CATALOG_API_URL).rstrip("/")
        self._timeout = settings.CATALOG_TIMEOUT if timeout is None else timeout
        self._http = session or requests

    def fetch_rows(self, tab: str) -> List[Dict[str, str]]:
        """Return every record of ``tab``.

        Raises:
            CatalogSourceError: network failure, timeout, non-2xx status
                or an unreadable body.
        """
        url = f"{self._base_url}/{quote(self._sheet_id, safe='')}/values/{quote(tab, safe='')}"
        params = {"key": self._api_key} if self._api_key else None
        log = logger.bind(tab=tab)

        try:
            response = self._http.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            log.warning("catalog.source_request_failed", error=str(exc))
            raise CatalogSourceError(f"Sheets request failed: {exc}") from exc

        if not response.ok:
            log.warning("catalog.source_error", status_code=response.status_code)
            raise CatalogSourceError(f"Sheets error {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise CatalogSourceError("Sheets returned an unreadable body.") from exc

        values = data.get("values") if isinstance(data, dict) else None
        return rows_from_values(values or [])
