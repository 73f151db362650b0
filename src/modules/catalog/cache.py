"""Time-bounded, per-dataset cache in front of the catalog source.

Each dataset owns one snapshot (rows + fetch time) and one lock:

- A snapshot younger than ``ttl`` seconds is served without I/O.
- On a miss the dataset lock is taken and freshness re-checked, so
  concurrent misses collapse into a single upstream fetch.  Callers that
  waited on the lock take the outcome of the refresh that finished while
  they waited, failure included, instead of fetching again.
- A snapshot is replaced as a whole, never mutated, so readers never see
  a half-updated dataset.
- When a refresh fails, a snapshot younger than ``max_stale`` seconds is
  served (with a warning).  Older or missing snapshots turn the failure
  into ``CatalogSourceError``.  ``max_stale=0`` disables the fallback.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog

from modules.catalog.exceptions import CatalogSourceError

logger = structlog.get_logger(__name__)

Rows = List[Dict[str, Any]]


@dataclass(frozen=True)
class _Snapshot:
    rows: Tuple[Dict[str, Any], ...]
    fetched_at: float


class _Entry:
    __slots__ = ("fetch", "lock", "snapshot", "attempts", "error")

    def __init__(self, fetch: Callable[[], Rows]) -> None:
        self.fetch = fetch
        self.lock = threading.Lock()
        self.snapshot: Optional[_Snapshot] = None
        # Bumped after every refresh attempt; ``error`` is that attempt's failure.
        self.attempts = 0
        self.error: Optional[CatalogSourceError] = None


class CatalogCache:
    def __init__(
        self,
        ttl: float = 60.0,
        max_stale: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_stale = max_stale
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def register(self, dataset: str, fetch: Callable[[], Rows]) -> None:
        """Attach the upstream fetch for ``dataset``."""
        self._entries[dataset] = _Entry(fetch)

    @property
    def datasets(self) -> List[str]:
        return list(self._entries)

    def read(self, dataset: str) -> Rows:
        """Return the rows of ``dataset``, refreshing them when expired.

        Raises:
            KeyError: ``dataset`` was never registered.
            CatalogSourceError: the refresh failed and no snapshot is
                young enough to serve.
        """
        entry = self._entries[dataset]

        snapshot = entry.snapshot
        if self._is_fresh(snapshot):
            return list(snapshot.rows)

        seen = entry.attempts
        with entry.lock:
            snapshot = entry.snapshot
            if self._is_fresh(snapshot):
                return list(snapshot.rows)
            if entry.attempts != seen:
                if entry.error is not None:
                    return self._fallback(dataset, snapshot, entry.error)
                if snapshot is not None:
                    return list(snapshot.rows)
            return self._refresh(dataset, entry, snapshot)

    def invalidate(self, dataset: Optional[str] = None) -> None:
        """Drop the snapshot of ``dataset``, or of every dataset."""
        names = [dataset] if dataset is not None else list(self._entries)
        for name in names:
            entry = self._entries[name]
            with entry.lock:
                entry.snapshot = None
        logger.info("catalog.invalidated", datasets=names)

    def _refresh(
        self, dataset: str, entry: _Entry, stale: Optional[_Snapshot]
    ) -> Rows:
        log = logger.bind(dataset=dataset)
        try:
            rows = entry.fetch()
        except CatalogSourceError as exc:
            entry.error = exc
            entry.attempts += 1
            log.error("catalog.refresh_failed", error=str(exc))
            return self._fallback(dataset, stale, exc)

        entry.snapshot = _Snapshot(rows=tuple(rows), fetched_at=self._clock())
        entry.error = None
        entry.attempts += 1
        log.info("catalog.refreshed", row_count=len(rows))
        return list(rows)

    def _fallback(
        self, dataset: str, stale: Optional[_Snapshot], error: CatalogSourceError
    ) -> Rows:
        if stale is not None and self._age(stale) < self._max_stale:
            logger.warning(
                "catalog.serving_stale",
                dataset=dataset,
                age_seconds=round(self._age(stale), 1),
                error=str(error),
            )
            return list(stale.rows)
        raise error

    def _age(self, snapshot: _Snapshot) -> float:
        return self._clock() - snapshot.fetched_at

    def _is_fresh(self, snapshot: Optional[_Snapshot]) -> bool:
        return snapshot is not None and self._age(snapshot) < self._ttl
