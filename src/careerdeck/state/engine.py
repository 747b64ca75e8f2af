"""Browsing state: favorites, compare list, recently viewed and view counts.

One instance is shared by every screen of a session so that a change made in
one place is visible everywhere. Every mutation updates memory first and then
writes the affected collection through to the key-value store.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from careerdeck.exceptions import CompareFullError, PersistenceError
from careerdeck.storage.base import (
    COMPARE_LIST_KEY,
    FAVORITES_KEY,
    RECENTLY_VIEWED_KEY,
    VIEW_COUNTS_KEY,
    KeyValueStore,
)

logger = logging.getLogger(__name__)

DEFAULT_COMPARE_LIMIT = 3
DEFAULT_RECENTLY_VIEWED_CAP = 10


class BrowsingState:
    """Owner of all per-user browsing state.

    ``toggle_compare`` raises :class:`CompareFullError` instead of evicting an
    entry when the list is already at ``compare_limit``; state is left
    untouched in that case.

    If the store fails on a write, the failure is logged once and the
    instance keeps working in memory only for the rest of its lifetime.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        compare_limit: int = DEFAULT_COMPARE_LIMIT,
        recently_viewed_cap: int = DEFAULT_RECENTLY_VIEWED_CAP,
    ) -> None:
        if compare_limit < 1:
            raise ValueError("compare_limit must be at least 1")
        if recently_viewed_cap < 1:
            raise ValueError("recently_viewed_cap must be at least 1")
        self._store = store
        self._compare_limit = compare_limit
        self._recent_cap = recently_viewed_cap
        self._lock = threading.RLock()
        self._persisting = True

        self._favorites: set[str] = set()
        self._compare: list[str] = []
        self._recent: list[str] = []
        self._counts: dict[str, int] = {}
        self._hydrate()

    # ---- properties ----

    @property
    def compare_limit(self) -> int:
        return self._compare_limit

    @property
    def recently_viewed_cap(self) -> int:
        return self._recent_cap

    @property
    def persisting(self) -> bool:
        """False once a store failure has switched this instance to memory only."""
        return self._persisting

    # ---- favorites ----

    def is_favorite(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._favorites

    def toggle_favorite(self, job_id: str) -> bool:
        """Flip favorite membership and return the new state."""
        with self._lock:
            if job_id in self._favorites:
                self._favorites.discard(job_id)
                added = False
            else:
                self._favorites.add(job_id)
                added = True
            logger.debug("Favorite %s -> %s.", job_id, added)
            self._write(FAVORITES_KEY, sorted(self._favorites))
            return added

    def favorites(self) -> set[str]:
        with self._lock:
            return set(self._favorites)

    def clear_favorites(self) -> None:
        with self._lock:
            self._favorites.clear()
            self._write(FAVORITES_KEY, [])

    # ---- compare list ----

    def is_in_compare(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._compare

    def is_compare_full(self) -> bool:
        with self._lock:
            return len(self._compare) >= self._compare_limit

    def toggle_compare(self, job_id: str) -> bool:
        """Add or remove *job_id* and return whether it is now in the list.

        Raises :class:`CompareFullError` when adding to a full list.
        """
        with self._lock:
            if job_id in self._compare:
                self._compare.remove(job_id)
                added = False
            elif len(self._compare) >= self._compare_limit:
                logger.debug("Compare list full; rejected %s.", job_id)
                raise CompareFullError(self._compare_limit)
            else:
                self._compare.append(job_id)
                added = True
            logger.debug("Compare %s -> %s.", job_id, added)
            self._write(COMPARE_LIST_KEY, list(self._compare))
            return added

    def clear_compare_list(self) -> None:
        with self._lock:
            self._compare.clear()
            self._write(COMPARE_LIST_KEY, [])

    def compare_list(self) -> list[str]:
        """Compare ids, oldest first."""
        with self._lock:
            return list(self._compare)

    # ---- recently viewed ----

    def add_recently_viewed(self, job_id: str) -> None:
        with self._lock:
            if job_id in self._recent:
                self._recent.remove(job_id)
            self._recent.insert(0, job_id)
            del self._recent[self._recent_cap:]
            self._write(RECENTLY_VIEWED_KEY, list(self._recent))

    def recently_viewed(self, limit: int | None = None) -> list[str]:
        """Recently viewed ids, most recent first."""
        with self._lock:
            if limit is None:
                return list(self._recent)
            return self._recent[:max(limit, 0)]

    # ---- view counts ----

    def increment_view_count(self, job_id: str) -> int:
        with self._lock:
            count = self._counts.get(job_id, 0) + 1
            self._counts[job_id] = count
            self._write(VIEW_COUNTS_KEY, dict(self._counts))
            return count

    def view_count(self, job_id: str) -> int:
        with self._lock:
            return self._counts.get(job_id, 0)

    def view_counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def record_view(self, job_id: str) -> None:
        """Apply both effects of opening a job's detail page."""
        with self._lock:
            self.add_recently_viewed(job_id)
            self.increment_view_count(job_id)

    # ---- persistence ----

    def _write(self, key: str, value: Any) -> None:
        if not self._persisting:
            return
        try:
            self._store.set(key, value)
        except PersistenceError as exc:
            self._persisting = False
            logger.warning(
                "Could not persist %s (%s); continuing in memory only for this session.",
                key,
                exc,
            )

    def _read(self, key: str) -> Any | None:
        try:
            return self._store.get(key)
        except PersistenceError as exc:
            logger.warning("Could not load %s (%s); starting it empty.", key, exc)
            return None

    def _hydrate(self) -> None:
        self._favorites = set(_clean_ids(self._read(FAVORITES_KEY)))
        self._compare = _clean_ids(self._read(COMPARE_LIST_KEY))[:self._compare_limit]
        self._recent = _clean_ids(self._read(RECENTLY_VIEWED_KEY))[:self._recent_cap]
        self._counts = _clean_counts(self._read(VIEW_COUNTS_KEY))
        logger.info(
            "Browsing state loaded: %d favorite(s), %d to compare, %d recent, %d counted.",
            len(self._favorites),
            len(self._compare),
            len(self._recent),
            len(self._counts),
        )


def _clean_ids(raw: Any) -> list[str]:
    """Keep string ids in order, first occurrence wins."""
    if not isinstance(raw, list):
        return []
    seen: set[str] = set()
    ids: list[str] = []
    for item in raw:
        if isinstance(item, str) and item not in seen:
            seen.add(item)
            ids.append(item)
    return ids


def _clean_counts(raw: Any) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    return {
        str(key): value
        for key, value in raw.items()
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0
    }
