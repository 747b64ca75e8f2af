"""Protocol definition for key-value persistence backends."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

FAVORITES_KEY = "favorites"
COMPARE_LIST_KEY = "compareList"
RECENTLY_VIEWED_KEY = "recentlyViewed"
VIEW_COUNTS_KEY = "viewCounts"

STATE_KEYS: tuple[str, ...] = (
    FAVORITES_KEY,
    COMPARE_LIST_KEY,
    RECENTLY_VIEWED_KEY,
    VIEW_COUNTS_KEY,
)


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable string-keyed store for JSON-serializable values.

    Implementations wrap their own I/O failures in
    :class:`~careerdeck.exceptions.PersistenceError`.
    """

    def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    def close(self) -> None:
        """Release any underlying resources."""
        ...
