"""In-memory store for tests and throwaway sessions."""

from __future__ import annotations

import copy
import json
from typing import Any

from careerdeck.exceptions import PersistenceError


class MemoryStore:
    """Dict-backed store. Values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        # Reject what a durable backend could not serialize either.
        try:
            json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Value for {key!r} is not JSON-serializable: {exc}") from exc
        self._data[key] = copy.deepcopy(value)

    def close(self) -> None:
        pass
