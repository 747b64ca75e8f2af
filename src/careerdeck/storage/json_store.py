"""JSON-file store, one document holding every key."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from careerdeck.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Keeps all keys in a single JSON object on disk.

    The file is re-read on every ``get`` and rewritten atomically on every
    ``set`` via a temp file and rename.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot create {self._path.parent}: {exc}") from exc

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top-level value is not an object.", self._path)
            return {}
        return data

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            tmp_path.replace(self._path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc}") from exc

    def close(self) -> None:
        pass
