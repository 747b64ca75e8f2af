"""SQLite-backed key-value store for browsing state."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from careerdeck.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS kv_state (
    key             TEXT PRIMARY KEY,
    value           TEXT NOT NULL,
    updated_at      TEXT NOT NULL
);
"""


class SqliteStore:
    """Persistent key-value pairs stored as JSON text in SQLite."""

    def __init__(self, db_path: str | Path) -> None:
        db_path = Path(db_path)
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise PersistenceError(f"Cannot open state database {db_path}: {exc}") from exc
        logger.info("State database ready at %s.", db_path)

    def get(self, key: str) -> Any | None:
        try:
            cur = self._conn.execute("SELECT value FROM kv_state WHERE key=?", (key,))
            row = cur.fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot read {key!r}: {exc}") from exc
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except ValueError as exc:
            raise PersistenceError(f"Corrupt value stored under {key!r}: {exc}") from exc

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Value for {key!r} is not JSON-serializable: {exc}") from exc
        now = datetime.now(timezone.utc).isoformat()
        try:
            self._conn.execute(
                "INSERT INTO kv_state (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
                (key, payload, now),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot write {key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        cur = self._conn.execute("SELECT key FROM kv_state ORDER BY key")
        return [row["key"] for row in cur.fetchall()]

    def close(self) -> None:
        self._conn.close()
