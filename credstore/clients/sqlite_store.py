"""SQLite-backed ordered key-value database used as the embedded store."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from types import TracebackType
from typing import Optional, Type


class EmbeddedDatabase:
    """Single-table key-value store over one long-lived SQLite connection.

    The handle is owned by the hosting application: consumers read and write
    through it but never open or close it themselves.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        if str(self._db_path) != ":memory:":
            if self._db_path.parent and not self._db_path.parent.exists():
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        # The connection carries one transaction shared by every thread.
        self._lock = threading.Lock()
        self._ensure_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    def _ensure_schema(self) -> None:
        with self._conn:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_entries (
                    key TEXT NOT NULL PRIMARY KEY,
                    value BLOB NOT NULL
                )
                """
            )

    def put(self, key: str, value: bytes) -> None:
        """Write ``value`` under ``key``, replacing any existing entry."""
        if not key:
            raise ValueError("Key must be a non-empty string")
        with self._lock, self._conn:
            self._conn.execute(
                """
                INSERT INTO kv_entries (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, sqlite3.Binary(value)),
            )

    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under ``key`` or ``None`` when absent."""
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM kv_entries WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        return bytes(row[0])

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "EmbeddedDatabase":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = ["EmbeddedDatabase"]
