"""SQLite key-value backend."""

import json
import sqlite3
from pathlib import Path
from threading import Lock
from typing import Any

import structlog

from kvvector.infrastructure.keyvalue.exceptions import (
    BackingStoreConnectionError,
    BackingStoreError,
    BackingStoreSerializationError,
)

logger = structlog.get_logger()

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value_json TEXT NOT NULL
)
"""


class SQLiteKeyValueStore:
    """Key-value store persisted in a single SQLite table.

    Values are stored as compact JSON text. One connection is shared
    across threads and every statement runs under a lock, so the store
    is safe to use from a thread pool.
    """

    BACKEND_NAME = "sqlite"

    def __init__(self, db_path: str | Path) -> None:
        """Open (or create) the database.

        Args:
            db_path: Path to the SQLite database file, or ":memory:".

        Raises:
            BackingStoreConnectionError: If the database cannot be opened.
        """
        self._db_path = str(db_path)
        self._lock = Lock()

        try:
            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn: sqlite3.Connection | None = sqlite3.connect(
                self._db_path, check_same_thread=False
            )
            with self._lock:
                self._conn.execute(_CREATE_TABLE)
                self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            logger.error(
                "sqlite_backend_open_failed",
                backend=self.BACKEND_NAME,
                path=self._db_path,
                error=str(e),
            )
            raise BackingStoreConnectionError(
                f"Failed to open SQLite database: {e}",
                backend=self.BACKEND_NAME,
            ) from e

        logger.info("sqlite_backend_opened", backend=self.BACKEND_NAME, path=self._db_path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise BackingStoreConnectionError(
                "SQLite database is closed",
                backend=self.BACKEND_NAME,
            )
        return self._conn

    def get(self, key: str) -> Any | None:
        """Return the decoded value stored under key, or None."""
        try:
            with self._lock:
                row = self._connection().execute(
                    "SELECT value_json FROM kv WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as e:
            raise self._wrap("get", key, e) from e

        if row is None:
            return None

        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            raise BackingStoreSerializationError(
                f"Stored value for {key!r} is not valid JSON: {e}",
                backend=self.BACKEND_NAME,
                key=key,
            ) from e

    def set(self, key: str, value: Any) -> None:
        """Insert or replace the value stored under key."""
        try:
            payload = json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise BackingStoreSerializationError(
                f"Value for {key!r} is not JSON serializable: {e}",
                backend=self.BACKEND_NAME,
                key=key,
            ) from e

        try:
            with self._lock:
                conn = self._connection()
                conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value_json) VALUES (?, ?)",
                    (key, payload),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise self._wrap("set", key, e) from e

    def delete(self, key: str) -> None:
        """Delete key if present."""
        try:
            with self._lock:
                conn = self._connection()
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise self._wrap("delete", key, e) from e

    def clear(self) -> None:
        """Delete every key in the table."""
        try:
            with self._lock:
                conn = self._connection()
                cursor = conn.execute("DELETE FROM kv")
                conn.commit()
        except sqlite3.Error as e:
            raise self._wrap("clear", None, e) from e

        logger.info("sqlite_backend_cleared", backend=self.BACKEND_NAME, count=cursor.rowcount)

    def close(self) -> None:
        """Close the underlying connection. Further calls fail."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("sqlite_backend_closed", backend=self.BACKEND_NAME, path=self._db_path)

    def _wrap(self, operation: str, key: str | None, error: sqlite3.Error) -> BackingStoreError:
        logger.error(
            "sqlite_backend_operation_failed",
            backend=self.BACKEND_NAME,
            operation=operation,
            key=key,
            error=str(error),
        )
        return BackingStoreError(
            f"SQLite {operation} failed: {error}",
            backend=self.BACKEND_NAME,
            key=key,
        )
