"""In-memory key-value backend."""

import copy
from threading import Lock
from typing import Any

import structlog

logger = structlog.get_logger()


class InMemoryKeyValueStore:
    """Dictionary-backed key-value store living in the current process.

    Values are deep-copied on the way in and on the way out, so callers
    can never mutate stored state through an object they passed in or
    got back. Useful for tests and for short-lived, single-process stores.
    """

    BACKEND_NAME = "memory"

    def __init__(self) -> None:
        self._lock = Lock()
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        """Return a copy of the value stored under key, or None."""
        with self._lock:
            if key not in self._data:
                return None
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        """Store a copy of value under key."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._data[key] = stored

    def delete(self, key: str) -> None:
        """Remove key if present."""
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        """Remove every key, including ones not written by a vector store."""
        with self._lock:
            removed = len(self._data)
            self._data.clear()

        logger.debug("memory_backend_cleared", backend=self.BACKEND_NAME, count=removed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data
