"""Persisted index of live document ids."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from threading import RLock

import structlog

from kvvector.infrastructure.keyvalue import KeyValueStore
from kvvector.modules.store.exceptions import IndexCorruptedError

logger = structlog.get_logger()


class DocumentIndex:
    """The list of live document ids, kept as one entry in the backend.

    Key-value backends cannot enumerate their keys, so the index is what
    makes listing, querying and dropping possible. Ids are kept in
    first-insertion order without duplicates; that order is the fetch
    order the query pipeline uses to break score ties.

    Every read-modify-write runs under a re-entrant lock. Stores that
    share one DocumentIndex object therefore never lose each other's
    index updates, and callers can hold :meth:`locked` across document
    writes to serialise whole operations.
    """

    def __init__(self, backend: KeyValueStore, key: str) -> None:
        """Initialize the index.

        Args:
            backend: Backend holding the index entry.
            key: Reserved key of the index entry.
        """
        self._backend = backend
        self._key = key
        self._lock = RLock()

    @property
    def key(self) -> str:
        """The reserved backend key of the index entry."""
        return self._key

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the index lock for the duration of the block."""
        with self._lock:
            yield

    def load(self) -> list[str]:
        """Return the live ids, or an empty list if the entry is absent.

        Raises:
            IndexCorruptedError: If the stored entry is not a list of strings.
        """
        raw = self._backend.get(self._key)
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise IndexCorruptedError(
                f"Index entry {self._key!r} is not a list of ids",
                operation="load_index",
            )
        return raw

    def save(self, ids: Iterable[str]) -> None:
        """Replace the stored ids, dropping duplicates."""
        with self._lock:
            self._backend.set(self._key, list(dict.fromkeys(ids)))

    def ensure(self) -> bool:
        """Create an empty entry if none exists.

        Returns:
            True if the entry was created, False if it already existed.
        """
        with self._lock:
            if self._backend.get(self._key) is not None:
                return False
            self.save([])
            logger.debug("document_index_created", key=self._key)
            return True

    def add_ids(self, new_ids: Iterable[str]) -> list[str]:
        """Append ids not already present and return the updated list."""
        with self._lock:
            ids = list(dict.fromkeys([*self.load(), *new_ids]))
            self.save(ids)
            return ids

    def remove_ids(self, ids: Iterable[str]) -> list[str]:
        """Remove ids if present and return the updated list."""
        with self._lock:
            doomed = set(ids)
            remaining = [item for item in self.load() if item not in doomed]
            self.save(remaining)
            return remaining

    def clear(self) -> None:
        """Empty the index."""
        with self._lock:
            self.save([])
