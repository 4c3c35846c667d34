"""Protocol definition for key-value backends."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Protocol for the persistence layer a vector store is built on.

    Only point lookups are required; backends are not expected to list
    or order their keys. Values are JSON-compatible structures (dicts,
    lists, strings, numbers, booleans and None).
    """

    def get(self, key: str) -> Any | None:
        """Return the value stored under key, or None when absent.

        Raises:
            BackingStoreError: If the backend fails.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            BackingStoreError: If the backend fails.
        """
        ...

    def delete(self, key: str) -> None:
        """Delete key. Deleting a missing key is not an error.

        Raises:
            BackingStoreError: If the backend fails.
        """
        ...
