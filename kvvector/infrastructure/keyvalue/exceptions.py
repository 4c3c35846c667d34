"""Exceptions for key-value backends."""


class BackingStoreError(Exception):
    """Base exception for key-value backend errors."""

    def __init__(self, message: str, *, backend: str = "unknown", key: str | None = None) -> None:
        self.backend = backend
        self.key = key
        super().__init__(message)


class BackingStoreConnectionError(BackingStoreError):
    """Raised when the backend cannot be opened or has been closed."""


class BackingStoreSerializationError(BackingStoreError):
    """Raised when a value cannot be encoded for or decoded from the backend."""
