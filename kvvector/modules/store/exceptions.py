"""Exceptions for store operations."""


class StoreError(Exception):
    """Base exception for vector store errors."""

    def __init__(self, message: str, *, operation: str = "unknown") -> None:
        self.operation = operation
        super().__init__(message)


class InvalidArgumentError(StoreError):
    """Raised when an operation is called with malformed arguments or options."""


class UnsupportedOptionError(InvalidArgumentError):
    """Raised when an option key is not recognized by the operation."""

    def __init__(self, option: str, *, operation: str) -> None:
        self.option = option
        super().__init__(
            f"Unsupported option {option!r} for {operation}.",
            operation=operation,
        )


class IndexCorruptedError(StoreError):
    """Raised when the persisted document index has an unexpected shape."""
