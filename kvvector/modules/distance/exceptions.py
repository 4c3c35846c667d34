"""Exceptions for distance calculation."""


class DistanceError(Exception):
    """Base exception for distance calculation errors."""

    pass


class DimensionMismatchError(DistanceError):
    """Raised when two vectors of different lengths are compared."""

    def __init__(self, *, expected: int, actual: int, document_id: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.document_id = document_id
        message = f"Vector dimension mismatch: expected {expected}, got {actual}"
        if document_id is not None:
            message += f" (document {document_id!r})"
        super().__init__(message)
