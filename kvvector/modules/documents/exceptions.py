"""Document exceptions."""


class DocumentError(Exception):
    """Base exception for document operations."""

    pass


class DocumentSerializationError(DocumentError):
    """Raised when a stored payload cannot be turned back into a document."""

    def __init__(self, message: str, *, document_id: str | None = None) -> None:
        self.document_id = document_id
        super().__init__(message)
