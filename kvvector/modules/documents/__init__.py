"""Vector document data model."""

from kvvector.modules.documents.exceptions import (
    DocumentError,
    DocumentSerializationError,
)
from kvvector.modules.documents.schemas import Metadata, MetadataList, Vector, VectorDocument

__all__ = [
    "DocumentError",
    "DocumentSerializationError",
    "Metadata",
    "MetadataList",
    "Vector",
    "VectorDocument",
]
