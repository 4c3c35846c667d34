"""Brute-force vector search over any key-value backend."""

from kvvector.infrastructure.keyvalue import (
    BackingStoreError,
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from kvvector.modules.distance import (
    DimensionMismatchError,
    DistanceCalculator,
    DistanceStrategy,
)
from kvvector.modules.documents import Metadata, Vector, VectorDocument
from kvvector.modules.store import (
    DocumentIndex,
    InvalidArgumentError,
    QueryOptions,
    Store,
    StoreError,
    UnsupportedOptionError,
)

__version__ = "0.1.0"

__all__ = [
    "BackingStoreError",
    "DimensionMismatchError",
    "DistanceCalculator",
    "DistanceStrategy",
    "DocumentIndex",
    "InMemoryKeyValueStore",
    "InvalidArgumentError",
    "KeyValueStore",
    "Metadata",
    "QueryOptions",
    "SQLiteKeyValueStore",
    "Store",
    "StoreError",
    "UnsupportedOptionError",
    "Vector",
    "VectorDocument",
    "__version__",
]
