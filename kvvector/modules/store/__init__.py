"""Vector store built on a key-value backend.

The store keeps its own index of live document ids so a backend that
only offers get/set/delete can still be listed, searched and dropped.
"""

from kvvector.modules.store.exceptions import (
    IndexCorruptedError,
    InvalidArgumentError,
    StoreError,
    UnsupportedOptionError,
)
from kvvector.modules.store.index import DocumentIndex
from kvvector.modules.store.options import QueryOptions
from kvvector.modules.store.store import Store

__all__ = [
    "DocumentIndex",
    "IndexCorruptedError",
    "InvalidArgumentError",
    "QueryOptions",
    "Store",
    "StoreError",
    "UnsupportedOptionError",
]
