"""Key-value persistence infrastructure.

This module provides a Protocol-based abstraction for the get/set/delete
backend a vector store sits on, plus two concrete backends.
"""

from kvvector.infrastructure.keyvalue.exceptions import (
    BackingStoreConnectionError,
    BackingStoreError,
    BackingStoreSerializationError,
)
from kvvector.infrastructure.keyvalue.memory import InMemoryKeyValueStore
from kvvector.infrastructure.keyvalue.protocol import KeyValueStore
from kvvector.infrastructure.keyvalue.sqlite import SQLiteKeyValueStore

__all__ = [
    "BackingStoreConnectionError",
    "BackingStoreError",
    "BackingStoreSerializationError",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
]
