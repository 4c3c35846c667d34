"""Schemas for vector documents."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, overload
from uuid import UUID

from kvvector.modules.documents.exceptions import DocumentSerializationError


@dataclass(frozen=True)
class Vector:
    """An immutable, ordered sequence of floats."""

    data: tuple[float, ...]

    def __post_init__(self) -> None:
        """Coerce any numeric sequence into a tuple of floats."""
        object.__setattr__(self, "data", tuple(float(value) for value in self.data))

    @property
    def dimensions(self) -> int:
        """Number of components in the vector."""
        return len(self.data)

    def get_data(self) -> list[float]:
        """Return the components as a new list."""
        return list(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[float]:
        return iter(self.data)

    def __getitem__(self, index: int) -> float:
        return self.data[index]


def _freeze(value: Any) -> Any:
    if isinstance(value, Metadata | MetadataList):
        return value
    if isinstance(value, Mapping):
        return Metadata(value)
    if isinstance(value, list | tuple):
        return MetadataList(value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Metadata):
        return value.to_dict()
    if isinstance(value, MetadataList):
        return [_thaw(item) for item in value]
    return value


class MetadataList(Sequence[Any]):
    """Read-only list value inside document metadata.

    Compares equal to lists and tuples with the same items, so filters
    can test ``metadata["tags"] == ["x", "y"]`` directly.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items = tuple(_freeze(item) for item in items)

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> "MetadataList": ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return MetadataList(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MetadataList):
            return self._items == other._items
        if isinstance(other, list | tuple):
            return self._items == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"MetadataList({list(self._items)!r})"


class Metadata(Mapping[str, Any]):
    """Read-only, insertion-ordered document metadata.

    Nested mappings are wrapped as Metadata and lists as MetadataList, so
    nothing reachable from a document can be changed after construction.
    Metadata is hashable, which keeps VectorDocument usable in sets.
    Nested values are looked up with plain indexing::

        metadata["options"]["size"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        frozen: dict[str, Any] = {}
        for key, value in (data or {}).items():
            if not isinstance(key, str):
                raise TypeError(f"Metadata keys must be strings, got {type(key).__name__}")
            frozen[key] = _freeze(value)
        self._data = frozen

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"Metadata({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable, JSON-compatible deep copy."""
        return {key: _thaw(value) for key, value in self._data.items()}


@dataclass(frozen=True)
class VectorDocument:
    """A document stored in a vector store.

    Pairs a caller-chosen identifier with a vector and optional metadata.
    Any string is a valid identifier, the empty string included. UUIDs
    are accepted and stored in their canonical string form.
    """

    id: str
    vector: Vector
    metadata: Metadata = field(default_factory=Metadata)

    def __post_init__(self) -> None:
        """Normalize the identifier, vector and metadata."""
        doc_id: Any = self.id
        if isinstance(doc_id, UUID):
            doc_id = str(doc_id)
        if not isinstance(doc_id, str):
            raise ValueError(f"Document id must be a string, got {self.id!r}")
        object.__setattr__(self, "id", doc_id)

        if not isinstance(self.vector, Vector):
            object.__setattr__(self, "vector", Vector(tuple(self.vector)))

        if not isinstance(self.metadata, Metadata):
            object.__setattr__(self, "metadata", Metadata(self.metadata))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "vector": self.vector.get_data(),
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VectorDocument":
        """Deserialize a document produced by :meth:`to_dict`.

        Raises:
            DocumentSerializationError: If the payload is malformed.
        """
        try:
            vector: Sequence[float] = data["vector"]
            return cls(
                id=data["id"],
                vector=Vector(tuple(vector)),
                metadata=Metadata(data.get("metadata") or {}),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentSerializationError(
                f"Malformed document payload: {e}",
                document_id=data.get("id") if isinstance(data, Mapping) else None,
            ) from e
