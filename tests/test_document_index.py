"""Tests for the persisted document index."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from kvvector.infrastructure.keyvalue import InMemoryKeyValueStore
from kvvector.modules.store import DocumentIndex, IndexCorruptedError
from kvvector.modules.store.keys import document_key, index_key

KEY = "vectors.index"


@pytest.fixture
def backend() -> InMemoryKeyValueStore:
    """Create an empty in-memory backend."""
    return InMemoryKeyValueStore()


@pytest.fixture
def index(backend: InMemoryKeyValueStore) -> DocumentIndex:
    """Create an index over the backend."""
    return DocumentIndex(backend, KEY)


class TestDocumentIndex:
    """Tests for DocumentIndex operations."""

    def test_load_absent_entry_is_empty(self, index: DocumentIndex, backend):
        """A missing entry reads as an empty index without writing one."""
        assert index.load() == []
        assert backend.get(KEY) is None

    def test_ensure_creates_once(self, index: DocumentIndex, backend):
        """ensure() writes an empty entry only when none exists."""
        assert index.ensure() is True
        index.add_ids(["a"])

        assert index.ensure() is False
        assert backend.get(KEY) == ["a"]

    def test_add_ids_deduplicates_and_keeps_order(self, index: DocumentIndex):
        """Ids keep first-insertion order and appear once."""
        index.add_ids(["b", "a"])
        index.add_ids(["a", "c", "b", "c"])

        assert index.load() == ["b", "a", "c"]

    def test_remove_ids(self, index: DocumentIndex):
        """remove_ids() drops listed ids and ignores unknown ones."""
        index.add_ids(["a", "b", "c"])

        remaining = index.remove_ids(["b", "zzz"])

        assert remaining == ["a", "c"]
        assert index.load() == ["a", "c"]

    def test_save_replaces(self, index: DocumentIndex):
        """save() overwrites the previous value."""
        index.add_ids(["a", "b"])

        index.save(["c", "c"])

        assert index.load() == ["c"]

    def test_clear(self, index: DocumentIndex, backend):
        """clear() leaves an empty entry behind."""
        index.add_ids(["a"])

        index.clear()

        assert index.load() == []
        assert backend.get(KEY) == []

    @pytest.mark.parametrize("raw", [{"ids": ["a"]}, "a,b", ["a", 1]])
    def test_corrupted_entry(self, index: DocumentIndex, backend, raw):
        """Entries that are not lists of strings are reported."""
        backend.set(KEY, raw)

        with pytest.raises(IndexCorruptedError):
            index.load()

    def test_concurrent_add_ids_lose_nothing(self, index: DocumentIndex):
        """Parallel add_ids() calls through one index keep every id."""
        batches = [[f"id-{worker}-{i}" for i in range(20)] for worker in range(8)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(index.add_ids, batches))

        assert len(index.load()) == 160


class TestKeys:
    """Tests for backend key derivation."""

    def test_index_key(self):
        """The index key is namespaced."""
        assert index_key("vectors") == "vectors.index"

    def test_document_keys_never_collide_with_index(self):
        """No document id maps onto the index key."""
        assert document_key("vectors", "index") != index_key("vectors")
        assert document_key("vectors", "") != index_key("vectors")

    def test_document_keys_are_injective(self):
        """Distinct ids map to distinct keys, separators included."""
        ids = ["a.b", "a", "b", "a/b", "ä", "A"]

        keys = {document_key("ns", doc_id) for doc_id in ids}

        assert len(keys) == len(ids)

    def test_document_key_is_deterministic(self):
        """The same id always maps to the same key."""
        assert document_key("ns", "doc-1") == document_key("ns", "doc-1")
        assert document_key("ns", "doc-1") == "ns.document.646f632d31"
