"""Brute-force vector store on top of a key-value backend."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Literal
from uuid import UUID

import structlog

from kvvector.infrastructure.keyvalue import KeyValueStore
from kvvector.infrastructure.observability import add_span_attributes, get_tracer, traced
from kvvector.modules.distance import DimensionMismatchError, DistanceCalculator
from kvvector.modules.documents import Vector, VectorDocument
from kvvector.modules.store.exceptions import InvalidArgumentError
from kvvector.modules.store.index import DocumentIndex
from kvvector.modules.store.keys import document_key, index_key
from kvvector.modules.store.options import QueryOptions, parse_query_options, reject_options

logger = structlog.get_logger()
tracer = get_tracer(__name__)

DimensionMismatchPolicy = Literal["raise", "skip"]


class Store:
    """Vector store that searches every document on each query.

    Documents live under one backend key each; a DocumentIndex entry
    lists the live ids because the backend cannot enumerate keys. A
    query loads the index, fetches and scores every document, applies
    the optional filter, sorts ascending by distance (stable, so ties
    keep index order) and truncates to ``maxItems``.

    Writes go document first, index second. A backend failure between
    the two is not rolled back: an add can leave unindexed documents
    behind, a remove can leave index ids whose document is gone. Queries
    skip such ids, and repeating the failed call converges.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        distance_calculator: DistanceCalculator | None = None,
        *,
        namespace: str = "vectors",
        on_dimension_mismatch: DimensionMismatchPolicy = "raise",
        index: DocumentIndex | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            backend: Key-value backend. The caller owns its lifecycle.
            distance_calculator: Scoring strategy. Defaults to cosine distance.
            namespace: Prefix for every key this store writes.
            on_dimension_mismatch: "raise" fails the whole query with
                DimensionMismatchError; "skip" leaves the document out and
                logs a warning.
            index: Index to share with other stores on the same backend.
                Built from the namespace when omitted.

        Raises:
            ValueError: If the namespace or mismatch policy is invalid.
        """
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        if on_dimension_mismatch not in ("raise", "skip"):
            raise ValueError("on_dimension_mismatch must be 'raise' or 'skip'")

        self._backend = backend
        self._calculator = distance_calculator or DistanceCalculator()
        self._namespace = namespace
        self._on_dimension_mismatch = on_dimension_mismatch
        self._index = index or DocumentIndex(backend, index_key(namespace))

    @property
    def namespace(self) -> str:
        """Prefix of every key written by this store."""
        return self._namespace

    @property
    def distance_calculator(self) -> DistanceCalculator:
        """Calculator used to score documents."""
        return self._calculator

    def setup(self, options: Mapping[str, Any] | None = None) -> None:
        """Create the index entry if missing. Safe to call repeatedly.

        Calling setup() is optional: every operation treats a missing
        index as an empty store.

        Raises:
            UnsupportedOptionError: If any option is given.
        """
        reject_options(options, operation="setup")

        with tracer.start_as_current_span("store.setup"):
            created = self._index.ensure()
            add_span_attributes(
                {"store.namespace": self._namespace, "store.index_created": created}
            )

        logger.info("store_setup", namespace=self._namespace, index_created=created)

    def drop(self, options: Mapping[str, Any] | None = None) -> None:
        """Delete every indexed document, then empty the index.

        Raises:
            UnsupportedOptionError: If any option is given.
        """
        reject_options(options, operation="drop")

        with tracer.start_as_current_span("store.drop"), self._index.locked():
            ids = self._index.load()
            add_span_attributes(
                {"store.namespace": self._namespace, "store.document_count": len(ids)}
            )

            try:
                for doc_id in ids:
                    self._backend.delete(self._document_key(doc_id))
                self._index.clear()
            except Exception as e:
                logger.error(
                    "store_drop_failed",
                    namespace=self._namespace,
                    document_count=len(ids),
                    error=str(e),
                )
                raise

        logger.info("store_dropped", namespace=self._namespace, count=len(ids))

    def add(
        self,
        documents: VectorDocument | Iterable[VectorDocument],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Store documents, replacing any with the same id.

        Args:
            documents: One document or an iterable of documents.
            options: No options are defined.

        Raises:
            UnsupportedOptionError: If any option is given.
            InvalidArgumentError: If an item is not a VectorDocument.
        """
        reject_options(options, operation="add")
        batch = self._normalize_documents(documents)
        if not batch:
            return

        with tracer.start_as_current_span("store.add"), self._index.locked():
            add_span_attributes(
                {"store.namespace": self._namespace, "store.document_count": len(batch)}
            )

            written: list[str] = []
            try:
                for document in batch:
                    self._backend.set(self._document_key(document.id), document.to_dict())
                    written.append(document.id)
                total = len(self._index.add_ids(written))
            except Exception as e:
                logger.error(
                    "store_add_failed",
                    namespace=self._namespace,
                    written_count=len(written),
                    document_count=len(batch),
                    failed_id=batch[len(written)].id if len(written) < len(batch) else None,
                    error=str(e),
                )
                raise

            add_span_attributes({"store.total_count": total})

        logger.debug(
            "store_documents_added",
            namespace=self._namespace,
            count=len(batch),
            total_count=total,
        )

    def remove(
        self,
        ids: str | UUID | Iterable[str | UUID],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Remove documents by id. Unknown ids are ignored.

        Args:
            ids: One id or an iterable of ids.
            options: No options are defined; any entry is rejected.

        Raises:
            InvalidArgumentError: If options are given, before anything
                is deleted.
        """
        if options:
            raise InvalidArgumentError("No supported options.", operation="remove")

        targets = self._normalize_ids(ids)
        if not targets:
            return

        with tracer.start_as_current_span("store.remove"), self._index.locked():
            add_span_attributes(
                {"store.namespace": self._namespace, "store.id_count": len(targets)}
            )

            try:
                for doc_id in targets:
                    self._backend.delete(self._document_key(doc_id))
                remaining = len(self._index.remove_ids(targets))
            except Exception as e:
                logger.error(
                    "store_remove_failed",
                    namespace=self._namespace,
                    id_count=len(targets),
                    error=str(e),
                )
                raise

            add_span_attributes({"store.total_count": remaining})

        logger.debug(
            "store_documents_removed",
            namespace=self._namespace,
            count=len(targets),
            total_count=remaining,
        )

    def query(
        self,
        vector: Vector | Sequence[float],
        options: Mapping[str, Any] | QueryOptions | None = None,
    ) -> Iterator[VectorDocument]:
        """Return documents ordered from most to least similar.

        Args:
            vector: Query vector.
            options: ``maxItems`` (positive int) caps the result count;
                ``filter`` (callable taking a VectorDocument) keeps only
                documents it returns true for. The filter runs before
                truncation.

        Returns:
            An iterator over the results. Iterate it once; query again
            to start over.

        Raises:
            UnsupportedOptionError: If an unknown option is given.
            InvalidArgumentError: If an option value is invalid.
            DimensionMismatchError: If a stored vector differs in length
                and the store was built with on_dimension_mismatch="raise".
        """
        query_options = parse_query_options(options)
        query_vector = vector if isinstance(vector, Vector) else Vector(tuple(vector))

        with tracer.start_as_current_span("store.query"):
            add_span_attributes(
                {
                    "store.namespace": self._namespace,
                    "store.strategy": self._calculator.strategy.value,
                    "store.dimensions": query_vector.dimensions,
                }
            )
            if query_options.max_items is not None:
                add_span_attributes({"store.max_items": query_options.max_items})

            ids = self._index.load()
            add_span_attributes({"store.candidate_count": len(ids)})
            if not ids:
                add_span_attributes({"store.result_count": 0})
                return iter(())

            scored = self._score(self._fetch(ids), query_vector)
            if query_options.filter is not None:
                document_filter = query_options.filter
                scored = [item for item in scored if document_filter(item[0])]

            results = [
                document
                for document, _ in DistanceCalculator.order(scored, query_options.max_items)
            ]
            add_span_attributes({"store.result_count": len(results)})

        logger.debug(
            "store_query_completed",
            namespace=self._namespace,
            strategy=self._calculator.strategy.value,
            candidates=len(ids),
            results=len(results),
        )

        return iter(results)

    @traced(span_name="store.count")
    def count(self) -> int:
        """Return the number of indexed documents."""
        return len(self._index.load())

    def _document_key(self, doc_id: str) -> str:
        return document_key(self._namespace, doc_id)

    def _fetch(self, ids: list[str]) -> list[VectorDocument]:
        documents: list[VectorDocument] = []
        for doc_id in ids:
            payload = self._backend.get(self._document_key(doc_id))
            if payload is None:
                logger.warning(
                    "store_document_missing",
                    namespace=self._namespace,
                    document_id=doc_id,
                )
                continue
            documents.append(VectorDocument.from_dict(payload))
        return documents

    def _score(
        self,
        documents: list[VectorDocument],
        vector: Vector,
    ) -> list[tuple[VectorDocument, float]]:
        scored: list[tuple[VectorDocument, float]] = []
        for document in documents:
            try:
                scored.append((document, self._calculator.score(document, vector)))
            except DimensionMismatchError as e:
                if self._on_dimension_mismatch == "raise":
                    raise
                logger.warning(
                    "store_dimension_mismatch_skipped",
                    namespace=self._namespace,
                    document_id=document.id,
                    expected=e.expected,
                    actual=e.actual,
                )
        return scored

    @staticmethod
    def _normalize_documents(
        documents: VectorDocument | Iterable[VectorDocument],
    ) -> list[VectorDocument]:
        batch = [documents] if isinstance(documents, VectorDocument) else list(documents)
        for document in batch:
            if not isinstance(document, VectorDocument):
                raise InvalidArgumentError(
                    f"Expected VectorDocument, got {type(document).__name__}",
                    operation="add",
                )
        return batch

    @staticmethod
    def _normalize_ids(ids: str | UUID | Iterable[str | UUID]) -> list[str]:
        if isinstance(ids, str | UUID):
            ids = [ids]
        normalized: list[str] = []
        for doc_id in ids:
            if isinstance(doc_id, UUID):
                doc_id = str(doc_id)
            if not isinstance(doc_id, str):
                raise InvalidArgumentError(
                    f"Document ids must be strings, got {type(doc_id).__name__}",
                    operation="remove",
                )
            normalized.append(doc_id)
        return list(dict.fromkeys(normalized))
