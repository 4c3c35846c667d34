"""Distance strategies and the calculator that applies them."""

from collections.abc import Callable, Iterable, Sequence
from enum import Enum

from kvvector.modules.distance import metrics
from kvvector.modules.distance.exceptions import DimensionMismatchError
from kvvector.modules.documents import VectorDocument


class DistanceStrategy(str, Enum):
    """Supported distance metrics. Lower scores always mean more similar."""

    COSINE = "cosine"
    ANGULAR = "angular"
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"


_METRICS: dict[DistanceStrategy, Callable[[Sequence[float], Sequence[float]], float]] = {
    DistanceStrategy.COSINE: metrics.cosine_distance,
    DistanceStrategy.ANGULAR: metrics.angular_distance,
    DistanceStrategy.EUCLIDEAN: metrics.euclidean_distance,
    DistanceStrategy.MANHATTAN: metrics.manhattan_distance,
    DistanceStrategy.CHEBYSHEV: metrics.chebyshev_distance,
}


class DistanceCalculator:
    """Scores vectors against each other under one distance strategy.

    Instances hold no mutable state and can be shared between threads
    and stores.
    """

    def __init__(self, strategy: DistanceStrategy | str = DistanceStrategy.COSINE) -> None:
        """Initialize the calculator.

        Args:
            strategy: Strategy or its string value (e.g. "euclidean").

        Raises:
            ValueError: If the strategy is unknown.
        """
        self._strategy = DistanceStrategy(strategy)
        self._metric = _METRICS[self._strategy]

    @property
    def strategy(self) -> DistanceStrategy:
        """The active distance strategy."""
        return self._strategy

    def compute(self, a: Sequence[float], b: Sequence[float]) -> float:
        """Score two vectors.

        Raises:
            DimensionMismatchError: If the vectors differ in length.
        """
        return self._metric(a, b)

    def score(self, document: VectorDocument, vector: Sequence[float]) -> float:
        """Score one document against a query vector.

        Raises:
            DimensionMismatchError: If the document vector differs in length
                from the query. ``expected`` is the query length.
        """
        if len(document.vector) != len(vector):
            raise DimensionMismatchError(
                expected=len(vector),
                actual=len(document.vector),
                document_id=document.id,
            )
        return self._metric(document.vector, vector)

    def rank(
        self,
        documents: Iterable[VectorDocument],
        vector: Sequence[float],
        max_items: int | None = None,
    ) -> list[tuple[VectorDocument, float]]:
        """Score documents against vector and return them closest first.

        Args:
            documents: Candidate documents.
            vector: Query vector.
            max_items: Optional cap on the number of results.

        Returns:
            (document, score) pairs in ascending score order.

        Raises:
            DimensionMismatchError: If any document vector differs in length.
        """
        return self.order(
            [(document, self.score(document, vector)) for document in documents],
            max_items,
        )

    @staticmethod
    def order(
        scored: Iterable[tuple[VectorDocument, float]],
        max_items: int | None = None,
    ) -> list[tuple[VectorDocument, float]]:
        """Sort scored documents ascending, keeping input order for ties."""
        ordered = sorted(scored, key=lambda item: item[1])
        if max_items is not None:
            return ordered[:max_items]
        return ordered
