"""Distance metrics for equal-length vectors.

Every function returns a non-negative score where lower means more
similar, and raises DimensionMismatchError for vectors of different
lengths.
"""

from collections.abc import Sequence
from math import acos, pi, sqrt

from kvvector.modules.distance.exceptions import DimensionMismatchError


def _check_dimensions(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity, treating zero-magnitude vectors as orthogonal."""
    _check_dimensions(a, b)

    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm_a = sqrt(sum(x * x for x in a))
    norm_b = sqrt(sum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return dot / (norm_a * norm_b)


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine distance (1 - cosine similarity), in [0, 2]."""
    return max(0.0, 1.0 - cosine_similarity(a, b))


def angular_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the angle between two vectors normalized to [0, 1]."""
    similarity = min(1.0, max(-1.0, cosine_similarity(a, b)))
    return acos(similarity) / pi


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the L2 distance."""
    _check_dimensions(a, b)
    return sqrt(sum((x - y) ** 2 for x, y in zip(a, b, strict=True)))


def manhattan_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the L1 distance."""
    _check_dimensions(a, b)
    return sum(abs(x - y) for x, y in zip(a, b, strict=True))


def chebyshev_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the L-infinity distance; 0.0 for empty vectors."""
    _check_dimensions(a, b)
    return max((abs(x - y) for x, y in zip(a, b, strict=True)), default=0.0)
