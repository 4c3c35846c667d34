"""Distance strategies for similarity scoring."""

from kvvector.modules.distance.calculator import DistanceCalculator, DistanceStrategy
from kvvector.modules.distance.exceptions import DimensionMismatchError, DistanceError

__all__ = [
    "DimensionMismatchError",
    "DistanceCalculator",
    "DistanceError",
    "DistanceStrategy",
]
