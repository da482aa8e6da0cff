"""Distance metrics for facility assignment."""

from .euclidean import EuclideanDistance

__all__ = [
    'EuclideanDistance'
]
