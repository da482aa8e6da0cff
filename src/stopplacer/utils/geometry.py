"""
Planar geometry primitives shared by every component.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union
import math

from ..base.data_structures import Point, Centroid


Located = Union[Point, Centroid]


def distance(a: Located, b: Located) -> float:
    """Euclidean distance between two located records."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extent of a point set.

    A zero span on either axis is reported as a unit span so that
    normalization never divides by zero.
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return (self.max_x - self.min_x) or 1.0

    @property
    def height(self) -> float:
        return (self.max_y - self.min_y) or 1.0

    def normalize(self, x: float, y: float) -> Tuple[float, float]:
        """Map a location into the unit square spanned by the box."""
        return (x - self.min_x) / self.width, (y - self.min_y) / self.height

    def __iter__(self):
        return iter((self.min_x, self.max_x, self.min_y, self.max_y))


def bounding_box(points: Sequence[Located]) -> BoundingBox:
    """Compute (min_x, max_x, min_y, max_y) of a non-empty point set."""
    if len(points) == 0:
        raise ValueError("Cannot compute bounding box of an empty point set")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min(xs), max(xs), min(ys), max(ys))
