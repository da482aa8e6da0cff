"""
Input validation and conversion utilities.

The core operations take a snapshot of the point store and convert it to a
tensor; numeric filtering happens earlier, when points are entered.
"""

from typing import Optional, Union, Sequence, List, Any
import math
import warnings
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import Point


PointsLike = Union[Sequence[Point], Sequence[Sequence[float]], np.ndarray, Tensor]

DTYPE = torch.float64


def make_point(x: Any, y: Any, point_id: Optional[str] = None,
               n_existing: int = 0) -> Point:
    """Build a point from raw form input.

    Args:
        x: Raw x coordinate (number or numeric string)
        y: Raw y coordinate (number or numeric string)
        point_id: Optional label; blank labels default to ``P{n_existing + 1}``
        n_existing: Number of points already in the store

    Returns:
        Validated point

    Raises:
        ValueError: If a coordinate is not a finite number
    """
    coords = []
    for name, raw in (('x', x), ('y', y)):
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Coordinate {name} is not numeric: {raw!r}")
        if not math.isfinite(value):
            raise ValueError(f"Coordinate {name} must be finite, got {value}")
        coords.append(value)

    label = (point_id or '').strip() or f"P{n_existing + 1}"
    return Point(id=label, x=coords[0], y=coords[1])


def as_point_list(points: PointsLike) -> List[Point]:
    """Return the input as a list of points.

    Coordinate arrays get synthetic ids ``P1, P2, ...``.
    """
    if isinstance(points, (Tensor, np.ndarray)):
        coords = validate_points(points).tolist()
        return [Point(f"P{i + 1}", x, y) for i, (x, y) in enumerate(coords)]

    result = []
    for i, p in enumerate(points):
        if isinstance(p, Point):
            result.append(p)
        else:
            x, y = p
            result.append(Point(f"P{i + 1}", float(x), float(y)))
    return result


def validate_points(points: PointsLike,
                    device: Optional[torch.device] = None) -> Tensor:
    """Convert a point snapshot to an (n, 2) float64 tensor.

    Args:
        points: Sequence of points, sequence of (x, y) pairs, or (n, 2) array
        device: Target device (CPU if None)

    Returns:
        (n, 2) tensor; (0, 2) for an empty snapshot

    Raises:
        TypeError: If the container type is not supported
        ValueError: If the data is not two-dimensional point data
    """
    if device is None:
        device = torch.device('cpu')

    if isinstance(points, Tensor):
        X = points.to(dtype=DTYPE, device=device)
    elif isinstance(points, np.ndarray):
        X = torch.from_numpy(np.asarray(points, dtype=np.float64)).to(device)
    elif isinstance(points, (list, tuple)):
        if len(points) == 0:
            return torch.zeros((0, 2), dtype=DTYPE, device=device)
        rows = [[p.x, p.y] if isinstance(p, Point) else list(p) for p in points]
        X = torch.tensor(rows, dtype=DTYPE, device=device)
    else:
        raise TypeError(f"Cannot convert {type(points)} to point tensor")

    if X.numel() == 0:
        return torch.zeros((0, 2), dtype=DTYPE, device=device)

    if X.dim() != 2 or X.shape[1] != 2:
        raise ValueError(f"Expected (n, 2) point data, got shape {tuple(X.shape)}")

    return X


def check_n_clusters(n_clusters: int, n_points: int) -> int:
    """Clamp the requested facility count to the number of demand points.

    Non-positive requests map to 0 (nothing to place). Requests above
    ``n_points`` are reduced with a warning so the reinterpretation is
    visible to the caller.
    """
    if n_clusters <= 0 or n_points == 0:
        return 0
    if n_clusters > n_points:
        warnings.warn(f"Requested {n_clusters} stops but only {n_points} "
                      f"points are available; using {n_points}")
        return n_points
    return n_clusters
