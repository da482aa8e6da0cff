# tests/utils.py
"""
Small, reusable helpers used across the stopplacer test suite.

Functions:
- brute_force_pair_distances(points): every unordered pair with its distance, via math.dist.
- sum_squared_to_centroids(points, clusters): independent k-means objective.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import math
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Sequence, Tuple


def brute_force_pair_distances(points: Sequence) -> List[Tuple[float, int, int]]:
    """Return ``(distance, i, j)`` for every ``i < j``, sorted by distance."""
    out = []
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            d = math.dist((points[i].x, points[i].y), (points[j].x, points[j].y))
            out.append((d, i, j))
    return sorted(out)


def sum_squared_to_centroids(points: Sequence, clusters: Sequence) -> float:
    """Sum of squared member-to-centroid distances, computed in pure Python."""
    total = 0.0
    for cluster in clusters:
        for idx in cluster.members:
            dx = points[idx].x - cluster.centroid.x
            dy = points[idx].y - cluster.centroid.y
            total += dx * dx + dy * dy
    return total


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] place {"n":60,"k":3} 0.012s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """Print timing in a compact, machine-readable single line."""
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
