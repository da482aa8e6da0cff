# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the stopplacer test suite.

    >>> homes = make_neighbourhoods(n_per=10, seed=0)
    >>> len(homes)
    30
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from stopplacer import Point


DEFAULT_CENTRES: Tuple[Tuple[float, float], ...] = ((0.0, 0.0), (20.0, 0.0), (10.0, 15.0))


def make_neighbourhoods(
    n_per: int = 20,
    centres: Sequence[Tuple[float, float]] = DEFAULT_CENTRES,
    spread: float = 1.0,
    seed: Optional[int] = None,
) -> List[Point]:
    """
    Homes scattered with isotropic Gaussian noise around each centre.

    Homes are emitted neighbourhood by neighbourhood and labelled
    ``N{c}-{i}``, so the first ``n_per`` points belong to the first centre.
    """
    rng = np.random.default_rng(seed)
    points = []
    for c, (cx, cy) in enumerate(centres):
        xy = rng.normal(loc=(cx, cy), scale=spread, size=(n_per, 2))
        for i, (x, y) in enumerate(xy):
            points.append(Point(f"N{c}-{i}", float(x), float(y)))
    return points


def make_uniform(n: int, low: float = 0.0, high: float = 100.0,
                 seed: Optional[int] = None) -> List[Point]:
    """``n`` homes uniformly distributed over a square."""
    rng = np.random.default_rng(seed)
    xy = rng.uniform(low, high, size=(n, 2))
    return [Point(f"U{i}", float(x), float(y)) for i, (x, y) in enumerate(xy)]


def make_coincident(n: int, x: float = 3.0, y: float = 4.0) -> List[Point]:
    """``n`` homes at exactly the same location."""
    return [Point(f"S{i}", x, y) for i in range(n)]
