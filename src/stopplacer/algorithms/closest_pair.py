"""
Nearest pair of demand points.

Brute force over every unordered pair; quadratic in the number of points,
which is fine for the point counts a single school route produces.
"""

from typing import Union
import math
import torch

from ..base.data_structures import ClosestPair, InsufficientData
from ..utils.metrics import pairwise_distances
from ..utils.validation import as_point_list, validate_points, PointsLike


class ClosestPairFinder:
    """Find the two demand points closest to each other.

    Pairs are enumerated as ``(i, j)`` with ``i`` ascending, then ``j > i``
    ascending; the first pair at the minimal distance wins.

    Parameters
    ----------
    verbose : int, default=0
        Verbosity level
    """

    def __init__(self, verbose: int = 0):
        self.verbose = verbose

    def find(self, points: PointsLike) -> Union[ClosestPair, InsufficientData]:
        """Return the closest pair, or InsufficientData for fewer than 2 points."""
        pts = as_point_list(points)
        n = len(pts)
        if n < 2:
            if self.verbose:
                print(f"Closest pair needs 2 points, got {n}")
            return InsufficientData(required=2, available=n)

        D = pairwise_distances(validate_points(pts))

        # Row-major upper triangle; argmin returns the first minimum.
        # Pairs involving a NaN coordinate never win.
        rows, cols = torch.triu_indices(n, n, offset=1)
        pair_d = D[rows, cols]
        pair_d = torch.where(torch.isnan(pair_d), torch.full_like(pair_d, math.inf), pair_d)
        best = int(torch.argmin(pair_d).item())
        i, j = int(rows[best]), int(cols[best])

        result = ClosestPair(
            first=pts[i],
            second=pts[j],
            first_index=i,
            second_index=j,
            distance=float(pair_d[best].item())
        )
        if self.verbose:
            print(f"Closest pair: {pts[i].id} and {pts[j].id} "
                  f"at {result.distance:.3f} ({n * (n - 1) // 2} pairs checked)")
        return result

    def get_params(self, deep: bool = True):
        return {'verbose': self.verbose}

    def set_params(self, **params) -> 'ClosestPairFinder':
        for key, value in params.items():
            setattr(self, key, value)
        return self


def find_closest_pair(points: PointsLike) -> Union[ClosestPair, InsufficientData]:
    """Closest pair of points, or InsufficientData when ``len(points) < 2``."""
    return ClosestPairFinder().find(points)
