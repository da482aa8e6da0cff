"""
Placement quality metrics.

Provides the distance matrix used by the pair and hierarchy searches and
the coverage evaluation of a finished placement. A point's own cluster is
authoritative: distances are always measured to the centroid of the
cluster that lists the point as a member, never to the globally nearest
centroid.
"""

from typing import List, Optional, Sequence
import torch
from torch import Tensor

from ..base.data_structures import PlacementCluster, EvaluationMetrics
from .validation import validate_points, PointsLike, DTYPE


def pairwise_distances(X: Tensor, Y: Optional[Tensor] = None) -> Tensor:
    """Compute Euclidean distances between all pairs of points.

    Differences are formed explicitly (no ``|x|² + |y|² - 2<x,y>`` trick) so
    the matrix is exactly symmetric and exactly zero for coincident points.

    Args:
        X: (n, 2) first set of points
        Y: (m, 2) second set of points (if None, uses X)

    Returns:
        (n, m) distance matrix
    """
    if Y is None:
        Y = X
    diff = X.unsqueeze(1) - Y.unsqueeze(0)
    return torch.sqrt((diff * diff).sum(dim=2))


def _centroid_tensor(cluster: PlacementCluster, like: Tensor) -> Tensor:
    return torch.tensor([cluster.centroid.x, cluster.centroid.y],
                        dtype=like.dtype, device=like.device)


def walking_distances(points: PointsLike,
                      clusters: Sequence[PlacementCluster]) -> Tensor:
    """Distance from every point to its own cluster's centroid.

    Returns:
        (n,) tensor; points not listed in any cluster hold ``nan``
    """
    X = validate_points(points)
    out = torch.full((X.shape[0],), float('nan'), dtype=DTYPE, device=X.device)
    for cluster in clusters:
        if not cluster.members:
            continue
        idx = torch.tensor(cluster.members, dtype=torch.long, device=X.device)
        diff = X[idx] - _centroid_tensor(cluster, X).unsqueeze(0)
        out[idx] = torch.sqrt((diff * diff).sum(dim=1))
    return out


def inertia(points: PointsLike, clusters: Sequence[PlacementCluster]) -> float:
    """Sum of squared member-to-centroid distances."""
    d = walking_distances(points, clusters)
    d = d[~torch.isnan(d)]
    return float((d * d).sum().item())


def evaluate_placement(points: PointsLike,
                       clusters: Sequence[PlacementCluster],
                       max_walk_distance: float) -> EvaluationMetrics:
    """Summarize how well the placed stops serve the demand points.

    Args:
        points: Demand point snapshot
        clusters: Placement produced by :func:`place_by_kmeans`
        max_walk_distance: Coverage threshold (inclusive)

    Returns:
        EvaluationMetrics; all zero when there are no points
    """
    X = validate_points(points)
    n = X.shape[0]

    total = 0.0
    max_d = 0.0
    covered = 0
    for cluster in clusters:
        if not cluster.members:
            continue
        idx = torch.tensor(cluster.members, dtype=torch.long, device=X.device)
        diff = X[idx] - _centroid_tensor(cluster, X).unsqueeze(0)
        d = torch.sqrt((diff * diff).sum(dim=1))
        total += float(d.sum().item())
        max_d = max(max_d, float(d.max().item()))
        covered += int((d <= max_walk_distance).sum().item())

    return EvaluationMetrics(
        total_points=n,
        stop_count=len(clusters),
        avg_distance=total / n if n > 0 else 0.0,
        max_distance=max_d,
        covered_count=covered,
        coverage_percent=100.0 * covered / n if n > 0 else 0.0,
    )


class PlacementEvaluator:
    """Evaluate placements against a fixed walking-distance threshold.

    Parameters
    ----------
    max_walk_distance : float
        Largest acceptable walk from a home to its stop (inclusive).
    """

    def __init__(self, max_walk_distance: float):
        self.max_walk_distance = max_walk_distance

    def evaluate(self, points: PointsLike,
                 clusters: Sequence[PlacementCluster]) -> EvaluationMetrics:
        return evaluate_placement(points, clusters, self.max_walk_distance)

    def coverage_curve(self, points: PointsLike,
                       clusters: Sequence[PlacementCluster],
                       thresholds: Sequence[float]) -> List[float]:
        """Coverage percentage for each threshold in ``thresholds``."""
        return [evaluate_placement(points, clusters, t).coverage_percent
                for t in thresholds]

    def get_params(self, deep: bool = True):
        return {'max_walk_distance': self.max_walk_distance}

    def set_params(self, **params) -> 'PlacementEvaluator':
        for key, value in params.items():
            setattr(self, key, value)
        return self
