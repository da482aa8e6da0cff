"""
Core data structures for the stop placement engine.

This module provides the plain records exchanged with collaborators
(points, dendrogram nodes, placement clusters, metrics) and the
bookkeeping structures used by the iterative placement loop.
"""

from typing import Optional, List, Tuple, Dict, Any, FrozenSet
import torch
from torch import Tensor
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class Point:
    """A demand point such as a student home."""
    id: str
    x: float
    y: float


@dataclass(frozen=True)
class Centroid:
    """Location of a placed facility (bus stop)."""
    x: float
    y: float


@dataclass(frozen=True)
class ClosestPair:
    """Nearest pair of demand points and their separation."""
    first: Point
    second: Point
    first_index: int
    second_index: int
    distance: float

    @property
    def pair(self) -> Tuple[Point, Point]:
        return (self.first, self.second)


@dataclass(frozen=True)
class InsufficientData:
    """Result variant for operations given fewer points than they need."""
    required: int
    available: int

    def __str__(self) -> str:
        return (f"Need at least {self.required} points, "
                f"got {self.available}")


@dataclass(frozen=True)
class ClusterNode:
    """Node of the average-linkage dendrogram.

    Leaves hold a single point index and height 0. Internal nodes own
    their two children; members are the left members followed by the
    right members.
    """
    id: str
    members: Tuple[int, ...]
    left: Optional['ClusterNode'] = None
    right: Optional['ClusterNode'] = None
    height: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def member_set(self) -> FrozenSet[int]:
        return frozenset(self.members)


@dataclass(frozen=True)
class MergeStep:
    """One entry of the chronological merge log."""
    merged_id: str
    left_id: str
    right_id: str
    distance: float
    resulting_size: int


@dataclass(frozen=True)
class Hierarchy:
    """Merge log plus dendrogram root (None for an empty point set)."""
    merge_steps: List[MergeStep]
    root: Optional[ClusterNode]

    def __iter__(self):
        # Allows ``steps, root = build_hierarchy(points)``
        return iter((self.merge_steps, self.root))


@dataclass
class PlacementCluster:
    """Demand points served by one facility and the facility location."""
    members: List[int]
    centroid: Centroid

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class EvaluationMetrics:
    """Coverage and walking-distance summary of a placement."""
    total_points: int
    stop_count: int
    avg_distance: float
    max_distance: float
    covered_count: int
    coverage_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ClusterState:
    """Facility centroids at a given iteration.

    Stored as a single (K, 2) tensor so snapshots are cheap to take and
    compare across iterations.
    """

    means: Tensor  # (K, 2) centroids
    n_clusters: int
    dimension: int = 2

    def __post_init__(self):
        assert self.means.shape == (self.n_clusters, self.dimension)

    def centroids(self) -> List[Centroid]:
        """Centroids as plain records."""
        return [Centroid(float(x), float(y)) for x, y in self.means.tolist()]


class AssignmentMatrix:
    """Hard point-to-facility assignments with aggregation helpers."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) cluster index per point
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        self._validate_and_store(assignments)

    def _validate_and_store(self, assignments: Tensor):
        """Validate and store assignments."""
        assert assignments.dim() == 1
        if assignments.numel() > 0:
            assert assignments.max() < self.n_clusters
            assert assignments.min() >= 0
        self._assignments = assignments.long()

    @property
    def n_points(self) -> int:
        """Number of data points."""
        return self._assignments.shape[0]

    def get_hard(self) -> Tensor:
        """Cluster index per point."""
        return self._assignments

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Indices of points assigned to a specific cluster, ascending."""
        return torch.where(self._assignments == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self._assignments, minlength=self.n_clusters)

    def to_members(self) -> List[List[int]]:
        """Member index lists, one per cluster, in point order."""
        members: List[List[int]] = [[] for _ in range(self.n_clusters)]
        for idx, c in enumerate(self._assignments.tolist()):
            members[c].append(idx)
        return members


@dataclass
class AlgorithmState:
    """Snapshot of the placement loop at a given iteration.

    Used for convergence checking, objective tracking and debugging.
    """
    iteration: int
    cluster_state: ClusterState
    assignments: AssignmentMatrix
    objective_value: float
    n_changed: int = 0
    converged: bool = False
