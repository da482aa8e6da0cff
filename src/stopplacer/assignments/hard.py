"""
Hard assignment strategy for the placement loop.

Assigns each demand point to its nearest stop.
"""

from typing import List, Optional
import math
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation, DistanceMetric
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to the nearest stop.

    Ties go to the stop with the lowest index: ``torch.argmin`` returns the
    first minimal entry of each row.
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        """
        Args:
            metric: Point-to-stop distance (plain Euclidean if None)
        """
        super().__init__()
        self.metric = metric if metric is not None else EuclideanDistance()

    def distance_matrix(self, points: Tensor,
                        representations: List[ClusterRepresentation]) -> Tensor:
        """(n, K) distances from every point to every stop."""
        distances = torch.zeros(points.shape[0], len(representations),
                                dtype=points.dtype, device=points.device)
        for k, representation in enumerate(representations):
            distances[:, k] = self.metric.compute(points, representation)
        return distances

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Assign each point to its nearest stop.

        Args:
            points: (n, 2) demand points
            representations: List of K stop representations

        Returns:
            (n,) tensor of stop indices
        """
        distances = self.distance_matrix(points, representations)
        # NaN distances lose to every real one
        distances = torch.where(torch.isnan(distances),
                                torch.full_like(distances, math.inf), distances)
        return torch.argmin(distances, dim=1)
