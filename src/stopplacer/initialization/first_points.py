"""
Deterministic initialization from the first demand points.

Centroid ``i`` starts on point ``i``. There are no random restarts, so a
placement is reproducible for a given snapshot and ``k``; the local optimum
it reaches still depends on the order of the snapshot.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..representations.centroid import CentroidRepresentation


class FirstPointsInit(InitializationStrategy):
    """Seed stop ``i`` at the coordinates of demand point ``i``."""

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize stops on the first ``n_clusters`` points.

        Args:
            points: (n, 2) demand points, n >= n_clusters
            n_clusters: Number of stops

        Returns:
            List of centroid representations
        """
        if n_clusters > points.shape[0]:
            raise ValueError(f"Cannot seed {n_clusters} stops from "
                             f"{points.shape[0]} points")

        representations = []
        for k in range(n_clusters):
            rep = CentroidRepresentation(points.shape[1], points.device)
            rep.mean = points[k].clone()
            representations.append(rep)
        return representations
