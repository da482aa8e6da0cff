"""
Recentring update: a stop moves to the mean of the homes it serves.
"""

from torch import Tensor

from ..base.interfaces import ParameterUpdater, ClusterRepresentation


class MeanUpdater(ParameterUpdater):
    """Lloyd update step for centroid stops."""

    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               **kwargs) -> None:
        representation.update_from_points(points, **kwargs)
