"""
Straight-line walking distance from homes to a stop.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric, ClusterRepresentation


class EuclideanDistance(DistanceMetric):
    """Euclidean distance to the stop location ``mean``."""

    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        location = representation.get_parameters().get('mean')
        if location is None:
            raise ValueError(f"{type(representation).__name__} has no stop location")

        offsets = points - location.unsqueeze(0)
        return torch.sqrt((offsets * offsets).sum(dim=1))
