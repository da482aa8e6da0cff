"""
A bus stop modelled as a single location.
"""

from typing import Dict
from torch import Tensor

from .base_representation import BaseRepresentation
from ..base.data_structures import Centroid


class CentroidRepresentation(BaseRepresentation):
    """Stop located at the mean of the homes it serves."""

    def squared_distances(self, points: Tensor) -> Tensor:
        self._check_points_shape(points)
        offsets = points - self._mean.unsqueeze(0)
        return (offsets * offsets).sum(dim=1)

    def update_from_points(self, points: Tensor, **kwargs) -> None:
        """Move to the mean of ``points``; stay put when nobody is assigned."""
        self._check_points_shape(points)
        if points.shape[0] > 0:
            self._mean = points.mean(dim=0)

    def get_parameters(self) -> Dict[str, Tensor]:
        return {'mean': self._mean.clone()}

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        if 'mean' in params:
            self.mean = params['mean']

    def as_centroid(self) -> Centroid:
        """Location as a plain record."""
        x, y = self._mean.tolist()
        return Centroid(x, y)

    def __repr__(self) -> str:
        x, y = self._mean.tolist()
        return f"CentroidRepresentation(x={x:.3f}, y={y:.3f})"
