"""
Shared state for stop representations: a float64 location on a device.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation


class BaseRepresentation(ClusterRepresentation):
    """Holds the stop location and checks incoming point batches.

    Args:
        dimension: Coordinates per point (2 for map coordinates)
        device: Where the location tensor lives (CPU if None)
    """

    def __init__(self, dimension: int = 2, device: Optional[torch.device] = None):
        self._dimension = dimension
        self._device = device if device is not None else torch.device('cpu')
        self._mean = torch.zeros(dimension, dtype=torch.float64, device=self._device)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def mean(self) -> Tensor:
        """Current stop location."""
        return self._mean

    @mean.setter
    def mean(self, value: Tensor):
        if value.shape != (self._dimension,):
            raise ValueError(f"Stop location must have shape ({self._dimension},), "
                             f"got {tuple(value.shape)}")
        self._mean = value.to(dtype=torch.float64, device=self._device)

    def _check_points_shape(self, points: Tensor):
        if points.dim() != 2 or points.shape[1] != self._dimension:
            raise ValueError(f"Expected (n, {self._dimension}) points, "
                             f"got shape {tuple(points.shape)}")
