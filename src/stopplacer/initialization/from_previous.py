"""
Initialization from existing stop locations.

Useful for warm starts, e.g. re-optimizing around last year's stops.
"""

from typing import List, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..representations.centroid import CentroidRepresentation
from ..base.data_structures import ClusterState, Centroid


class FromPreviousInit(InitializationStrategy):
    """Initialize from given stop locations.

    Accepts either:
    - A tensor of shape (n_clusters, 2) with initial locations
    - A ClusterState object from a previous run
    - A sequence of Centroid records or (x, y) pairs
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState, Sequence]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        self.initial_state = initial_state

    def _centers(self, device: torch.device) -> Tensor:
        if isinstance(self.initial_state, ClusterState):
            return self.initial_state.means.to(dtype=torch.float64, device=device)
        if isinstance(self.initial_state, Tensor):
            return self.initial_state.to(dtype=torch.float64, device=device)
        if isinstance(self.initial_state, (list, tuple)):
            rows = [[c.x, c.y] if isinstance(c, Centroid) else list(c)
                    for c in self.initial_state]
            return torch.tensor(rows, dtype=torch.float64, device=device).reshape(-1, 2)
        raise TypeError(f"Unknown initial_state type: {type(self.initial_state)}")

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize from the stored locations.

        Args:
            points: (n, 2) data points (used for validation)
            n_clusters: Expected number of stops

        Returns:
            List of initialized representations
        """
        dimension = points.shape[1]
        centers = self._centers(points.device)

        if centers.shape[0] != n_clusters:
            raise ValueError(f"Initial centers has {centers.shape[0]} stops, "
                             f"but n_clusters={n_clusters}")
        if centers.shape[1] != dimension:
            raise ValueError(f"Initial centers has dimension {centers.shape[1]}, "
                             f"but data has dimension {dimension}")

        representations = []
        for k in range(n_clusters):
            rep = CentroidRepresentation(dimension, points.device)
            rep.mean = centers[k].clone()
            representations.append(rep)
        return representations
