"""
K-means placement of facility points.

Lloyd's algorithm implemented using the modular framework: assign every
home to its nearest stop, move every stop to the mean of its homes, repeat
until no home changes stop.
"""

from typing import Optional, List, Sequence, Union
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusterRepresentation, ClusteringObjective, InitializationStrategy
from ..base.data_structures import PlacementCluster, AssignmentMatrix
from ..assignments.hard import HardAssignment
from ..distances.euclidean import EuclideanDistance
from ..initialization.first_points import FirstPointsInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import AssignmentsUnchanged
from ..utils.validation import PointsLike
from ..updates.mean import MeanUpdater


class KMeansObjective(ClusteringObjective):
    """Sum over homes of the squared distance to the stop serving them."""

    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        total = torch.zeros((), dtype=points.dtype, device=points.device)
        for k, rep in enumerate(representations):
            served = assignments == k
            if served.any():
                total = total + rep.squared_distances(points[served]).sum()
        return total

    @property
    def minimize(self) -> bool:
        return True


class KMeansPlacer(BaseClusteringAlgorithm):
    """Place K stops with Lloyd's algorithm.

    The result is a local optimum: a different initialization can end in a
    different placement. The default initialization is deterministic, so
    a given snapshot and K always produce the same stops.

    Parameters
    ----------
    n_clusters : int
        Requested number of stops. Clamped to the number of points;
        non-positive values place nothing.
    init : str or sequence, default='first-points'
        Initialization method:
        - 'first-points' : stop i starts on point i
        - sequence of (x, y) pairs or Centroid records : warm start from
          existing stop locations (length must equal the effective K)
    max_iter : int, default=50
        Maximum number of assignment/update rounds
    verbose : int, default=0
        Verbosity level
    device : torch.device, optional
        Device for computation (CPU if None)

    Attributes
    ----------
    clusters_ : list of PlacementCluster
        Exactly ``effective_k_`` clusters, possibly some empty
    effective_k_ : int
        K after clamping
    labels_ : Tensor of shape (n_samples,)
        Stop index per point
    cluster_centers_ : Tensor of shape (effective_k_, 2)
        Stop locations
    inertia_ : float
        Sum of squared distances to assigned stops
    n_iter_ : int
        Number of rounds run
    converged_ : bool
        Whether a fixed point was reached before ``max_iter``
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Sequence] = 'first-points',
                 max_iter: int = 50,
                 verbose: int = 0,
                 device: Optional[torch.device] = None):
        """Initialize K-means placement."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            device=device
        )
        self.init = init
        self.clusters_: List[PlacementCluster] = []

    def _make_initializer(self) -> InitializationStrategy:
        if not isinstance(self.init, str):
            return FromPreviousInit(self.init)
        if self.init == "first-points":
            return FirstPointsInit()
        raise ValueError(f"Unknown init method: {self.init}")

    def _create_components(self) -> None:
        # Nearest stop by true distance, recentre on the mean, stop when stable
        self.initialization_strategy = self._make_initializer()
        self.assignment_strategy = HardAssignment(EuclideanDistance())
        self.update_strategy = MeanUpdater()
        self.convergence_criterion = AssignmentsUnchanged()
        self.objective = KMeansObjective()

    def _create_representations(self, data: Tensor) -> List[ClusterRepresentation]:
        return self.initialization_strategy.initialize(data, self.effective_k_)

    def fit(self, X: PointsLike, y=None) -> 'KMeansPlacer':
        """Fit K-means placement.

        Parameters
        ----------
        X : sequence of Point or array of shape (n_samples, 2)
            Demand point snapshot
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeansPlacer
            Fitted estimator
        """
        super().fit(X, y)

        members = AssignmentMatrix(self.labels_, self.effective_k_).to_members() \
            if self.effective_k_ > 0 else []
        self.clusters_ = [
            PlacementCluster(members=members[k], centroid=rep.as_centroid())
            for k, rep in enumerate(self.representations)
        ]
        return self

    def place(self, X: PointsLike) -> List[PlacementCluster]:
        """Fit and return the placed clusters."""
        return list(self.fit(X).clusters_)

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['init'] = self.init
        return params


def place_by_kmeans(points: PointsLike, k: int,
                    max_iterations: int = 50,
                    verbose: int = 0) -> List[PlacementCluster]:
    """Place ``min(k, len(points))`` stops by K-means.

    Returns an empty list when there are no points or ``k <= 0``.
    """
    return KMeansPlacer(k, max_iter=max_iterations, verbose=verbose).place(points)
