"""
Pluggable pieces of the iterative placement loop.

A placement run alternates two steps: every demand point picks a facility
(assignment), then every facility moves to suit the points that picked it
(update). Each piece of that loop is an abstract class here so the loop in
``clustering_base`` never depends on a concrete facility model.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List
from torch import Tensor


class ClusterRepresentation(ABC):
    """A placed facility: its location plus the rules for moving it."""

    @abstractmethod
    def squared_distances(self, points: Tensor) -> Tensor:
        """(n,) squared distances from ``points`` (n, 2) to the facility."""
        pass

    @abstractmethod
    def update_from_points(self, points: Tensor, **kwargs) -> None:
        """Relocate the facility for the (m, 2) points it now serves."""
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Copies of the tensors that define the facility."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        pass


class AssignmentStrategy(ABC):
    """Decides which facility serves each demand point."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Return an (n,) long tensor of facility indices for ``points``."""
        pass


class ParameterUpdater(ABC):
    """Moves one facility given the points assigned to it."""

    @abstractmethod
    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               **kwargs) -> None:
        """Update ``representation`` in place.

        ``points`` holds only the facility's own points and is never empty;
        the loop skips facilities nobody chose.
        """
        pass


class DistanceMetric(ABC):
    """Point-to-facility distance used by assignment strategies."""

    @abstractmethod
    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        pass


class InitializationStrategy(ABC):
    """Produces the starting facilities for a run."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> List[ClusterRepresentation]:
        """Create ``n_clusters`` facilities for the (n, 2) demand points."""
        pass


class ConvergenceCriterion(ABC):
    """Decides when the placement loop may stop.

    Implementations append one dict per ``check`` call to ``history``.
    """

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Inspect the state of the round just finished.

        ``current_state`` carries ``iteration``, ``objective``,
        ``assignments`` and ``cluster_state``.
        """
        pass

    def reset(self):
        self.history = []


class ClusteringObjective(ABC):
    """Scalar score of a placement."""

    @abstractmethod
    def compute(self, points: Tensor,
                representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Zero-dimensional tensor scoring ``assignments`` against the facilities."""
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """True when lower scores are better."""
        pass
