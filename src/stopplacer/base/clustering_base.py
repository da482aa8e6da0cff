"""
Iterative placement skeleton.

Runs rounds of "every home picks a stop, every stop recentres on its homes"
until the pluggable convergence criterion is satisfied or the round cap is
hit. Concrete placers only choose the pieces.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Tuple
import time
import warnings
import torch
from torch import Tensor

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import ClusterState, AssignmentMatrix, AlgorithmState
from ..utils.validation import validate_points, check_n_clusters, PointsLike


class BaseClusteringAlgorithm:
    """Alternating assignment/update placement loop.

    Subclasses provide, through ``_create_components``, the assignment and
    update strategies, the initialization, the convergence criterion and the
    objective, and build the starting stops in ``_create_representations``.

    Args:
        n_clusters: Requested number of stops; clamped by ``check_n_clusters``
        max_iter: Cap on assignment/update rounds
        verbose: 0 silent, 1 progress every 10 rounds, 2 every round
        device: Torch device (CPU if None)
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 50,
                 verbose: int = 0,
                 device: Optional[torch.device] = None):
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.device = device if device is not None else torch.device('cpu')

        # Filled in by _create_components
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None
        self.representations: Optional[List[ClusterRepresentation]] = None

        self.fitted_ = False
        self.effective_k_ = 0
        self.n_iter_ = 0
        self.converged_ = False
        self.labels_: Optional[Tensor] = None
        self.history_: List[AlgorithmState] = []
        self._final_objective = 0.0

    @abstractmethod
    def _create_components(self) -> None:
        """Set the five strategy attributes for a fresh run."""
        pass

    @abstractmethod
    def _create_representations(self, data: Tensor) -> List[ClusterRepresentation]:
        """Starting stops for the (n, 2) ``data``; exactly ``effective_k_`` of them."""
        pass

    def fit(self, X: PointsLike, y=None) -> 'BaseClusteringAlgorithm':
        """Place stops for the snapshot ``X``. ``y`` is ignored."""
        return self._fit(X)

    def fit_predict(self, X: PointsLike, y=None) -> Tensor:
        """Place stops and return the stop index of every point."""
        return self._fit(X).labels_

    def predict(self, X: PointsLike) -> Tensor:
        """Nearest placed stop for each of the points in ``X``."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")
        if not self.representations:
            raise ValueError("No facilities were placed; nothing to predict against")
        return self.assignment_strategy.compute_assignments(
            self._validate_data(X), self.representations
        )

    def _fit(self, X: PointsLike) -> 'BaseClusteringAlgorithm':
        X = self._validate_data(X)
        n_points = X.shape[0]

        self.effective_k_ = check_n_clusters(self.n_clusters, n_points)
        self.n_iter_ = 0
        self.converged_ = False
        self.history_ = []
        self._final_objective = 0.0
        self.labels_ = torch.zeros(n_points, dtype=torch.long, device=self.device)

        if self.effective_k_ == 0:
            if self.verbose:
                print("Nothing to place")
            self.representations = []
            self.fitted_ = True
            return self

        self._create_components()
        if self.verbose:
            print(f"Seeding {self.effective_k_} stops over {n_points} points...")

        started = time.time()
        self.representations = self._create_representations(X)
        self.convergence_criterion.reset()

        labels = self.labels_
        for round_idx in range(self.max_iter):
            round_started = time.time()
            labels, state = self._run_round(X, round_idx)
            self.history_.append(state)
            self.n_iter_ = round_idx + 1

            if self.verbose >= 2 or (self.verbose >= 1 and round_idx % 10 == 0):
                print(f"Round {round_idx:3d}: objective = {state.objective_value:.6f} "
                      f"moved = {state.n_changed} ({time.time() - round_started:.3f}s)")

            if state.converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Stable after {self.n_iter_} rounds")
                break

        self.labels_ = labels
        self._final_objective = self.objective.compute(
            X, self.representations, labels
        ).item()

        if self.verbose:
            if not self.converged_:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            print(f"Placement took {time.time() - started:.3f}s")

        self.fitted_ = True
        return self

    def _run_round(self, X: Tensor, round_idx: int) -> Tuple[Tensor, AlgorithmState]:
        """One assignment step and one update step."""
        labels = self.assignment_strategy.compute_assignments(X, self.representations)
        assignment_matrix = AssignmentMatrix(labels, self.effective_k_)

        # A stop nobody picked keeps its location
        for k, representation in enumerate(self.representations):
            members = assignment_matrix.get_cluster_indices(k)
            if members.numel() > 0:
                self.update_strategy.update(representation, X[members])

        objective_value = self.objective.compute(X, self.representations, labels).item()
        cluster_state = self._extract_cluster_state()
        converged = self.convergence_criterion.check({
            'iteration': round_idx,
            'objective': objective_value,
            'assignments': labels,
            'cluster_state': cluster_state
        })
        history = self.convergence_criterion.history
        n_changed = history[-1].get('n_changed', 0) if history else 0

        return labels, AlgorithmState(
            iteration=round_idx,
            cluster_state=cluster_state,
            assignments=assignment_matrix,
            objective_value=objective_value,
            n_changed=n_changed,
            converged=converged
        )

    def _validate_data(self, X: PointsLike) -> Tensor:
        return validate_points(X, device=self.device)

    def _extract_cluster_state(self) -> ClusterState:
        """Snapshot of the current stop locations."""
        locations = torch.stack([rep.get_parameters()['mean'] for rep in self.representations])
        return ClusterState(
            means=locations,
            n_clusters=locations.shape[0],
            dimension=locations.shape[1]
        )

    def _require_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")

    @property
    def cluster_centers_(self) -> Tensor:
        """(effective_k_, 2) stop locations."""
        self._require_fitted()
        if not self.representations:
            return torch.zeros((0, 2), dtype=torch.float64, device=self.device)
        return self._extract_cluster_state().means

    @property
    def inertia_(self) -> float:
        """Sum of squared home-to-stop distances of the final placement."""
        self._require_fitted()
        return self._final_objective

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        for name, value in params.items():
            setattr(self, name, value)
        return self
