"""
Convergence criteria for the placement loop.

K-means placement stops at a fixed point: a round in which no demand point
moved to a different stop.
"""

from typing import Dict, Any, Optional
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class AssignmentsUnchanged(ConvergenceCriterion):
    """Converged once a round leaves every point in the same cluster.

    The comparison for the first round is made against ``initial``
    assignments (every point in cluster 0 unless given), so a placement in
    which the first round already puts every point in cluster 0 stops
    immediately.
    """

    def __init__(self, initial: Optional[Tensor] = None):
        """
        Args:
            initial: Optional (n,) assignments the first round is compared to
        """
        super().__init__()
        self.initial = initial
        self._prev_assignments = None

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments are identical to the previous round."""
        assignments = current_state['assignments']

        if isinstance(assignments, Tensor):
            current_assignments = assignments
        else:
            # AssignmentMatrix object
            current_assignments = assignments.get_hard()

        if self._prev_assignments is None:
            if self.initial is not None:
                self._prev_assignments = self.initial.to(current_assignments.device)
            else:
                self._prev_assignments = torch.zeros_like(current_assignments)

        n_changed = int((current_assignments != self._prev_assignments).sum().item())

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed
        })

        self._prev_assignments = current_assignments.clone()

        return n_changed == 0

    @property
    def last_n_changed(self) -> int:
        """Points that changed cluster in the most recent round."""
        return self.history[-1]['n_changed'] if self.history else 0

    def reset(self):
        """Forget previous assignments."""
        super().reset()
        self._prev_assignments = None

