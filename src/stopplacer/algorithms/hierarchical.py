"""
Average-linkage agglomerative clustering.

Starts with one cluster per demand point and repeatedly merges the two
clusters whose members are, on average, closest to each other, recording
every merge. The result is a chronological merge log plus a binary
dendrogram.

Linkage distances are recomputed from the point distance matrix every
round (O(n^3) overall). Average linkage does not guarantee monotonic merge
heights, so a later merge may sit lower than an earlier one.
"""

from typing import List, Optional, Sequence
import math
import torch
from torch import Tensor

from ..base.data_structures import ClusterNode, MergeStep, Hierarchy, Point
from ..utils.metrics import pairwise_distances
from ..utils.validation import as_point_list, validate_points, PointsLike


def average_linkage(D: Tensor, a: ClusterNode, b: ClusterNode) -> float:
    """Mean of all point distances between the members of ``a`` and ``b``."""
    rows = torch.tensor(a.members, dtype=torch.long, device=D.device)
    cols = torch.tensor(b.members, dtype=torch.long, device=D.device)
    return float(D[rows][:, cols].mean().item())


class HierarchicalClusterer:
    """Agglomerative clustering with average linkage.

    Leaves are named ``C1..Cn`` in point order; merged clusters continue the
    numbering. Among equally close cluster pairs the first one under
    ascending ``(i, j)`` enumeration of the current cluster list is merged,
    and the merged cluster is appended to the end of that list.

    Parameters
    ----------
    verbose : int, default=0
        Verbosity level (2 prints every merge)

    Attributes
    ----------
    merge_steps_ : list of MergeStep
        ``n - 1`` merges in chronological order
    root_ : ClusterNode or None
        Dendrogram root; None for an empty point set
    points_ : list of Point
        Snapshot the hierarchy was built from
    """

    def __init__(self, verbose: int = 0):
        self.verbose = verbose
        self.merge_steps_: List[MergeStep] = []
        self.root_: Optional[ClusterNode] = None
        self.points_: List[Point] = []
        self.fitted_ = False

    def fit(self, points: PointsLike) -> 'HierarchicalClusterer':
        """Build the merge log and dendrogram."""
        self.points_ = as_point_list(points)
        n = len(self.points_)
        self.merge_steps_ = []
        self.root_ = None

        if n == 0:
            self.fitted_ = True
            return self

        D = pairwise_distances(validate_points(self.points_))
        clusters = [ClusterNode(id=f"C{i + 1}", members=(i,)) for i in range(n)]
        counter = n + 1

        while len(clusters) > 1:
            best = math.inf
            best_i, best_j = 0, 1
            for i in range(len(clusters)):
                for j in range(i + 1, len(clusters)):
                    d = average_linkage(D, clusters[i], clusters[j])
                    if d < best:
                        best = d
                        best_i, best_j = i, j

            a, b = clusters[best_i], clusters[best_j]
            merged = ClusterNode(
                id=f"C{counter}",
                members=a.members + b.members,
                left=a,
                right=b,
                height=best
            )
            counter += 1

            self.merge_steps_.append(MergeStep(
                merged_id=merged.id,
                left_id=a.id,
                right_id=b.id,
                distance=best,
                resulting_size=merged.size
            ))
            if self.verbose >= 2:
                print(f"Merge {len(self.merge_steps_):3d}: {a.id} + {b.id} -> "
                      f"{merged.id} at {best:.4f} (size {merged.size})")

            clusters = [c for idx, c in enumerate(clusters)
                        if idx != best_i and idx != best_j]
            clusters.append(merged)

        self.root_ = clusters[0]
        if self.verbose:
            print(f"Built hierarchy over {n} points with "
                  f"{len(self.merge_steps_)} merges")
        self.fitted_ = True
        return self

    @property
    def hierarchy_(self) -> Hierarchy:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return Hierarchy(merge_steps=list(self.merge_steps_), root=self.root_)

    def format_tree(self, decimals: int = 2) -> str:
        """Indented text view of the fitted dendrogram."""
        if self.root_ is None:
            return ""
        return format_cluster_tree(self.root_, self.points_, decimals=decimals)

    def get_params(self, deep: bool = True):
        return {'verbose': self.verbose}

    def set_params(self, **params) -> 'HierarchicalClusterer':
        for key, value in params.items():
            setattr(self, key, value)
        return self


def build_hierarchy(points: PointsLike) -> Hierarchy:
    """Average-linkage merge log and dendrogram for ``points``."""
    return HierarchicalClusterer().fit(points).hierarchy_


def _point_label(points: Sequence[Point], idx: int) -> str:
    if idx < len(points) and points[idx].id:
        return points[idx].id
    return f"P{idx + 1}"


def format_cluster_tree(node: ClusterNode, points: Sequence[Point],
                        level: int = 0, decimals: int = 2) -> str:
    """Render a dendrogram as an indented tree, root first.

    Leaves show the ids of their points; internal nodes show size and
    merge height with ``decimals`` decimal places.

    Example:
        - C7 (size=4, height=13.68)
          - C4 [leaf] → {D}
          - C6 (size=3, height=1.21)
            - C3 [leaf] → {C}
            - C5 (size=2, height=1.00)
              - C1 [leaf] → {A}
              - C2 [leaf] → {B}
    """
    indent = "  " * level
    if node.is_leaf:
        labels = ", ".join(_point_label(points, idx) for idx in node.members)
        return f"{indent}- {node.id} [leaf] → {{{labels}}}\n"

    text = f"{indent}- {node.id} (size={node.size}, height={node.height:.{decimals}f})\n"
    if node.left is not None:
        text += format_cluster_tree(node.left, points, level + 1, decimals)
    if node.right is not None:
        text += format_cluster_tree(node.right, points, level + 1, decimals)
    return text
