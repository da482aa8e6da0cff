"""
Placement visualization utilities.

Provides functions for drawing the demand points, a finished placement
and the clustering dendrogram with matplotlib, plus the rows of the stops
table shown next to the placement map.
"""

from typing import Optional, List, Sequence, Tuple, Dict
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import ClusterNode, PlacementCluster, Point
from ..utils.geometry import bounding_box
from ..utils.validation import as_point_list, PointsLike


def _apply_limits(ax: plt.Axes, points: Sequence, pad_fraction: float = 0.08) -> None:
    """Fit the axes to the points' bounding box with a little padding."""
    box = bounding_box(points)
    pad_x = box.width * pad_fraction
    pad_y = box.height * pad_fraction
    ax.set_xlim(box.min_x - pad_x, box.min_x + box.width + pad_x)
    ax.set_ylim(box.min_y - pad_y, box.min_y + box.height + pad_y)


def plot_points_2d(points: PointsLike,
                   ax: Optional[plt.Axes] = None,
                   color: str = '#38bdf8',
                   point_size: int = 30,
                   show_labels: bool = True,
                   title: Optional[str] = None) -> plt.Axes:
    """Scatter preview of the demand points.

    Args:
        points: Demand point snapshot
        ax: Matplotlib axes (created if None)
        color: Marker colour
        point_size: Size of markers
        show_labels: Whether to annotate every point with its id
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    pts = as_point_list(points)
    if not pts:
        ax.text(0.5, 0.5, 'No points to display', ha='center', va='center',
                transform=ax.transAxes, color='#64748b')
        return ax

    xy = np.array([[p.x, p.y] for p in pts])
    ax.scatter(xy[:, 0], xy[:, 1], c=color, s=point_size)
    if show_labels:
        for p in pts:
            ax.annotate(p.id, (p.x, p.y), textcoords='offset points', xytext=(6, 6),
                        fontsize=8)

    _apply_limits(ax, pts)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    if title:
        ax.set_title(title)
    return ax


def plot_placement(points: PointsLike,
                   clusters: Sequence[PlacementCluster],
                   ax: Optional[plt.Axes] = None,
                   colors: Optional[List] = None,
                   point_size: int = 30,
                   stop_size: int = 250,
                   show_legend: bool = True,
                   title: Optional[str] = None) -> plt.Axes:
    """Draw homes coloured by their stop, and the stops as rings.

    Args:
        points: Demand point snapshot
        clusters: Placement produced by ``place_by_kmeans``
        ax: Matplotlib axes (created if None)
        colors: One colour per stop (tab10 if None)
        point_size: Size of home markers
        stop_size: Size of stop rings
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    pts = as_point_list(points)
    if not pts or not clusters:
        ax.text(0.5, 0.5, 'No clusters yet', ha='center', va='center',
                transform=ax.transAxes, color='#64748b')
        return ax

    if colors is None:
        cmap = plt.get_cmap('tab10')
        colors = [cmap(i % 10) for i in range(len(clusters))]

    for i, cluster in enumerate(clusters):
        color = colors[i % len(colors)]
        if cluster.members:
            xy = np.array([[pts[idx].x, pts[idx].y] for idx in cluster.members])
            ax.scatter(xy[:, 0], xy[:, 1], c=[color], s=point_size,
                       label=f'Stop {i + 1} ({cluster.size})')
        ax.scatter([cluster.centroid.x], [cluster.centroid.y], s=stop_size,
                   facecolors='none', edgecolors=[color], linewidths=2, zorder=10)
        ax.annotate(f'Stop {i + 1}', (cluster.centroid.x, cluster.centroid.y),
                    textcoords='offset points', xytext=(8, 4), fontsize=8)

    _apply_limits(ax, list(pts) + [c.centroid for c in clusters])
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    if title:
        ax.set_title(title)
    if show_legend:
        ax.legend()
    return ax


def _dendrogram_layout(root: ClusterNode) -> Tuple[Dict[str, float], List[ClusterNode]]:
    """Assign x positions: leaves left to right, parents centred over children."""
    xs: Dict[str, float] = {}
    leaves: List[ClusterNode] = []

    def visit(node: ClusterNode) -> float:
        if node.is_leaf:
            xs[node.id] = float(len(leaves))
            leaves.append(node)
        else:
            xs[node.id] = (visit(node.left) + visit(node.right)) / 2.0
        return xs[node.id]

    visit(root)
    return xs, leaves


def plot_dendrogram(root: Optional[ClusterNode],
                    points: PointsLike,
                    ax: Optional[plt.Axes] = None,
                    color: str = '#334155',
                    title: Optional[str] = None) -> plt.Axes:
    """Draw the merge tree with merge height on the y axis.

    Args:
        root: Dendrogram root from ``build_hierarchy``
        points: Snapshot the hierarchy was built from (for leaf labels)
        ax: Matplotlib axes (created if None)
        color: Line colour
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    if root is None:
        ax.text(0.5, 0.5, 'Nothing to cluster', ha='center', va='center',
                transform=ax.transAxes, color='#64748b')
        return ax

    pts = as_point_list(points)
    xs, leaves = _dendrogram_layout(root)

    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            continue
        for child in (node.left, node.right):
            ax.plot([xs[child.id], xs[child.id]], [child.height, node.height],
                    color=color, linewidth=1.2)
            stack.append(child)
        ax.plot([xs[node.left.id], xs[node.right.id]], [node.height, node.height],
                color=color, linewidth=1.2)

    ax.set_xticks([xs[leaf.id] for leaf in leaves])
    ax.set_xticklabels([pts[leaf.members[0]].id for leaf in leaves], rotation=90)
    ax.set_ylabel('Average linkage distance')
    if title:
        ax.set_title(title)
    return ax


def stops_table(clusters: Sequence[PlacementCluster]) -> List[Tuple[int, int, float, float]]:
    """Rows ``(stop number, homes served, x, y)`` for the stops table."""
    return [(i + 1, cluster.size, cluster.centroid.x, cluster.centroid.y)
            for i, cluster in enumerate(clusters)]
