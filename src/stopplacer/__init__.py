"""
stopplacer: facility placement and spatial analysis of demand points.

Places a small number of bus stops to serve a set of student homes and
supports exploratory analysis of the homes:
- Closest pair of homes
- Average-linkage hierarchical clustering (merge log + dendrogram)
- K-means stop placement
- Coverage evaluation of a placement

Example usage:
    >>> from stopplacer import Point, place_by_kmeans, evaluate_placement
    >>>
    >>> homes = [Point('A', 0, 0), Point('B', 1, 0), Point('C', 0, 1), Point('D', 10, 10)]
    >>>
    >>> # Place two stops
    >>> stops = place_by_kmeans(homes, k=2)
    >>>
    >>> # How many homes are within 2 units of their stop?
    >>> metrics = evaluate_placement(homes, stops, max_walk_distance=2.0)
"""

__version__ = '0.1.0'

from .algorithms.closest_pair import ClosestPairFinder, find_closest_pair
from .algorithms.hierarchical import HierarchicalClusterer, build_hierarchy, format_cluster_tree
from .algorithms.kmeans import KMeansPlacer, place_by_kmeans
from .utils.metrics import PlacementEvaluator, evaluate_placement
from .utils.geometry import distance, bounding_box
from .utils.validation import make_point

# Import visualization
from .visualization import (
    plot_points_2d,
    plot_placement,
    plot_dendrogram,
    stops_table
)

from .base import (
    Point,
    Centroid,
    ClosestPair,
    InsufficientData,
    ClusterNode,
    MergeStep,
    Hierarchy,
    PlacementCluster,
    EvaluationMetrics
)

__all__ = [
    # Operations
    'find_closest_pair',
    'build_hierarchy',
    'place_by_kmeans',
    'evaluate_placement',
    'format_cluster_tree',

    # Algorithm objects
    'ClosestPairFinder',
    'HierarchicalClusterer',
    'KMeansPlacer',
    'PlacementEvaluator',

    # Geometry and data entry
    'distance',
    'bounding_box',
    'make_point',

    # Visualization
    'plot_points_2d',
    'plot_placement',
    'plot_dendrogram',
    'stops_table',

    # Data structures
    'Point',
    'Centroid',
    'ClosestPair',
    'InsufficientData',
    'ClusterNode',
    'MergeStep',
    'Hierarchy',
    'PlacementCluster',
    'EvaluationMetrics',

    # Version
    '__version__'
]
