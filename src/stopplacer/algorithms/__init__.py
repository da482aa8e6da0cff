"""Closest-pair, hierarchical and placement algorithms."""

from .closest_pair import ClosestPairFinder, find_closest_pair
from .hierarchical import (
    HierarchicalClusterer,
    build_hierarchy,
    format_cluster_tree
)
from .kmeans import KMeansPlacer, KMeansObjective, place_by_kmeans

__all__ = [
    'ClosestPairFinder',
    'find_closest_pair',
    'HierarchicalClusterer',
    'build_hierarchy',
    'format_cluster_tree',
    'KMeansPlacer',
    'KMeansObjective',
    'place_by_kmeans'
]
