"""Base classes, interfaces and data structures for stop placement."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Point,
    Centroid,
    ClosestPair,
    InsufficientData,
    ClusterNode,
    MergeStep,
    Hierarchy,
    PlacementCluster,
    EvaluationMetrics,
    ClusterState,
    AssignmentMatrix,
    AlgorithmState
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

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
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
