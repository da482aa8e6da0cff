"""Utility functions for stop placement."""

from .geometry import (
    distance,
    bounding_box,
    BoundingBox
)

from .convergence import AssignmentsUnchanged

from .metrics import (
    pairwise_distances,
    walking_distances,
    inertia,
    evaluate_placement,
    PlacementEvaluator
)

from .validation import (
    make_point,
    as_point_list,
    validate_points,
    check_n_clusters
)

__all__ = [
    # Geometry
    'distance',
    'bounding_box',
    'BoundingBox',

    # Convergence criteria
    'AssignmentsUnchanged',

    # Metrics
    'pairwise_distances',
    'walking_distances',
    'inertia',
    'evaluate_placement',
    'PlacementEvaluator',

    # Validation
    'make_point',
    'as_point_list',
    'validate_points',
    'check_n_clusters'
]
