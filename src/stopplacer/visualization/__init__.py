"""Visualization utilities for placement results."""

from .plot_clusters import (
    plot_points_2d,
    plot_placement,
    plot_dendrogram,
    stops_table
)

__all__ = [
    'plot_points_2d',
    'plot_placement',
    'plot_dendrogram',
    'stops_table'
]
