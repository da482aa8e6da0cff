"""Initialization strategies for the placement loop."""

from .first_points import FirstPointsInit
from .from_previous import FromPreviousInit

__all__ = [
    'FirstPointsInit',
    'FromPreviousInit'
]
