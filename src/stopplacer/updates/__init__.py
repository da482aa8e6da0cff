"""Update strategies for the placement loop."""

from .mean import MeanUpdater

__all__ = [
    'MeanUpdater'
]
