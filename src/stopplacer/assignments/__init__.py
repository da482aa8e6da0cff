"""Assignment strategies for the placement loop."""

from .hard import HardAssignment

__all__ = [
    'HardAssignment'
]
