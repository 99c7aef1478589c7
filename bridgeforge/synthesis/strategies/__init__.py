"""Bridge strategy implementations."""

from .buffered_line import bridge_buffered_line, MIN_BUFFER_WIDTH
from .convex_hull import bridge_convex_hull

__all__ = [
    'bridge_buffered_line',
    'bridge_convex_hull',
    'MIN_BUFFER_WIDTH',
]
