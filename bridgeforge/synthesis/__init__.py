"""Bridge synthesis: connector polygons for spanning-tree edges."""

from .core import SkippedEdge, areas_comparable, auto_bridge, synthesize_bridges
from .strategies import bridge_buffered_line, bridge_convex_hull, MIN_BUFFER_WIDTH

__all__ = [
    'SkippedEdge',
    'areas_comparable',
    'auto_bridge',
    'synthesize_bridges',
    'bridge_buffered_line',
    'bridge_convex_hull',
    'MIN_BUFFER_WIDTH',
]
