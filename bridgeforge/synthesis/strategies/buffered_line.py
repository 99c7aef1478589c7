"""Buffered-line bridge: a thickened segment between two tile centroids."""

from shapely.geometry import LineString, Polygon

from ...core.errors import SynthesisError
from ...core.geometry_utils import failsafe_centroid, inscribed_circle_radius
from ...core.validation_utils import is_valid_polygon

MIN_BUFFER_WIDTH = 1e-6


def bridge_buffered_line(
    poly_a: Polygon,
    poly_b: Polygon,
    quad_segs: int = 16,
    min_width: float = MIN_BUFFER_WIDTH,
) -> Polygon:
    """Connect two polygons with a buffered centroid-to-centroid segment.

    The buffer width is the smaller of the two inscribed-circle radii, so the
    bridge is never wider than the thinner tile can carry.

    Args:
        poly_a: First tile polygon
        poly_b: Second tile polygon
        quad_segs: Segments per quarter circle of the buffer caps
        min_width: Widths below this are treated as zero

    Returns:
        Bridge polygon

    Raises:
        SynthesisError: If a tile is too thin or the buffer is degenerate
    """
    width = min(inscribed_circle_radius(poly_a), inscribed_circle_radius(poly_b))
    if abs(width) < min_width:
        raise SynthesisError(f"buffer width {width:.3g} is below {min_width:.3g}")

    start = failsafe_centroid(poly_a)
    end = failsafe_centroid(poly_b)
    segment = LineString([start.coords[0], end.coords[0]])

    bridge = segment.buffer(width, quad_segs=quad_segs)
    if not is_valid_polygon(bridge):
        raise SynthesisError(f"buffered segment produced invalid {bridge.geom_type}")

    return bridge


__all__ = ['bridge_buffered_line', 'MIN_BUFFER_WIDTH']
