"""Convex hull bridge: the hull of both tile polygons."""

from shapely.geometry import MultiPolygon, Polygon

from ...core.errors import SynthesisError
from ...core.validation_utils import is_valid_polygon


def bridge_convex_hull(poly_a: Polygon, poly_b: Polygon) -> Polygon:
    """Connect two polygons with the convex hull of both.

    Produces wide, smooth connectors; best suited to islands of similar size.

    Raises:
        SynthesisError: If the hull is not a valid polygon (collinear input)
    """
    hull = MultiPolygon([poly_a, poly_b]).convex_hull
    if not is_valid_polygon(hull):
        raise SynthesisError(f"convex hull produced invalid {hull.geom_type}")
    return hull


__all__ = ['bridge_convex_hull']
