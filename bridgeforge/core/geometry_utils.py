"""Common geometry utilities built on the Shapely geometry kernel.

This module provides the small set of derived operations the bridging
pipeline needs on top of Shapely: a centroid that never falls outside its
polygon, the inscribed-circle radius estimate used to size bridges, and
helpers to flatten and measure collections of geometries.
"""

from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np
import shapely
from shapely.geometry import GeometryCollection, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry


def failsafe_centroid(polygon: Polygon) -> Point:
    """Return a representative point that lies inside or on ``polygon``.

    The geometric centroid is used when it can be computed and falls inside
    the polygon. Otherwise the bounding-box center is tried, and if that is
    outside too the result snaps to the polygon vertex nearest to it.

    Args:
        polygon: Source polygon

    Returns:
        Point inside the polygon or on its boundary

    Examples:
        >>> ring = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> failsafe_centroid(ring).coords[0]
        (5.0, 5.0)

        >>> u_shape = Polygon([(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3)])
        >>> u_shape.intersects(failsafe_centroid(u_shape))
        True
    """
    centroid = polygon.centroid
    if not centroid.is_empty and polygon.contains(centroid):
        return centroid

    minx, miny, maxx, maxy = polygon.bounds
    bbox_center = Point((minx + maxx) / 2.0, (miny + maxy) / 2.0)
    if polygon.contains(bbox_center):
        return bbox_center

    vertices = _polygon_vertices(polygon)
    if len(vertices) == 0:
        return bbox_center

    offsets = vertices - np.array(bbox_center.coords[0][:2])
    nearest = int(np.argmin(np.hypot(offsets[:, 0], offsets[:, 1])))
    return Point(vertices[nearest])


def inscribed_circle_radius(polygon: Polygon) -> float:
    """Distance from the failsafe centroid to the nearest boundary point.

    This is a cheap lower estimate of the polygon's inscribed circle. It is
    zero when the failsafe centroid had to snap onto the boundary.
    """
    if polygon.is_empty:
        return 0.0
    center = failsafe_centroid(polygon)
    return float(polygon.boundary.distance(center))


def _polygon_vertices(polygon: Polygon) -> np.ndarray:
    """All ring vertices of ``polygon`` as an (N, 2) array."""
    rings = [polygon.exterior, *polygon.interiors]
    coords = [np.asarray(ring.coords)[:, :2] for ring in rings if not ring.is_empty]
    if not coords:
        return np.empty((0, 2))
    return np.vstack(coords)


def iter_polygons(geometry: BaseGeometry) -> Iterator[Polygon]:
    """Yield the non-empty polygonal parts of ``geometry``.

    Lower-dimensional members of collections are skipped.

    Examples:
        >>> multi = MultiPolygon([poly1, poly2])
        >>> len(list(iter_polygons(multi)))
        2
    """
    if geometry is None or geometry.is_empty:
        return
    if isinstance(geometry, Polygon):
        yield geometry
    elif isinstance(geometry, (MultiPolygon, GeometryCollection)):
        for part in geometry.geoms:
            yield from iter_polygons(part)


def envelope_of(geometries: Iterable[BaseGeometry]) -> Tuple[float, float, float, float]:
    """Bounding envelope ``(minx, miny, maxx, maxy)`` of a geometry set.

    Accepts a single geometry or any iterable of geometries.
    """
    if isinstance(geometries, BaseGeometry):
        geometries = [geometries]
    geoms = [g for g in geometries if g is not None and not g.is_empty]
    if not geoms:
        return (np.nan, np.nan, np.nan, np.nan)
    return tuple(float(v) for v in shapely.total_bounds(geoms))


def bbox_areas(geometries: Sequence[BaseGeometry]) -> List[float]:
    """Area of each geometry's bounding box."""
    areas = []
    for geom in geometries:
        minx, miny, maxx, maxy = geom.bounds
        areas.append((maxx - minx) * (maxy - miny))
    return areas


__all__ = [
    'failsafe_centroid',
    'inscribed_circle_radius',
    'iter_polygons',
    'envelope_of',
    'bbox_areas',
]
