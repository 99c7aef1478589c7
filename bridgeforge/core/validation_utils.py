"""Common validation utilities."""

from typing import Optional

from shapely.geometry.base import BaseGeometry


def is_valid_polygon(
    geometry: Optional[BaseGeometry],
    min_area: float = 0.0,
    required_type: Optional[str] = 'Polygon',
) -> bool:
    """Check if geometry is a usable, simple polygonal result.

    Combines the checks applied to every synthesized bridge:
    - not None and non-empty
    - Shapely validity (is_valid)
    - Geometry type check (if specified)
    - Minimum area check (if specified)

    Args:
        geometry: Geometry to validate
        min_area: Minimum acceptable area (0 = any positive area)
        required_type: Required geometry type, None to accept any

    Returns:
        True if geometry meets all criteria, False otherwise

    Examples:
        >>> poly = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> is_valid_polygon(poly)
        True

        >>> is_valid_polygon(poly, min_area=10.0)
        False  # Area is only 1.0

        >>> is_valid_polygon(poly.boundary)
        False  # Wrong type
    """
    if geometry is None or geometry.is_empty:
        return False

    if required_type is not None and geometry.geom_type != required_type:
        return False

    if not geometry.is_valid:
        return False

    area = getattr(geometry, 'area', 0.0)
    if area <= 0.0 or area < min_area:
        return False

    return True


__all__ = ['is_valid_polygon']
