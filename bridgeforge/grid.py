"""Regular square grid covering a set of geometries.

The grid is anchored at the top-left corner of the input envelope and always
covers the whole envelope: cells on the far right and bottom keep their full
size and may overhang the input by up to one cell.
"""

import math
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry

from .core.geometry_utils import bbox_areas, envelope_of

GeometryInput = Union[BaseGeometry, Iterable[BaseGeometry]]


def grid_steps(geometry: GeometryInput, cell_size: float) -> Tuple[int, int]:
    """Number of ``(rows, cols)`` needed to cover the envelope of ``geometry``.

    Normally ``ceil(extent / cell_size)``, plus one more row or column when
    the cell edges computed by :func:`generate_grid` would otherwise stop
    short of the envelope in floating point.
    """
    minx, miny, maxx, maxy = envelope_of(geometry)
    if not np.isfinite([minx, miny, maxx, maxy]).all():
        return 0, 0
    cols = int(math.ceil((maxx - minx) / cell_size))
    rows = int(math.ceil((maxy - miny) / cell_size))

    # The quotient can round down to an integer while the last edge still
    # falls short of the envelope
    while minx + cols * cell_size < maxx:
        cols += 1
    while maxy - rows * cell_size > miny:
        rows += 1
    return rows, cols


def generate_grid(geometry: GeometryInput, cell_size: float) -> List[Polygon]:
    """Generate square cells of side ``cell_size`` covering ``geometry``.

    Cells are emitted row by row from the top-left corner of the envelope,
    left to right within a row. The caller is responsible for passing a
    positive ``cell_size``.

    Args:
        geometry: A geometry or an iterable of geometries
        cell_size: Side length of each square cell

    Returns:
        List of ``rows * cols`` axis-aligned square polygons

    Examples:
        >>> poly = Polygon([(0, 0), (0.25, 0), (0.25, 0.1), (0, 0.1)])
        >>> len(generate_grid(poly, 0.1))
        3
    """
    if not isinstance(geometry, BaseGeometry):
        geometry = list(geometry)

    minx, miny, maxx, maxy = envelope_of(geometry)
    rows, cols = grid_steps(geometry, cell_size)

    # Neighbouring cells share the same edge coordinates, so no sliver gaps
    xs = [minx + col * cell_size for col in range(cols + 1)]
    ys = [maxy - row * cell_size for row in range(rows + 1)]

    cells = []
    for row in range(rows):
        for col in range(cols):
            cells.append(box(xs[col], ys[row + 1], xs[col + 1], ys[row]))

    return cells


def default_cell_size(geometries: Sequence[BaseGeometry]) -> float:
    """Tiling granularity heuristic: ``sqrt(mean(bbox_area)) / 2``.

    Returns 0.0 for an empty input.
    """
    areas = bbox_areas([g for g in geometries if g is not None and not g.is_empty])
    if not areas:
        return 0.0
    return math.sqrt(float(np.mean(areas))) / 2.0


__all__ = [
    'grid_steps',
    'generate_grid',
    'default_cell_size',
]
