"""Tiles: polygon fragments cut from source polygons by a square grid.

Only grid cells that touch a polygon's outer ring produce tiles. Interior
cells cannot take part in bridging and are skipped, which keeps the
proximity graph small.
"""

from __future__ import annotations

import itertools
import threading
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree

from .core.errors import InputWarning, TileLookupError, TilingError
from .core.geometry_utils import iter_polygons

_LOWER_DIMENSIONAL = (Point, MultiPoint, LineString, LinearRing, MultiLineString)


@dataclass(frozen=True)
class Tile:
    """A polygon fragment from one source polygon and one grid cell.

    Attributes:
        index: Unique index within one pipeline run
        group: Group (island) id inherited from the source polygon
        geometry: Polygon fragment, contained in the source polygon
    """

    index: int
    group: int
    geometry: Polygon

    @property
    def area(self) -> float:
        return self.geometry.area


class TileIndexCounter:
    """Monotonic tile index source scoped to one pipeline run."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)


class TileCollection:
    """Indexed store of tiles.

    Tiles are keyed by their unique index. Iteration yields tiles in
    ascending index order.

    Examples:
        >>> tiles = TileCollection([Tile(0, 0, poly_a), Tile(1, 1, poly_b)])
        >>> tiles.count_groups()
        2
        >>> tiles.in_same_group(0, 1)
        False
    """

    def __init__(self, tiles: Iterable[Tile] = ()):
        self._tiles: Dict[int, Tile] = {}
        for tile in tiles:
            self.add(tile)

    def add(self, tile: Tile) -> None:
        """Add a tile; its index must not be present yet."""
        if tile.index in self._tiles:
            raise ValueError(f"Duplicate tile index {tile.index}")
        self._tiles[tile.index] = tile

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        for index in sorted(self._tiles):
            yield self._tiles[index]

    def __contains__(self, index: object) -> bool:
        return index in self._tiles

    def __getitem__(self, index: int) -> Tile:
        try:
            return self._tiles[index]
        except KeyError:
            raise TileLookupError(index) from None

    def indices(self) -> List[int]:
        return sorted(self._tiles)

    def groups(self) -> List[int]:
        """Distinct group ids, ascending."""
        return sorted({tile.group for tile in self._tiles.values()})

    def count_groups(self) -> int:
        return len(self.groups())

    def tiles_in_group(self, group: int) -> List[Tile]:
        return [tile for tile in self if tile.group == group]

    def count_tiles_in_group(self, group: int) -> int:
        return sum(1 for tile in self._tiles.values() if tile.group == group)

    def in_same_group(self, index_a: int, index_b: int) -> bool:
        return self[index_a].group == self[index_b].group

    def __repr__(self) -> str:
        return f"TileCollection({len(self)} tiles, {self.count_groups()} groups)"


def split_by_grid(
    polygons: Sequence[BaseGeometry],
    grid: Sequence[Polygon],
    groups: Optional[Sequence[Optional[int]]] = None,
    counter: Optional[TileIndexCounter] = None,
) -> Optional[TileCollection]:
    """Cut source polygons into tiles along a grid.

    For every source polygon, only cells intersecting its outer ring are
    considered; each such cell is intersected with the polygon and the
    polygonal result becomes one tile per constituent polygon. Touching
    cells that only produce lines or points are discarded.

    Args:
        polygons: Source polygons (MultiPolygon parts share their group)
        grid: Grid cells, e.g. from :func:`bridgeforge.grid.generate_grid`
        groups: Optional group id per polygon. When omitted the source index
            is used as the group; ``None`` entries default to group 0.
        counter: Index source; a fresh counter starting at 0 if omitted

    Returns:
        TileCollection, or None if ``polygons`` is empty

    Raises:
        TilingError: If an intersection yields a non-polygonal,
            non-degenerate shape
        ValueError: If ``groups`` does not match ``polygons`` in length
    """
    if len(polygons) == 0:
        return None

    if groups is not None and len(groups) != len(polygons):
        raise ValueError(
            f"Expected {len(polygons)} group ids, got {len(groups)}"
        )

    if counter is None:
        counter = TileIndexCounter()

    tiles = TileCollection()
    grid = list(grid)
    tree = STRtree(grid) if grid else None

    for source_index, source in enumerate(polygons):
        group = _resolve_group(source_index, groups)
        parts = _source_parts(source, source_index)

        for part in parts:
            if tree is None:
                continue
            candidates = sorted(int(i) for i in tree.query(part.exterior, predicate='intersects'))
            for cell_index in candidates:
                piece = part.intersection(grid[cell_index])
                for fragment in _classify_intersection(piece, source_index, cell_index):
                    tiles.add(Tile(counter.next(), group, fragment))

    return tiles


def _resolve_group(source_index: int, groups: Optional[Sequence[Optional[int]]]) -> int:
    if groups is None:
        return source_index
    group = groups[source_index]
    return 0 if group is None else int(group)


def _source_parts(source: BaseGeometry, source_index: int) -> List[Polygon]:
    if isinstance(source, (Polygon, MultiPolygon)) and not source.is_empty:
        return list(iter_polygons(source))

    kind = "empty geometry" if source is None or source.is_empty else source.geom_type
    warnings.warn(
        f"Skipping input {source_index}: expected Polygon or MultiPolygon, got {kind}",
        InputWarning,
        stacklevel=3,
    )
    return []


def _classify_intersection(
    piece: BaseGeometry,
    source_index: int,
    cell_index: int,
) -> List[Polygon]:
    """Polygonal parts of an intersection result, dropping degenerate ones."""
    if piece.is_empty or isinstance(piece, _LOWER_DIMENSIONAL):
        return []
    if isinstance(piece, Polygon):
        return [piece]
    if isinstance(piece, (MultiPolygon, GeometryCollection)):
        return list(iter_polygons(piece))

    raise TilingError(
        f"Intersection of source polygon {source_index} with grid cell "
        f"{cell_index} produced unexpected {piece.geom_type}"
    )


__all__ = [
    'Tile',
    'TileIndexCounter',
    'TileCollection',
    'split_by_grid',
]
