"""End-to-end bridging pipeline.

Grid generation, tiling, proximity graph, spanning tree, bridge synthesis
and per-group-pair deduplication, run in order on one set of polygons.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry, BaseMultipartGeometry
from shapely.ops import unary_union

from .connectivity import GroupPairBridgeMap, optimize_connectivity
from .core.errors import ConfigurationError, ConfigurationWarning
from .core.geometry_utils import iter_polygons
from .core.types import BridgeStrategy, coerce_enum
from .graph import build_proximity_graph
from .grid import default_cell_size, generate_grid
from .mst import kruskal_mst, tree_weight
from .synthesis import MIN_BUFFER_WIDTH, SkippedEdge, synthesize_bridges
from .tiles import TileCollection, TileIndexCounter, split_by_grid

CellSizeFunc = Callable[[Sequence[BaseGeometry]], float]

DEFAULT_MAX_DISTANCE = 0.1
DEFAULT_RATIO = 5.0
DEFAULT_QUAD_SEGS = 16


@dataclass
class BridgeConfig:
    """Settings for one bridging run.

    ``cell_size=None`` selects ``cell_size_func`` (by default
    ``sqrt(mean(bbox_area)) / 2``) to derive the tiling granularity.
    """

    max_distance: float = DEFAULT_MAX_DISTANCE
    cell_size: Optional[float] = None
    cell_size_func: CellSizeFunc = default_cell_size
    strategy: Union[BridgeStrategy, str] = BridgeStrategy.BUFFERED_LINE
    ratio: float = DEFAULT_RATIO
    quad_segs: int = DEFAULT_QUAD_SEGS
    min_buffer_width: float = MIN_BUFFER_WIDTH
    use_spatial_index: bool = True
    verbose: bool = False

    def validated(self) -> "BridgeConfig":
        """Return a copy with invalid settings replaced by their defaults.

        Each replacement issues a :class:`ConfigurationWarning`.

        Raises:
            ConfigurationError: If a setting has an unusable type
        """
        max_distance = _as_float("max_distance", self.max_distance)
        ratio = _as_float("ratio", self.ratio)
        cell_size = None if self.cell_size is None else _as_float("cell_size", self.cell_size)
        quad_segs = _as_float("quad_segs", self.quad_segs)
        try:
            strategy = coerce_enum(self.strategy, BridgeStrategy)
        except ValueError as e:
            raise ConfigurationError(str(e)) from None

        if not max_distance > 0 or not math.isfinite(max_distance):
            _warn_default("max_distance", max_distance, DEFAULT_MAX_DISTANCE)
            max_distance = DEFAULT_MAX_DISTANCE
        if not ratio > 1:
            _warn_default("ratio", ratio, DEFAULT_RATIO)
            ratio = DEFAULT_RATIO
        if cell_size is not None and (not cell_size > 0 or not math.isfinite(cell_size)):
            _warn_default("cell_size", cell_size, "automatic")
            cell_size = None
        if not quad_segs >= 1 or not math.isfinite(quad_segs):
            _warn_default("quad_segs", quad_segs, DEFAULT_QUAD_SEGS)
            quad_segs = DEFAULT_QUAD_SEGS
        quad_segs = int(quad_segs)

        return replace(
            self,
            max_distance=max_distance,
            ratio=ratio,
            cell_size=cell_size,
            quad_segs=quad_segs,
            strategy=strategy,
        )


@dataclass
class StageResult:
    """Outcome of one pipeline stage."""

    name: str
    count: int
    message: str = ""


@dataclass
class BridgeReport:
    """Summary of a bridging run."""

    config: BridgeConfig
    cell_size: float = 0.0
    num_polygons: int = 0
    num_tiles: int = 0
    num_groups: int = 0
    num_edges: int = 0
    num_tree_edges: int = 0
    tree_weight: float = 0.0
    num_candidates: int = 0
    num_bridges: int = 0
    skipped: List[SkippedEdge] = field(default_factory=list)
    strategy_counts: Dict[str, int] = field(default_factory=dict)
    history: List[StageResult] = field(default_factory=list)

    def record(self, name: str, count: int, message: str = "") -> None:
        self.history.append(StageResult(name, count, message))
        if self.config.verbose:
            print(f"{name}: {message}" if message else f"{name}: {count}")


def run_pipeline(
    polygons: Sequence[BaseGeometry],
    config: Optional[BridgeConfig] = None,
    groups: Optional[Sequence[Optional[int]]] = None,
) -> Tuple[GroupPairBridgeMap, BridgeReport]:
    """Run every bridging stage and return the deduplicated bridge map.

    Args:
        polygons: Source polygons
        config: Run settings; defaults are used when omitted
        groups: Optional group id per polygon (see :func:`split_by_grid`)

    Returns:
        Tuple of (bridge map, run report)

    Raises:
        ConfigurationError: If settings or groups are unusable
        InvariantViolation: If a stage detects broken geometry invariants
    """
    config = (config or BridgeConfig()).validated()
    polygons = _as_geometry_list(polygons)
    report = BridgeReport(config=config, num_polygons=len(polygons))

    if not polygons:
        report.record("input", 0, "no polygons, nothing to bridge")
        return GroupPairBridgeMap(), report

    if groups is not None and len(groups) != len(polygons):
        raise ConfigurationError(
            f"Expected {len(polygons)} group ids, got {len(groups)}"
        )
    if groups is not None:
        groups = _as_group_ids(groups)

    cell_size = _resolve_cell_size(polygons, config)
    report.cell_size = cell_size
    grid = generate_grid(polygons, cell_size)
    report.record("grid", len(grid), f"{len(grid)} cells of size {cell_size:.6g}")

    tiles = split_by_grid(polygons, grid, groups=groups, counter=TileIndexCounter())
    report.num_tiles = len(tiles)
    report.num_groups = tiles.count_groups()
    report.record("tiling", len(tiles), f"{len(tiles)} tiles in {report.num_groups} groups")

    return _bridge_tiles(tiles, config, report)


def bridge_tiles(
    tiles: TileCollection,
    config: Optional[BridgeConfig] = None,
) -> Tuple[GroupPairBridgeMap, BridgeReport]:
    """Run the stages after tiling on an existing tile collection.

    Useful with :func:`bridgeforge.cache.load_tiles` to reuse a tiling.
    """
    config = (config or BridgeConfig()).validated()
    report = BridgeReport(
        config=config,
        num_tiles=len(tiles),
        num_groups=tiles.count_groups(),
    )
    report.record("tiling", len(tiles), f"{len(tiles)} tiles in {report.num_groups} groups (reused)")
    return _bridge_tiles(tiles, config, report)


def _bridge_tiles(
    tiles: TileCollection,
    config: BridgeConfig,
    report: BridgeReport,
) -> Tuple[GroupPairBridgeMap, BridgeReport]:
    graph = build_proximity_graph(tiles, config.max_distance, config.use_spatial_index)
    report.num_edges = graph.num_edges()
    report.record(
        "graph", graph.num_edges(),
        f"{graph.num_vertices()} vertices, {graph.num_edges()} edges",
    )

    tree = kruskal_mst(graph)
    report.num_tree_edges = len(tree)
    report.tree_weight = tree_weight(tree)
    report.record("spanning_tree", len(tree), f"{len(tree)} edges, weight {report.tree_weight:.6g}")

    candidates, skipped = synthesize_bridges(
        tree,
        tiles,
        strategy=config.strategy,
        ratio=config.ratio,
        quad_segs=config.quad_segs,
        min_width=config.min_buffer_width,
    )
    report.num_candidates = len(candidates)
    report.skipped = skipped
    for candidate in candidates:
        name = candidate.strategy.value
        report.strategy_counts[name] = report.strategy_counts.get(name, 0) + 1
    report.record(
        "synthesis", len(candidates),
        f"{len(candidates)} bridges built, {len(skipped)} skipped",
    )

    bridge_map = optimize_connectivity(candidates)
    report.num_bridges = len(bridge_map)
    report.record("connectivity", len(bridge_map), f"{len(bridge_map)} group pairs bridged")

    return bridge_map, report


def build_bridges(
    polygons: Sequence[BaseGeometry],
    max_distance: float = DEFAULT_MAX_DISTANCE,
    groups: Optional[Sequence[Optional[int]]] = None,
    cell_size: Optional[float] = None,
    strategy: Union[BridgeStrategy, str] = BridgeStrategy.BUFFERED_LINE,
    ratio: float = DEFAULT_RATIO,
    cell_size_func: CellSizeFunc = default_cell_size,
    quad_segs: int = DEFAULT_QUAD_SEGS,
    use_spatial_index: bool = True,
    merge_with_input: bool = False,
    return_report: bool = False,
    verbose: bool = False,
) -> Union[List[Polygon], BaseGeometry, Tuple[Union[List[Polygon], BaseGeometry], BridgeReport]]:
    """Connect disjoint islands with a minimal set of bridge polygons.

    Polygons are cut into boundary tiles, tiles of different groups within
    ``max_distance`` of each other are linked in a proximity graph, a
    minimum spanning forest selects which links to build, and for every pair
    of groups only the smallest bridge is kept.

    Args:
        polygons: Source polygons (or a multi-part geometry)
        max_distance: Maximum centroid distance between bridged tiles.
            Non-positive values fall back to 0.1 with a warning.
        groups: Optional group id per polygon. Polygons of the same group
            are never bridged to each other. Defaults to one group per
            polygon.
        cell_size: Tiling granularity; derived with ``cell_size_func`` when
            omitted or non-positive
        strategy: Bridge strategy (enum or string literal):
            - BridgeStrategy.BUFFERED_LINE: buffered centroid segment (default)
            - BridgeStrategy.CONVEX_HULL: convex hull of both tiles
            - BridgeStrategy.AUTO: choose by area ratio
        ratio: Area ratio threshold for AUTO (must be > 1, default 5)
        cell_size_func: Heuristic used when ``cell_size`` is not given
        quad_segs: Buffer segments per quarter circle
        use_spatial_index: Prune proximity candidates with an STRtree
        merge_with_input: If True, return a single geometry: the union of
            the bridges with the polygonal input, one linked landmass per
            connected set of islands
        return_report: If True, return (bridges, report)
        verbose: Print a summary line per stage

    Returns:
        List of bridge polygons (or the merged geometry when
        merge_with_input=True), or (result, report) if return_report=True.
        Empty input yields an empty list, or an empty geometry when merging.

    Examples:
        >>> a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> b = Polygon([(1.5, 0), (2.5, 0), (2.5, 1), (1.5, 1)])
        >>> bridges = build_bridges([a, b], max_distance=1.1)
        >>> len(bridges)
        1
    """
    config = BridgeConfig(
        max_distance=max_distance,
        cell_size=cell_size,
        cell_size_func=cell_size_func,
        strategy=strategy,
        ratio=ratio,
        quad_segs=quad_segs,
        use_spatial_index=use_spatial_index,
        verbose=verbose,
    )
    polygons = _as_geometry_list(polygons)
    bridge_map, report = run_pipeline(polygons, config, groups=groups)
    result = bridge_map.bridges()
    if merge_with_input:
        islands = [p for geom in polygons for p in iter_polygons(geom)]
        result = unary_union([*result, *islands])
        parts = len(list(iter_polygons(result)))
        report.record("merge", parts, f"{parts} landmasses after merging")
    return (result, report) if return_report else result


def _as_geometry_list(polygons) -> List[BaseGeometry]:
    if polygons is None:
        return []
    if isinstance(polygons, BaseMultipartGeometry):
        return list(polygons.geoms)
    if isinstance(polygons, BaseGeometry):
        return [polygons]
    return list(polygons)


def _as_group_ids(groups: Sequence[Optional[int]]) -> List[Optional[int]]:
    """Integer group ids, keeping ``None`` entries (group 0 when tiled)."""
    group_ids: List[Optional[int]] = []
    for position, group in enumerate(groups):
        if group is None:
            group_ids.append(None)
            continue
        try:
            group_id = int(group)
        except (TypeError, ValueError, OverflowError):
            group_id = None
        if group_id is None or group_id != group:
            raise ConfigurationError(
                f"Group id at position {position} must be an integer, got {group!r}"
            )
        group_ids.append(group_id)
    return group_ids


def _resolve_cell_size(polygons: Sequence[BaseGeometry], config: BridgeConfig) -> float:
    if config.cell_size is not None:
        return config.cell_size

    cell_size = config.cell_size_func(polygons)
    if cell_size is None or not math.isfinite(cell_size) or cell_size <= 0:
        _warn_default("computed cell_size", cell_size, config.max_distance)
        cell_size = config.max_distance
    return float(cell_size)


def _as_float(name: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


def _warn_default(name: str, value, default) -> None:
    warnings.warn(
        f"{name} = {value!r} is invalid, using {default!r}",
        ConfigurationWarning,
        stacklevel=4,
    )


__all__ = [
    'BridgeConfig',
    'StageResult',
    'BridgeReport',
    'run_pipeline',
    'bridge_tiles',
    'build_bridges',
]
