"""Bridge synthesis for spanning-tree edges."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from shapely.geometry import Polygon

from ..connectivity import BridgeCandidate, group_pair
from ..core.errors import SynthesisError, SynthesisWarning
from ..core.types import BridgeStrategy, coerce_enum
from ..graph import Edge
from ..tiles import TileCollection
from .strategies import MIN_BUFFER_WIDTH, bridge_buffered_line, bridge_convex_hull


@dataclass(frozen=True)
class SkippedEdge:
    """A spanning-tree edge for which no bridge was built."""

    edge: Edge
    reason: str


def areas_comparable(poly_a: Polygon, poly_b: Polygon, ratio: float) -> bool:
    """True if the larger area is less than ``ratio`` times the smaller."""
    small, large = sorted((poly_a.area, poly_b.area))
    if small <= 0.0:
        return False
    return large / small < ratio


def auto_bridge(
    poly_a: Polygon,
    poly_b: Polygon,
    strategy: Union[BridgeStrategy, str] = BridgeStrategy.BUFFERED_LINE,
    ratio: float = 5.0,
    quad_segs: int = 16,
    min_width: float = MIN_BUFFER_WIDTH,
) -> Tuple[Polygon, BridgeStrategy]:
    """Build one bridge polygon between two tiles.

    Args:
        poly_a: First tile polygon
        poly_b: Second tile polygon
        strategy: Bridge strategy (enum or string literal):
            - BridgeStrategy.BUFFERED_LINE: buffered centroid segment (default)
            - BridgeStrategy.CONVEX_HULL: convex hull of both polygons
            - BridgeStrategy.AUTO: convex hull when the area ratio is below
              ``ratio``, buffered line otherwise
        ratio: Area ratio threshold used by AUTO
        quad_segs: Buffer segments per quarter circle
        min_width: Minimum buffer width for the buffered line

    Returns:
        Tuple of (bridge polygon, strategy actually used)

    Raises:
        SynthesisError: If the selected strategy cannot produce a valid polygon
    """
    strategy = coerce_enum(strategy, BridgeStrategy)

    if strategy == BridgeStrategy.AUTO:
        if areas_comparable(poly_a, poly_b, ratio):
            strategy = BridgeStrategy.CONVEX_HULL
        else:
            strategy = BridgeStrategy.BUFFERED_LINE

    if strategy == BridgeStrategy.CONVEX_HULL:
        return bridge_convex_hull(poly_a, poly_b), strategy

    bridge = bridge_buffered_line(poly_a, poly_b, quad_segs=quad_segs, min_width=min_width)
    return bridge, strategy


def synthesize_bridges(
    tree: Sequence[Edge],
    tiles: TileCollection,
    strategy: Union[BridgeStrategy, str] = BridgeStrategy.BUFFERED_LINE,
    ratio: float = 5.0,
    quad_segs: int = 16,
    min_width: float = MIN_BUFFER_WIDTH,
) -> Tuple[List[BridgeCandidate], List[SkippedEdge]]:
    """Build a bridge candidate for every spanning-tree edge.

    An edge whose bridge cannot be built is skipped with a
    :class:`SynthesisWarning`; the remaining edges are still processed.

    Args:
        tree: Spanning-tree edges
        tiles: Collection the edge endpoints refer to
        strategy: Bridge strategy, see :func:`auto_bridge`
        ratio: Area ratio threshold for the AUTO strategy
        quad_segs: Buffer segments per quarter circle
        min_width: Minimum buffer width

    Returns:
        Tuple of (candidates, skipped edges)

    Raises:
        TileLookupError: If an edge refers to a tile not in ``tiles``
    """
    strategy = coerce_enum(strategy, BridgeStrategy)
    candidates: List[BridgeCandidate] = []
    skipped: List[SkippedEdge] = []

    for edge in tree:
        source = tiles[edge.source]
        target = tiles[edge.target]

        if not isinstance(source.geometry, Polygon) or not isinstance(target.geometry, Polygon):
            reason = "endpoint geometry is not a Polygon"
            skipped.append(SkippedEdge(edge, reason))
            _warn_skipped(edge, reason)
            continue

        try:
            bridge, used = auto_bridge(
                source.geometry,
                target.geometry,
                strategy=strategy,
                ratio=ratio,
                quad_segs=quad_segs,
                min_width=min_width,
            )
        except SynthesisError as e:
            skipped.append(SkippedEdge(edge, str(e)))
            _warn_skipped(edge, str(e))
            continue

        candidates.append(BridgeCandidate(
            source=edge.source,
            target=edge.target,
            groups=group_pair(source.group, target.group),
            geometry=bridge,
            strategy=used,
        ))

    return candidates, skipped


def _warn_skipped(edge: Edge, reason: str) -> None:
    warnings.warn(
        f"Skipping bridge between tiles {edge.source} and {edge.target}: {reason}",
        SynthesisWarning,
        stacklevel=3,
    )


__all__ = [
    'SkippedEdge',
    'areas_comparable',
    'auto_bridge',
    'synthesize_bridges',
]
