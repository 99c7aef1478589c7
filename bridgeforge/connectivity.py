"""Per-group-pair bridge deduplication.

The spanning tree may route several tile-level edges between the same two
islands. Only the smallest connector per unordered group pair is kept.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from shapely.geometry import Polygon

from .core.types import BridgeStrategy

GroupPair = Tuple[int, int]


def group_pair(group_a: int, group_b: int) -> GroupPair:
    """Canonical unordered key ``(min, max)`` for two group ids."""
    return (group_a, group_b) if group_a <= group_b else (group_b, group_a)


@dataclass(frozen=True)
class BridgeCandidate:
    """A synthesized connector for one spanning-tree edge.

    Attributes:
        source: Index of the first tile
        target: Index of the second tile
        groups: Canonical group pair of the two tiles
        geometry: Connector polygon
        strategy: Strategy that produced the connector
    """

    source: int
    target: int
    groups: GroupPair
    geometry: Polygon
    strategy: BridgeStrategy = BridgeStrategy.BUFFERED_LINE

    @property
    def area(self) -> float:
        return self.geometry.area


class GroupPairBridgeMap:
    """Mapping from canonical group pair to its smallest-area bridge.

    ``offer`` keeps a new candidate only if it is strictly smaller than the
    one already stored, so the first of several equal-area candidates wins.
    Updates are serialized with a lock so concurrent producers may share one
    map.

    Examples:
        >>> bridges = GroupPairBridgeMap()
        >>> bridges.offer(candidate_big)
        True
        >>> bridges.offer(candidate_small)  # same groups, smaller area
        True
        >>> len(bridges)
        1
    """

    def __init__(self):
        self._bridges: Dict[GroupPair, BridgeCandidate] = {}
        self._lock = threading.Lock()

    def offer(self, candidate: BridgeCandidate) -> bool:
        """Store ``candidate`` if its pair is new or it beats the current one.

        Returns:
            True if the candidate is now stored for its pair
        """
        key = group_pair(*candidate.groups)
        with self._lock:
            current = self._bridges.get(key)
            if current is not None and current.area <= candidate.area:
                return False
            self._bridges[key] = candidate
            return True

    def get(self, group_a: int, group_b: int) -> Optional[BridgeCandidate]:
        return self._bridges.get(group_pair(group_a, group_b))

    def pairs(self) -> List[GroupPair]:
        return sorted(self._bridges)

    def items(self) -> Iterator[Tuple[GroupPair, BridgeCandidate]]:
        for key in self.pairs():
            yield key, self._bridges[key]

    def bridges(self) -> List[Polygon]:
        """Connector polygons, ordered by group pair."""
        return [candidate.geometry for _, candidate in self.items()]

    def __len__(self) -> int:
        return len(self._bridges)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return group_pair(*key) in self._bridges

    def __repr__(self) -> str:
        return f"GroupPairBridgeMap({len(self)} group pairs)"


def optimize_connectivity(candidates: Iterable[BridgeCandidate]) -> GroupPairBridgeMap:
    """Keep the smallest-area bridge for every unordered group pair.

    Args:
        candidates: Synthesized bridges, in spanning-tree order

    Returns:
        GroupPairBridgeMap with exactly one bridge per connected pair
    """
    optimized = GroupPairBridgeMap()
    for candidate in candidates:
        optimized.offer(candidate)
    return optimized


__all__ = [
    'GroupPair',
    'group_pair',
    'BridgeCandidate',
    'GroupPairBridgeMap',
    'optimize_connectivity',
]
