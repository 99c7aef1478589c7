"""Tests for per-group-pair bridge deduplication."""

import pytest
from shapely.geometry import box

from bridgeforge.connectivity import (
    BridgeCandidate,
    GroupPairBridgeMap,
    group_pair,
    optimize_connectivity,
)
from bridgeforge.core.types import BridgeStrategy


def _candidate(source, target, groups, width):
    return BridgeCandidate(source, target, groups, box(0, 0, width, 1))


class TestGroupPair:
    """Tests for group_pair()."""

    def test_canonical(self):
        assert group_pair(3, 1) == (1, 3)
        assert group_pair(1, 3) == (1, 3)
        assert group_pair(2, 2) == (2, 2)


class TestGroupPairBridgeMap:
    """Tests for GroupPairBridgeMap."""

    def test_keeps_smallest(self):
        bridges = GroupPairBridgeMap()
        assert bridges.offer(_candidate(0, 1, (0, 1), 3.0))
        assert bridges.offer(_candidate(2, 3, (0, 1), 1.0))
        assert not bridges.offer(_candidate(4, 5, (0, 1), 2.0))

        assert len(bridges) == 1
        assert bridges.get(1, 0).area == pytest.approx(1.0)

    def test_equal_area_keeps_first(self):
        bridges = GroupPairBridgeMap()
        first = _candidate(0, 1, (0, 1), 1.0)
        bridges.offer(first)
        assert not bridges.offer(_candidate(2, 3, (0, 1), 1.0))
        assert bridges.get(0, 1) is first

    def test_contains_is_order_independent(self):
        bridges = GroupPairBridgeMap()
        bridges.offer(_candidate(0, 1, (2, 5), 1.0))
        assert (5, 2) in bridges
        assert (2, 5) in bridges
        assert (2, 6) not in bridges
        assert "2,5" not in bridges

    def test_missing_pair(self):
        bridges = GroupPairBridgeMap()
        assert bridges.get(0, 1) is None


class TestOptimizeConnectivity:
    """Tests for optimize_connectivity()."""

    def test_one_entry_per_pair(self):
        candidates = [
            _candidate(0, 5, (0, 1), 2.0),
            _candidate(1, 6, (0, 1), 0.5),
            _candidate(7, 9, (1, 2), 1.5),
            _candidate(2, 8, (0, 1), 0.7),
            _candidate(3, 9, (1, 2), 1.0),
        ]

        optimized = optimize_connectivity(candidates)

        assert optimized.pairs() == [(0, 1), (1, 2)]
        for pair, best in optimized.items():
            offered = [c.area for c in candidates if c.groups == pair]
            assert best.area == pytest.approx(min(offered))

    def test_bridges_ordered_by_pair(self):
        candidates = [
            BridgeCandidate(0, 1, (3, 4), box(0, 0, 1, 1), BridgeStrategy.CONVEX_HULL),
            BridgeCandidate(2, 3, (0, 4), box(0, 0, 2, 1)),
        ]
        bridges = optimize_connectivity(candidates).bridges()
        assert [b.area for b in bridges] == pytest.approx([2.0, 1.0])

    def test_empty(self):
        optimized = optimize_connectivity([])
        assert len(optimized) == 0
        assert optimized.bridges() == []
