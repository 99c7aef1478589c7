"""Tests for the tile proximity graph."""

import math

import pytest
from shapely.geometry import Polygon, box

from bridgeforge.core.errors import GraphError
from bridgeforge.graph import Edge, ProximityGraph, build_proximity_graph, tile_centroids
from bridgeforge.grid import generate_grid
from bridgeforge.tiles import Tile, TileCollection, split_by_grid


def _tiles(polygons, cell_size, groups=None):
    return split_by_grid(polygons, generate_grid(polygons, cell_size), groups=groups)


@pytest.fixture
def three_islands():
    polys = [
        box(0, 0, 1, 1),
        Polygon([(1.4, 0.1), (2.3, 0.0), (2.6, 1.2), (1.6, 0.9)]),
        box(1.2, 1.6, 2.0, 2.5),
    ]
    return _tiles(polys, 0.3)


class TestProximityGraph:
    """Tests for the ProximityGraph container."""

    def test_add_edge(self):
        graph = ProximityGraph([0, 1, 2])
        edge = graph.add_edge(2, 0, 1.5)

        assert edge == Edge(2, 0, 1.5)
        assert edge.key == (0, 2)
        assert graph.has_edge(0, 2)
        assert graph.neighbors(0) == {2}
        assert graph.num_vertices() == 3
        assert graph.num_edges() == 1

    def test_no_self_loops(self):
        graph = ProximityGraph()
        with pytest.raises(ValueError, match="Self-loop"):
            graph.add_edge(1, 1, 1.0)

    def test_no_parallel_edges(self):
        graph = ProximityGraph()
        graph.add_edge(0, 1, 1.0)
        with pytest.raises(ValueError, match="already present"):
            graph.add_edge(1, 0, 2.0)

    def test_components_and_weight(self):
        graph = ProximityGraph(range(5))
        graph.add_edge(0, 1, 1.0)
        graph.add_edge(3, 4, 0.5)

        assert graph.components() == [[0, 1], [2], [3, 4]]
        assert graph.total_weight() == pytest.approx(1.5)


class TestBuildProximityGraph:
    """Tests for build_proximity_graph()."""

    def test_every_tile_is_a_vertex(self, three_islands):
        graph = build_proximity_graph(three_islands, 0.5)
        assert graph.vertices == three_islands.indices()

    def test_edges_match_definition(self, three_islands):
        """Edge exists iff groups differ and centroids are within range."""
        max_distance = 0.6
        graph = build_proximity_graph(three_islands, max_distance)
        indices, coords = tile_centroids(three_islands)

        assert graph.num_edges() > 0
        for a in range(len(indices)):
            for b in range(a + 1, len(indices)):
                ia, ib = indices[a], indices[b]
                distance = math.dist(coords[a], coords[b])
                expected = (
                    three_islands[ia].group != three_islands[ib].group
                    and distance <= max_distance
                )
                assert graph.has_edge(ia, ib) == expected

        for edge in graph:
            assert edge.weight > 0
            assert not three_islands.in_same_group(edge.source, edge.target)

    def test_spatial_index_matches_full_scan(self, three_islands):
        indexed = build_proximity_graph(three_islands, 0.6, use_spatial_index=True)
        scanned = build_proximity_graph(three_islands, 0.6, use_spatial_index=False)
        assert indexed.edges == scanned.edges

    def test_same_group_never_linked(self):
        polys = [box(0, 0, 1, 1), box(1.2, 0, 2.2, 1)]
        tiles = _tiles(polys, 0.5, groups=[4, 4])

        graph = build_proximity_graph(tiles, 2.0)

        assert graph.num_edges() == 0
        assert graph.num_vertices() == len(tiles)

    def test_far_islands(self):
        polys = [box(0, 0, 1, 1), box(5, 0, 6, 1)]
        tiles = _tiles(polys, 0.5)
        assert build_proximity_graph(tiles, 0.1).num_edges() == 0

    def test_overlapping_groups_fail(self):
        """Coincident tiles of different groups have zero distance."""
        square = box(0, 0, 1, 1)
        tiles = _tiles([square, box(0, 0, 1, 1)], 0.5)

        with pytest.raises(GraphError, match=r"\[graph\]"):
            build_proximity_graph(tiles, 1.0)

    def test_coincident_same_group_is_fine(self):
        tiles = TileCollection([
            Tile(0, 1, box(0, 0, 1, 1)),
            Tile(1, 1, box(0, 0, 1, 1)),
        ])
        assert build_proximity_graph(tiles, 1.0).num_edges() == 0

    def test_empty_collection(self):
        graph = build_proximity_graph(TileCollection(), 1.0)
        assert graph.num_vertices() == 0
        assert graph.num_edges() == 0
