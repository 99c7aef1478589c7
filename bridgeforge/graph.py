"""Proximity graph over tiles.

Vertices are tile indices. An edge joins two tiles of different groups whose
failsafe centroids are at most ``max_distance`` apart, weighted by that
distance.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, List, NamedTuple, Set, Tuple

import numpy as np

from .core.errors import GraphError
from .core.geometry_utils import failsafe_centroid
from .core.spatial_utils import find_connected_components, find_point_pairs_within
from .tiles import TileCollection


class Edge(NamedTuple):
    """Weighted undirected edge between two tile indices."""

    source: int
    target: int
    weight: float

    @property
    def key(self) -> Tuple[int, int]:
        """Canonical unordered pair ``(min, max)``."""
        return (min(self.source, self.target), max(self.source, self.target))


class ProximityGraph:
    """Weighted undirected graph without self-loops or parallel edges.

    Edges keep their insertion order, which the spanning-tree solver uses to
    break ties between equal weights.
    """

    def __init__(self, vertices: Iterable[int] = ()):
        self._adjacency: Dict[int, Set[int]] = {}
        self._edges: List[Edge] = []
        self._keys: Set[Tuple[int, int]] = set()
        for vertex in vertices:
            self.add_vertex(vertex)

    def add_vertex(self, vertex: int) -> None:
        self._adjacency.setdefault(vertex, set())

    def add_edge(self, source: int, target: int, weight: float) -> Edge:
        """Add an edge, creating missing vertices.

        Raises:
            ValueError: On self-loops or a second edge for the same pair
        """
        if source == target:
            raise ValueError(f"Self-loop on vertex {source}")
        edge = Edge(source, target, float(weight))
        if edge.key in self._keys:
            raise ValueError(f"Edge {edge.key} already present")

        self.add_vertex(source)
        self.add_vertex(target)
        self._adjacency[source].add(target)
        self._adjacency[target].add(source)
        self._keys.add(edge.key)
        self._edges.append(edge)
        return edge

    @property
    def vertices(self) -> List[int]:
        return sorted(self._adjacency)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def num_vertices(self) -> int:
        return len(self._adjacency)

    def num_edges(self) -> int:
        return len(self._edges)

    def has_edge(self, a: int, b: int) -> bool:
        return (min(a, b), max(a, b)) in self._keys

    def neighbors(self, vertex: int) -> Set[int]:
        return set(self._adjacency.get(vertex, set()))

    def total_weight(self) -> float:
        return sum(edge.weight for edge in self._edges)

    def components(self) -> List[List[int]]:
        """Connected components as sorted vertex lists."""
        return find_connected_components(self._adjacency)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"ProximityGraph({self.num_vertices()} vertices, {self.num_edges()} edges)"


def tile_centroids(tiles: TileCollection) -> Tuple[List[int], np.ndarray]:
    """Tile indices (ascending) and their failsafe centroid coordinates."""
    indices = tiles.indices()
    coords = np.array(
        [failsafe_centroid(tiles[i].geometry).coords[0][:2] for i in indices],
        dtype=float,
    ).reshape(-1, 2)
    return indices, coords


def build_proximity_graph(
    tiles: TileCollection,
    max_distance: float,
    use_spatial_index: bool = True,
) -> ProximityGraph:
    """Build the proximity graph for a tile collection.

    Every unordered tile pair from different groups whose centroid distance
    is at most ``max_distance`` becomes an edge. The spatial index only
    prunes candidates; the resulting edge set and order are the same as a
    full pairwise scan.

    Args:
        tiles: Tile collection
        max_distance: Maximum centroid-to-centroid distance (inclusive)
        use_spatial_index: Prune candidate pairs with an STRtree

    Returns:
        ProximityGraph whose vertex set is every tile index

    Raises:
        GraphError: If two tiles of different groups are at a non-positive
            or non-finite distance
    """
    indices, coords = tile_centroids(tiles)
    graph = ProximityGraph(indices)

    pairs = find_point_pairs_within(coords, max_distance, use_index=use_spatial_index)
    for i, j, distance in pairs:
        source, target = indices[i], indices[j]
        if tiles.in_same_group(source, target):
            continue
        if not math.isfinite(distance) or distance <= 0.0:
            raise GraphError(
                f"Distance between tiles {source} and {target} is {distance}; "
                f"input polygons of different groups overlap or are malformed"
            )
        graph.add_edge(source, target, distance)

    return graph


__all__ = [
    'Edge',
    'ProximityGraph',
    'tile_centroids',
    'build_proximity_graph',
]
