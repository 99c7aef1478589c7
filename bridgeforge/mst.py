"""Minimum spanning forest of a proximity graph (Kruskal's algorithm)."""

from typing import List

from .core.union_find import UnionFind
from .graph import Edge, ProximityGraph


def kruskal_mst(graph: ProximityGraph) -> List[Edge]:
    """Compute a minimum-weight spanning forest.

    Edges are taken in ascending weight order; equal weights keep the
    graph's insertion order, so the result is reproducible. A disconnected
    graph yields one tree per component.

    Args:
        graph: Proximity graph

    Returns:
        Selected edges in the order they were accepted

    Examples:
        >>> g = ProximityGraph()
        >>> _ = g.add_edge(0, 1, 1.0)
        >>> _ = g.add_edge(1, 2, 2.0)
        >>> _ = g.add_edge(0, 2, 3.0)
        >>> [e.key for e in kruskal_mst(g)]
        [(0, 1), (1, 2)]
    """
    forest = UnionFind(graph.vertices)
    tree: List[Edge] = []

    for edge in sorted(graph.edges, key=lambda e: e.weight):
        if forest.union(edge.source, edge.target):
            tree.append(edge)

    return tree


def tree_weight(tree: List[Edge]) -> float:
    return sum(edge.weight for edge in tree)


__all__ = ['kruskal_mst', 'tree_weight']
