"""Common spatial search utilities.

This module provides the proximity search used to build the tile graph and a
connected-components helper for inspecting adjacency structures.
"""

from typing import Dict, List, Set, Tuple

import numpy as np
import shapely
from shapely.strtree import STRtree


def find_point_pairs_within(
    coords: np.ndarray,
    max_distance: float,
    use_index: bool = True,
) -> List[Tuple[int, int, float]]:
    """Find all point pairs whose Euclidean distance is at most ``max_distance``.

    Uses STRtree for efficient candidate search when ``use_index`` is True
    (O(n log n) instead of O(n²)). Both paths return the same pairs in the
    same order: ascending ``i``, then ascending ``j``, with ``i < j``.

    Args:
        coords: Array of shape (N, 2) holding point coordinates
        max_distance: Maximum distance (inclusive)
        use_index: Use a spatial index to prune candidates

    Returns:
        List of (i, j, distance) tuples

    Examples:
        >>> coords = np.array([[0.0, 0.0], [1.0, 0.0], [5.0, 0.0]])
        >>> find_point_pairs_within(coords, 1.5)
        [(0, 1, 1.0)]
    """
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    n = len(coords)
    if n < 2:
        return []

    pairs: List[Tuple[int, int, float]] = []

    if not use_index:
        for i in range(n - 1):
            deltas = coords[i + 1:] - coords[i]
            distances = np.hypot(deltas[:, 0], deltas[:, 1])
            for offset in np.flatnonzero(distances <= max_distance):
                j = i + 1 + int(offset)
                pairs.append((i, j, float(distances[offset])))
        return pairs

    points = shapely.points(coords)
    tree = STRtree(points)

    # Query with slightly enlarged boxes, exact distance check below
    margin = max_distance * 1.01
    boxes = shapely.box(
        coords[:, 0] - margin, coords[:, 1] - margin,
        coords[:, 0] + margin, coords[:, 1] + margin,
    )
    source_idx, target_idx = tree.query(boxes, predicate='intersects')

    keep = target_idx > source_idx
    source_idx = source_idx[keep]
    target_idx = target_idx[keep]
    if len(source_idx) == 0:
        return []

    order = np.lexsort((target_idx, source_idx))
    source_idx = source_idx[order]
    target_idx = target_idx[order]

    deltas = coords[target_idx] - coords[source_idx]
    distances = np.hypot(deltas[:, 0], deltas[:, 1])
    for i, j, distance in zip(source_idx, target_idx, distances):
        if distance <= max_distance:
            pairs.append((int(i), int(j), float(distance)))

    return pairs


def find_connected_components(
    adjacency: Dict[int, Set[int]]
) -> List[List[int]]:
    """Find connected components in an adjacency graph.

    Args:
        adjacency: Adjacency graph (dict of node -> set of neighbors)

    Returns:
        List of components, where each component is a sorted list of nodes

    Examples:
        >>> adjacency = {0: {1}, 1: {0}, 2: {3}, 3: {2}, 4: set()}
        >>> find_connected_components(adjacency)
        [[0, 1], [2, 3], [4]]
    """
    visited: Set[int] = set()
    components = []

    for node in adjacency:
        if node in visited:
            continue
        component = []
        stack = [node]
        visited.add(node)
        while stack:
            current = stack.pop()
            component.append(current)
            for neighbor in adjacency.get(current, set()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        components.append(sorted(component))

    return components


__all__ = [
    'find_point_pairs_within',
    'find_connected_components',
]
