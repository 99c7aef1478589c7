"""Disjoint-set (union-find) structure over hashable elements.

Used by the spanning-tree solver to reject edges that would close a cycle.
Path compression plus union by rank keep ``find`` effectively constant time.
"""

from typing import Dict, Generic, Hashable, Iterable, TypeVar

Element = TypeVar("Element", bound=Hashable)


class UnionFind(Generic[Element]):
    """Union-find with path compression and union by rank.

    Elements are added lazily on first use.

    Example:
        >>> uf = UnionFind()
        >>> uf.union(1, 2)
        True
        >>> uf.union(2, 1)
        False
        >>> uf.connected(1, 2)
        True
    """

    def __init__(self, elements: Iterable[Element] = ()) -> None:
        self._parent: Dict[Element, Element] = {}
        self._rank: Dict[Element, int] = {}
        for element in elements:
            self.add(element)

    def add(self, element: Element) -> None:
        if element not in self._parent:
            self._parent[element] = element
            self._rank[element] = 0

    def find(self, element: Element) -> Element:
        """Return the representative of the set containing ``element``."""
        self.add(element)

        root = element
        while self._parent[root] != root:
            root = self._parent[root]

        while self._parent[element] != root:
            self._parent[element], element = root, self._parent[element]

        return root

    def union(self, a: Element, b: Element) -> bool:
        """Merge the sets of ``a`` and ``b``.

        Returns:
            False if they were already in the same set, True otherwise
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        return True

    def connected(self, a: Element, b: Element) -> bool:
        return self.find(a) == self.find(b)

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, element: object) -> bool:
        return element in self._parent


__all__ = ['UnionFind']
