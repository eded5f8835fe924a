# lattice.py
from __future__ import annotations

from typing import Iterator, List, Set, Tuple

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


class Graph:
    """Undirected, unweighted graph over nodes 0..num_nodes-1.

    Adjacency is stored as one neighbour set per node. After ``freeze()``
    the neighbour lists become sorted tuples and the graph is read-only.
    """

    def __init__(self, num_nodes: int):
        assert num_nodes > 0, "graph needs at least one node"
        self.num_nodes = num_nodes
        self._adj: List[Set[int]] = [set() for _ in range(num_nodes)]
        self._frozen: List[Tuple[int, ...]] = []

    @property
    def frozen(self) -> bool:
        return bool(self._frozen)

    def add_edge(self, a: int, b: int):
        if self.frozen:
            raise RuntimeError("graph is frozen")
        if a == b:
            raise ValueError(f"self-loop on node {a}")
        self._adj[a].add(b)
        self._adj[b].add(a)

    def freeze(self):
        self._frozen = [tuple(sorted(s)) for s in self._adj]

    def has_edge(self, a: int, b: int) -> bool:
        return b in self._adj[a]

    def neighbors(self, node: int) -> Tuple[int, ...]:
        if self._frozen:
            return self._frozen[node]
        return tuple(sorted(self._adj[node]))

    def degree(self, node: int) -> int:
        return len(self._adj[node])

    def edges(self) -> Iterator[Tuple[int, int]]:
        for a, nbrs in enumerate(self._adj):
            for b in sorted(nbrs):
                if a < b:
                    yield a, b


class HexLattice:
    """Adjacency of an n x n hex board, linear index = r * n + c.

    Rows are shifted right as they go down, so (r, c) touches (r, c+1),
    (r+1, c) and (r+1, c-1) plus the mirrored three:

         0   1   2
        0 . - . - .
           \\ / \\ / \\
          1 . - . - .
             \\ / \\ / \\
            2 . - . - .
    """

    def __init__(self, n: int):
        assert n > 0, "board size must be positive"
        self.size = n
        self.graph = Graph(n * n)
        self._build()

    def _build(self):
        n = self.size
        for r in range(n):
            for c in range(n):
                node = r * n + c
                if c != n - 1:
                    self.graph.add_edge(node, node + 1)
                if r != n - 1:
                    self.graph.add_edge(node, node + n)
                    if c != 0:
                        self.graph.add_edge(node, node + n - 1)
        self.graph.freeze()

    @property
    def num_nodes(self) -> int:
        return self.graph.num_nodes

    def neighbors(self, node: int) -> Tuple[int, ...]:
        return self.graph.neighbors(node)

    def has_edge(self, a: int, b: int) -> bool:
        return self.graph.has_edge(a, b)

    def index(self, r: int, c: int) -> int:
        return r * self.size + c

    def coords(self, node: int) -> Tuple[int, int]:
        return divmod(node, self.size)

    def edge_cells(self, orientation: str) -> Tuple[List[int], List[int]]:
        """The two opposite edges a player with ``orientation`` must join."""
        n = self.size
        if orientation == HORIZONTAL:
            return [r * n for r in range(n)], [r * n + n - 1 for r in range(n)]
        if orientation == VERTICAL:
            return list(range(n)), [(n - 1) * n + c for c in range(n)]
        raise ValueError(f"unknown orientation: {orientation!r}")
