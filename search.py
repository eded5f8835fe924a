# search.py
from __future__ import annotations

import heapq
from typing import Dict, List, Sequence, Set, Tuple

from lattice import HexLattice

UNVISITED, FRONTIER, VISITED = 0, 1, 2
NO_PREDECESSOR = -1


class Frontier:
    """Open set ordered by (distance, index).

    Backed by a binary heap. ``decrease`` pushes a fresh entry and the stale
    one is skipped when it surfaces in ``pop_min``.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int]] = []
        self._best: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._best)

    def __contains__(self, node: int) -> bool:
        return node in self._best

    def clear(self):
        self._heap.clear()
        self._best.clear()

    def insert(self, node: int, distance: int):
        assert node not in self._best, f"node {node} already in frontier"
        self._best[node] = distance
        heapq.heappush(self._heap, (distance, node))

    def decrease(self, node: int, distance: int):
        assert node in self._best, f"node {node} not in frontier"
        if distance < self._best[node]:
            self._best[node] = distance
            heapq.heappush(self._heap, (distance, node))

    def pop_min(self) -> Tuple[int, int]:
        while self._heap:
            d, node = heapq.heappop(self._heap)
            if self._best.get(node) != d:
                continue
            del self._best[node]
            return d, node
        raise IndexError("pop from empty frontier")


class ReachabilitySearch:
    """Color-restricted uniform-cost traversal over a hex lattice.

    Per-node state (tag, distance, predecessor) lives in three lists indexed
    by node and is reset at the start of every ``run``. All edges cost 1, so
    the pass behaves like breadth-first search; the frontier still supports
    decrease-key so weighted variants keep working.
    """

    def __init__(self, lattice: HexLattice):
        self.lattice = lattice
        n = lattice.num_nodes
        self.tag: List[int] = [UNVISITED] * n
        self.dist: List[int] = [0] * n
        self.prev: List[int] = [NO_PREDECESSOR] * n
        self.frontier = Frontier()
        self.visit_order: List[int] = []
        self.start = NO_PREDECESSOR

    def reset(self):
        n = self.lattice.num_nodes
        self.tag[:] = [UNVISITED] * n
        self.dist[:] = [0] * n
        self.prev[:] = [NO_PREDECESSOR] * n
        self.frontier.clear()
        self.visit_order = []
        self.start = NO_PREDECESSOR

    def run(self, board: Sequence[Sequence[int]], start: int, color: int) -> Set[int]:
        """Return every ``color`` node reachable from ``start`` through ``color`` cells."""
        self.reset()
        self.start = start
        size = self.lattice.size
        tag, dist, prev = self.tag, self.dist, self.prev
        frontier = self.frontier

        frontier.insert(start, 0)
        tag[start] = FRONTIER

        while frontier:
            d, node = frontier.pop_min()
            tag[node] = VISITED
            self.visit_order.append(node)

            for nb in self.lattice.neighbors(node):
                r, c = divmod(nb, size)
                if board[r][c] != color or tag[nb] == VISITED:
                    continue
                nd = d + 1
                if tag[nb] == UNVISITED:
                    tag[nb] = FRONTIER
                    dist[nb] = nd
                    prev[nb] = node
                    frontier.insert(nb, nd)
                elif nd < dist[nb]:
                    # never taken with unit weights
                    dist[nb] = nd
                    prev[nb] = node
                    frontier.decrease(nb, nd)

        return set(self.visit_order)

    def visited(self, node: int) -> bool:
        return self.tag[node] == VISITED

    def distance(self, node: int) -> int:
        return self.dist[node]

    def predecessor(self, node: int) -> int:
        return self.prev[node]

    def path_to(self, node: int) -> List[int]:
        """Chain start -> node along predecessors of the last pass, or []."""
        if not self.visited(node):
            return []
        path = [node]
        while path[-1] != self.start:
            path.append(self.prev[path[-1]])
        path.reverse()
        return path
