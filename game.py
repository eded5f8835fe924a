# game.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config import DEFAULT_SIZE
from lattice import HORIZONTAL, VERTICAL, HexLattice
from search import ReachabilitySearch

logger = logging.getLogger(__name__)

EMPTY, RED, BLUE = 0, 1, 2
CELL_SYMBOLS = {EMPTY: ".", RED: "R", BLUE: "B"}
COLOR_NAMES = {RED: "Red", BLUE: "Blue"}

# orientation by turn order: whoever moves first joins left and right
ORIENTATIONS = (HORIZONTAL, VERTICAL)

Board = List[List[int]]


@dataclass(frozen=True)
class Move:
    r: int
    c: int

    def index(self, size: int) -> int:
        return self.r * size + self.c

    @classmethod
    def from_index(cls, node: int, size: int) -> "Move":
        r, c = divmod(node, size)
        return cls(r, c)


def other(player: int) -> int:
    return RED if player == BLUE else BLUE


def empty_board(size: int) -> Board:
    return [[EMPTY] * size for _ in range(size)]


def empty_cells(board: Sequence[Sequence[int]]) -> List[int]:
    n = len(board)
    return [r * n + c for r in range(n) for c in range(n) if board[r][c] == EMPTY]


def connects(
    lattice: HexLattice,
    board: Sequence[Sequence[int]],
    moved_node: int,
    color: int,
    orientation: str,
    search: Optional[ReachabilitySearch] = None,
) -> bool:
    """True if the ``color`` group containing ``moved_node`` joins both edges of ``orientation``.

    The whole group is explored every call; there is no incremental cache.
    Pass ``search`` to reuse its state arrays across calls.
    """
    n = lattice.size
    r, c = divmod(moved_node, n)
    if board[r][c] != color:
        raise ValueError(f"node {moved_node} is not owned by color {color}")
    if search is None:
        search = ReachabilitySearch(lattice)
    group = search.run(board, moved_node, color)

    if orientation == HORIZONTAL:
        cols = {node % n for node in group}
        return 0 in cols and n - 1 in cols
    if orientation == VERTICAL:
        rows = {node // n for node in group}
        return 0 in rows and n - 1 in rows
    raise ValueError(f"unknown orientation: {orientation!r}")


def winning_chain(
    lattice: HexLattice,
    board: Sequence[Sequence[int]],
    moved_node: int,
    color: int,
    orientation: str,
    search: Optional[ReachabilitySearch] = None,
) -> List[int]:
    """Edge-to-edge chain through ``moved_node``, or [] if it does not connect."""
    if search is None:
        search = ReachabilitySearch(lattice)
    if not connects(lattice, board, moved_node, color, orientation, search):
        return []

    side_a, side_b = lattice.edge_cells(orientation)

    def nearest(side: List[int]) -> int:
        hits = [node for node in side if search.visited(node)]
        return min(hits, key=lambda node: (search.distance(node), node))

    to_a = search.path_to(nearest(side_a))
    to_b = search.path_to(nearest(side_b))
    k = 0
    while k < min(len(to_a), len(to_b)) and to_a[k] == to_b[k]:
        k += 1
    return to_a[k - 1:][::-1] + to_b[k:]


class HexGame:
    """A game session: board, turn order and the winner.

    ``players`` holds the two colors in turn order. The first of them must
    join the left and right columns, the second the top and bottom rows.
    """

    def __init__(self, size: int = DEFAULT_SIZE, first: int = BLUE, lattice: Optional[HexLattice] = None):
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        if first not in (RED, BLUE):
            raise ValueError(f"unknown color: {first!r}")
        if lattice is not None and lattice.size != size:
            raise ValueError("lattice size does not match board size")
        self.size = size
        self.players: Tuple[int, int] = (first, other(first))
        self.lattice = lattice if lattice is not None else HexLattice(size)
        self.search = ReachabilitySearch(self.lattice)
        self.reset()

    def reset(self):
        self.board: Board = empty_board(self.size)
        self.current = self.players[0]
        self.winner: int = EMPTY
        self.last_move: Optional[Move] = None
        self.moves_played: int = 0

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def orientation_of(self, color: int) -> str:
        return ORIENTATIONS[self.players.index(color)]

    def legal_moves(self) -> List[Move]:
        if self.winner != EMPTY:
            return []
        return [Move.from_index(i, self.size) for i in empty_cells(self.board)]

    def play(self, mv: Move) -> bool:
        if self.winner != EMPTY:
            return False
        if not self.in_bounds(mv.r, mv.c):
            return False
        if self.board[mv.r][mv.c] != EMPTY:
            return False

        p = self.current
        self.board[mv.r][mv.c] = p
        self.last_move = mv
        self.moves_played += 1
        logger.debug("%s plays (%d, %d)", COLOR_NAMES[p], mv.r, mv.c)

        if connects(self.lattice, self.board, mv.index(self.size), p, self.orientation_of(p), self.search):
            self.winner = p
            logger.info("%s wins after %d moves", COLOR_NAMES[p], self.moves_played)
        else:
            self.current = other(p)
        return True

    def winning_chain(self) -> List[Move]:
        if self.winner == EMPTY or self.last_move is None:
            return []
        chain = winning_chain(
            self.lattice,
            self.board,
            self.last_move.index(self.size),
            self.winner,
            self.orientation_of(self.winner),
            self.search,
        )
        return [Move.from_index(i, self.size) for i in chain]

    def clone(self) -> "HexGame":
        g = HexGame(self.size, first=self.players[0], lattice=self.lattice)
        g.board = [row[:] for row in self.board]
        g.current = self.current
        g.winner = self.winner
        g.last_move = self.last_move
        g.moves_played = self.moves_played
        return g
