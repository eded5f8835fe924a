# bot.py
from __future__ import annotations

import logging
import random
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from config import DEFAULT_SAMPLE_MULTIPLIER
from game import EMPTY, COLOR_NAMES, Board, HexGame, Move, connects, empty_cells
from lattice import HexLattice
from search import ReachabilitySearch

logger = logging.getLogger(__name__)


@contextmanager
def trial_placements(board: Board) -> Iterator[Callable[[int, int], None]]:
    """Yield ``place(node, color)``; every placed stone is lifted again on exit."""
    n = len(board)
    placed: List[int] = []

    def place(node: int, color: int):
        r, c = divmod(node, n)
        assert board[r][c] == EMPTY, f"trial placement on occupied node {node}"
        board[r][c] = color
        placed.append(node)

    try:
        yield place
    finally:
        for node in reversed(placed):
            r, c = divmod(node, n)
            board[r][c] = EMPTY


def playout(
    lattice: HexLattice,
    board: Board,
    order: List[int],
    color: int,
    orientation: str,
    search: ReachabilitySearch,
) -> bool:
    """Fill the first half of ``order`` with ``color`` and report whether it connects.

    Only the mover's stones are placed; the opponent never replies inside a
    trial. The board is left as it was found.
    """
    with trial_placements(board) as place:
        for node in order[: (len(order) + 1) // 2]:
            place(node, color)
            if connects(lattice, board, node, color, orientation, search):
                return True
    return False


def sample_wins(
    lattice: HexLattice,
    board: Board,
    color: int,
    orientation: str,
    sample_multiplier: int,
    rng: Optional[random.Random] = None,
    search: Optional[ReachabilitySearch] = None,
) -> Dict[int, int]:
    """Win count per empty cell over ``sample_multiplier`` x empties random playouts.

    A win is credited to the first cell of the shuffled order.
    """
    candidates = empty_cells(board)
    if not candidates:
        raise ValueError("no empty cell to sample")
    if sample_multiplier < 1:
        raise ValueError(f"sample_multiplier must be >= 1, got {sample_multiplier}")
    if rng is None:
        rng = random.Random()
    if search is None:
        search = ReachabilitySearch(lattice)

    wins = dict.fromkeys(candidates, 0)
    for _ in range(sample_multiplier * len(candidates)):
        order = candidates[:]
        rng.shuffle(order)
        if playout(lattice, board, order, color, orientation, search):
            wins[order[0]] += 1
    return wins


def best_candidate(wins: Dict[int, int]) -> int:
    # most wins, ties to the smallest index
    return min(wins, key=lambda node: (-wins[node], node))


def choose_move(
    lattice: HexLattice,
    board: Board,
    color: int,
    orientation: str,
    sample_multiplier: int,
    rng: Optional[random.Random] = None,
) -> int:
    """Index of the empty cell with the best random-playout win count."""
    return best_candidate(sample_wins(lattice, board, color, orientation, sample_multiplier, rng))


class MonteCarloBot:
    def __init__(
        self,
        sample_multiplier: int = DEFAULT_SAMPLE_MULTIPLIER,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        if sample_multiplier < 1:
            raise ValueError(f"sample_multiplier must be >= 1, got {sample_multiplier}")
        self.sample_multiplier = sample_multiplier
        self.rng = rng if rng is not None else random.Random(seed)
        self.last_stats: Dict[int, int] = {}

    def choose(self, game: HexGame) -> Move:
        """Pick a move for ``game.current``. The game's board is used for the
        trials and is restored before returning."""
        color = game.current
        orientation = game.orientation_of(color)
        t0 = time.perf_counter()

        wins = sample_wins(
            game.lattice,
            game.board,
            color,
            orientation,
            self.sample_multiplier,
            self.rng,
            game.search,
        )
        node = best_candidate(wins)
        self.last_stats = wins

        trials = self.sample_multiplier * len(wins)
        logger.info(
            "%s (%s) picks %s: %d/%d trials won in %.2fs",
            COLOR_NAMES[color],
            orientation,
            divmod(node, game.size),
            wins[node],
            trials,
            time.perf_counter() - t0,
        )
        logger.debug("win counts: %s", wins)
        return Move.from_index(node, game.size)
