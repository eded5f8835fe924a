# console.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from bot import MonteCarloBot
from config import AI_PLAYER_NAME, CONSOLE_SAMPLE_MULTIPLIER
from game import BLUE, CELL_SYMBOLS, EMPTY, HexGame, Move

logger = logging.getLogger(__name__)

PROMPT = "Input using: row,col  e.g. '0,1'    type 'exit' to exit"


@dataclass
class Player:
    name: str
    color: int
    ai: bool = False


def render_board(board: Sequence[Sequence[int]]) -> str:
    """Draw the board as text, each row shifted right of the one above:

     0   1   2
    0 . - . - .
       \\ / \\ / \\
      1 . - . - .
    """
    n = len(board)
    lines = [" " + "".join(f"{c}   " for c in range(n))]
    spaces = ""
    for r in range(n):
        cells = " - ".join(CELL_SYMBOLS[v] for v in board[r])
        lines.append(f"{spaces}{r} {cells}")
        if r != n - 1:
            lines.append("   " + spaces + "\\ / " * (n - 1) + "\\")
            spaces += "  "
    return "\n".join(lines) + "\n"


def parse_move(text: str, size: int) -> Optional[Move]:
    """'row,col' -> Move; None when malformed or off the board."""
    parts = text.strip().split(",")
    if len(parts) != 2:
        return None
    try:
        r, c = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= r < size and 0 <= c < size):
        return None
    return Move(r, c)


class ConsoleGame:
    """Terminal turn loop. A player named ``AI`` is played by the bot."""

    def __init__(
        self,
        size: int,
        sample_multiplier: int = CONSOLE_SAMPLE_MULTIPLIER,
        seed: Optional[int] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.game = HexGame(size, first=BLUE)
        self.bot = MonteCarloBot(sample_multiplier=sample_multiplier, seed=seed)
        self.players: List[Player] = []
        self._input = input_fn
        self._print = output_fn

    def _read(self, prompt: str) -> Optional[str]:
        """One line of input, or None once input is closed."""
        try:
            return self._input(prompt).strip()
        except EOFError:
            return None

    def setup_players(self) -> bool:
        """Ask both names; False if input closed before they were given."""
        self.players.clear()
        for num, color in enumerate(self.game.players, start=1):
            tag = CELL_SYMBOLS[color]
            name = self._read(f"Enter name of Player {num} ({tag}), type \"{AI_PLAYER_NAME}\" for AI\n")
            if name is None:
                return False
            self.players.append(Player(name or f"Player {num}", color, ai=name == AI_PLAYER_NAME))
        return True

    def player_for(self, color: int) -> Player:
        return next(p for p in self.players if p.color == color)

    def _ask_move(self, player: Player) -> Optional[Move]:
        while True:
            self._print(f"\n{player.name}'s turn. {PROMPT}\n")
            self._print(render_board(self.game.board))
            text = self._read("")
            if text is None or text == "exit":
                return None
            mv = parse_move(text, self.game.size)
            if mv is not None and self.game.board[mv.r][mv.c] == EMPTY:
                return mv
            self._print("\n!!!Invalid move!!!\n")

    def run(self) -> Optional[int]:
        """Play until someone wins; returns the winning color or None on exit."""
        if not self.players and not self.setup_players():
            return None

        while self.game.winner == EMPTY:
            player = self.player_for(self.game.current)
            if player.ai:
                self._print(f"\n{player.name}'s turn.")
                self._print(render_board(self.game.board))
                self._print(f"\n{player.name}'s thinking.")
                mv = self.bot.choose(self.game)
            else:
                mv = self._ask_move(player)
                if mv is None:
                    logger.info("game aborted by %s", player.name)
                    return None
            self.game.play(mv)

        winner = self.player_for(self.game.winner)
        self._print("")
        self._print(render_board(self.game.board))
        self._print(f"!!!{winner.name} wins!!!")
        return winner.color
