# config.py
from __future__ import annotations

import logging

# board
DEFAULT_SIZE = 11
BOARD_SIZES = (5, 7, 9, 11)

# Monte Carlo: trials per empty cell. 1000 is the library default; the
# front ends use smaller values so a move takes seconds, not minutes.
DEFAULT_SAMPLE_MULTIPLIER = 1000
UI_SAMPLE_MULTIPLIER = 4
CONSOLE_SAMPLE_MULTIPLIER = 20

# the name that turns a console player into the bot
AI_PLAYER_NAME = "AI"

# window
WINDOW_SIZE = (800, 600)
FPS = 60

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once for the CLI entry points."""
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
