"""Shared fixtures. The game modules live flat in the repo root."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from game import BLUE, EMPTY, RED, empty_board  # noqa: E402
from lattice import HexLattice  # noqa: E402

SYMBOLS = {".": EMPTY, "R": RED, "B": BLUE}


@pytest.fixture
def make_board():
    """Build a board from strings such as ``["B.R", "...", "RB."]``."""
    def build(rows):
        return [[SYMBOLS[ch] for ch in row] for row in rows]
    return build


@pytest.fixture
def lattice3():
    return HexLattice(3)


@pytest.fixture
def board3():
    return empty_board(3)
