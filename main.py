# main.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import pygame

from config import (
    CONSOLE_SAMPLE_MULTIPLIER,
    DEFAULT_SIZE,
    UI_SAMPLE_MULTIPLIER,
    WINDOW_SIZE,
    setup_logging,
)
from console import ConsoleGame
from ui import AppUI

logger = logging.getLogger(__name__)


def create_icon():
    """A white H on the dark background colour."""
    size = 64
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill((30, 30, 35, 255))
    font = pygame.font.Font(None, size - 12)
    text_surface = font.render("H", True, (255, 255, 255))
    text_rect = text_surface.get_rect()
    text_rect.center = (size // 2, size // 2)
    icon.blit(text_surface, text_rect)
    return icon


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hex with a Monte Carlo bot")
    parser.add_argument("--console", action="store_true", help="play in the terminal instead of a window")
    parser.add_argument("--size", type=positive_int, default=DEFAULT_SIZE, help="board is SIZE x SIZE")
    parser.add_argument("--samples", type=positive_int, default=None,
                        help="random playouts per empty cell for the bot")
    parser.add_argument("--seed", type=int, default=None, help="seed for the bot's random generator")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    return parser


def run_console(args: argparse.Namespace) -> int:
    samples = args.samples or CONSOLE_SAMPLE_MULTIPLIER
    ConsoleGame(args.size, sample_multiplier=samples, seed=args.seed).run()
    return 0


def run_window(args: argparse.Namespace) -> int:
    pygame.init()
    screen = pygame.display.set_mode(WINDOW_SIZE)
    pygame.display.set_caption("Hex")
    pygame.display.set_icon(create_icon())

    samples = args.samples or UI_SAMPLE_MULTIPLIER
    AppUI(screen, size=args.size, sample_multiplier=samples, seed=args.seed).run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger.debug("starting with %s", vars(args))
    if args.console:
        return run_console(args)
    return run_window(args)


if __name__ == "__main__":
    raise SystemExit(main())
