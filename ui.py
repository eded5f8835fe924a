# ui.py
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import pygame
import pygame_gui

from bot import MonteCarloBot
from config import BOARD_SIZES, DEFAULT_SIZE, FPS, UI_SAMPLE_MULTIPLIER
from game import BLUE, COLOR_NAMES, EMPTY, RED, HexGame, Move
from lattice import HORIZONTAL

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
WHITE = (255, 255, 255)
SQRT3 = math.sqrt(3.0)


def hex_corners(center, radius: float):
    """Corners of a pointy-top hexagon."""
    cx, cy = center
    return [
        (cx + radius * math.cos(math.radians(a)), cy + radius * math.sin(math.radians(a)))
        for a in range(-30, 330, 60)
    ]


def cell_center(r: int, c: int, origin, radius: float):
    # each row sits half a cell right of the one above, matching the lattice
    ox, oy = origin
    return ox + (c + r / 2) * SQRT3 * radius, oy + r * 1.5 * radius


def fit_radius(n: int, width: int, height: int, margin: int = 40) -> float:
    """Largest cell radius that fits an n x n rhombus into width x height."""
    by_w = (width - 2 * margin) / (SQRT3 * (n + (n - 1) / 2))
    by_h = (height - 2 * margin) / (1.5 * n + 0.5)
    return max(6.0, min(by_w, by_h, 26.0))


def point_in_poly(p, poly) -> bool:
    """Even-odd ray casting."""
    px, py = p
    inside = False
    for (ax, ay), (bx, by) in zip(poly, poly[1:] + poly[:1]):
        if (ay > py) != (by > py) and px < ax + (bx - ax) * (py - ay) / (by - ay):
            inside = not inside
    return inside


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    h %= 360.0
    chroma = v * s
    mid = chroma * (1.0 - abs((h / 60.0) % 2.0 - 1.0))
    low = v - chroma
    rgb = [
        (chroma, mid, 0), (mid, chroma, 0), (0, chroma, mid),
        (0, mid, chroma), (mid, 0, chroma), (chroma, 0, mid),
    ][int(h // 60)]
    return tuple(int((ch + low) * 255) for ch in rgb)


def darker(col: RGB, amount: int = 60) -> RGB:
    return tuple(max(0, ch - amount) for ch in col)


@dataclass
class Theme:
    bg: RGB = (30, 30, 35)
    panel: RGB = (24, 24, 28)
    panel_border: RGB = (60, 60, 70)

    empty: RGB = (210, 210, 210)
    grid: RGB = (70, 70, 80)
    last_move: RGB = (245, 245, 245)
    chain: RGB = (250, 210, 60)

    red: RGB = (220, 70, 70)
    blue: RGB = (70, 120, 220)
    side_red: RGB = (160, 40, 40)
    side_blue: RGB = (40, 80, 160)

    text: RGB = (235, 235, 235)
    muted: RGB = (180, 180, 190)

    def stone(self, color: int) -> RGB:
        return self.red if color == RED else self.blue

    def side(self, color: int) -> RGB:
        return self.side_red if color == RED else self.side_blue

    def recolor(self, color: int, rgb: RGB):
        if color == RED:
            self.red, self.side_red = rgb, darker(rgb)
        else:
            self.blue, self.side_blue = rgb, darker(rgb)


class BoardLayout:
    """Pixel geometry of the board: one hexagon per cell, centred in an area."""

    def __init__(self, n: int, area: pygame.Rect):
        self.n = n
        self.radius = fit_radius(n, area.w, area.h)
        width = SQRT3 * self.radius * (n + (n - 1) / 2)
        self.origin = (area.x + (area.w - width) / 2 + self.radius, area.y + 20 + self.radius)
        self.cells: List[Tuple[int, int, list, pygame.Rect]] = []
        for r in range(n):
            for c in range(n):
                poly = hex_corners(cell_center(r, c, self.origin, self.radius), self.radius)
                box = pygame.Rect(0, 0, 0, 0)
                box.x, box.y = int(min(x for x, _ in poly)), int(min(y for _, y in poly))
                box.w = int(max(x for x, _ in poly)) - box.x + 1
                box.h = int(max(y for _, y in poly)) - box.y + 1
                self.cells.append((r, c, poly, box))

    def pick(self, pos) -> Optional[Move]:
        for r, c, poly, box in self.cells:
            if box.collidepoint(pos) and point_in_poly(pos, poly):
                return Move(r, c)
        return None


class ColorPicker:
    """Hue bar plus saturation/value square. Gradients are cached per hue."""

    def __init__(self, sv_rect: pygame.Rect, hue_rect: pygame.Rect):
        self.sv_rect = sv_rect
        self.hue_rect = hue_rect
        self.hue = 0.0
        self.sat, self.val = 1.0, 1.0
        self._hue_bar: Optional[pygame.Surface] = None
        self._sv_square: Optional[pygame.Surface] = None
        self._sv_hue = -1.0

    @property
    def color(self) -> RGB:
        return hsv_to_rgb(self.hue, self.sat, self.val)

    @staticmethod
    def _fraction(value: int, start: int, length: int) -> float:
        return min(1.0, max(0.0, (value - start) / max(1, length - 1)))

    def click(self, pos) -> bool:
        x, y = pos
        if self.hue_rect.collidepoint(pos):
            self.hue = 360.0 * self._fraction(x, self.hue_rect.x, self.hue_rect.w)
            return True
        if self.sv_rect.collidepoint(pos):
            self.sat = self._fraction(x, self.sv_rect.x, self.sv_rect.w)
            self.val = 1.0 - self._fraction(y, self.sv_rect.y, self.sv_rect.h)
            return True
        return False

    def _surfaces(self) -> Tuple[pygame.Surface, pygame.Surface]:
        if self._hue_bar is None:
            w, h = self.hue_rect.size
            self._hue_bar = pygame.Surface((w, h))
            for ix in range(w):
                pygame.draw.line(self._hue_bar, hsv_to_rgb(360.0 * ix / max(1, w - 1), 1, 1), (ix, 0), (ix, h - 1))
        if self._sv_square is None or self._sv_hue != self.hue:
            w, h = self.sv_rect.size
            self._sv_square = pygame.Surface((w, h))
            for ix in range(w):
                for iy in range(h):
                    s, v = ix / max(1, w - 1), 1.0 - iy / max(1, h - 1)
                    self._sv_square.set_at((ix, iy), hsv_to_rgb(self.hue, s, v))
            self._sv_hue = self.hue
        return self._hue_bar, self._sv_square

    def draw(self, screen: pygame.Surface, border: RGB):
        hue_bar, sv_square = self._surfaces()
        screen.blit(sv_square, self.sv_rect.topleft)
        screen.blit(hue_bar, self.hue_rect.topleft)
        pygame.draw.rect(screen, border, self.sv_rect, 1)
        pygame.draw.rect(screen, border, self.hue_rect, 1)

        hx = self.hue_rect.x + round(self.hue / 360.0 * (self.hue_rect.w - 1))
        pygame.draw.line(screen, WHITE, (hx, self.hue_rect.top - 2), (hx, self.hue_rect.bottom + 2), 2)
        cursor = (
            self.sv_rect.x + round(self.sat * (self.sv_rect.w - 1)),
            self.sv_rect.y + round((1.0 - self.val) * (self.sv_rect.h - 1)),
        )
        pygame.draw.circle(screen, WHITE, cursor, 6, 2)


class AppUI:
    HUD_H = 140

    def __init__(self, screen: pygame.Surface, size: int = DEFAULT_SIZE,
                 sample_multiplier: int = UI_SAMPLE_MULTIPLIER, seed: Optional[int] = None):
        self.screen = screen
        self.clock = pygame.time.Clock()
        self.manager = pygame_gui.UIManager(screen.get_size())
        self.widgets = []
        self.font = pygame.font.SysFont("consolas", 18)
        self.big_font = pygame.font.SysFont("consolas", 30)
        self.theme = Theme()

        self.screen_name = "menu"  # menu / how / settings / game
        self.size = size
        self.game = HexGame(size)
        self.layout = self._make_layout()
        self.chain: Set[Tuple[int, int]] = set()

        # the bot computes on a cloned game in a worker thread
        self.vs_bot = True
        self.human = self.game.players[0]
        self.bot = MonteCarloBot(sample_multiplier=sample_multiplier, seed=seed)
        self.bot_thread: Optional[threading.Thread] = None
        self.bot_result: Optional[Tuple[HexGame, Move]] = None
        self.bot_busy = False

        self.picker = ColorPicker(pygame.Rect(20, 90, 360, 130), pygame.Rect(20, 240, 360, 18))
        self.picker_target = BLUE

        self._show_menu()

    @property
    def bot_player(self) -> int:
        return RED if self.human == BLUE else BLUE

    def _make_layout(self) -> BoardLayout:
        w, h = self.screen.get_size()
        return BoardLayout(self.game.size, pygame.Rect(0, self.HUD_H, w, h - self.HUD_H))

    def _order_word(self, color: int) -> str:
        return "first" if self.game.players[0] == color else "second"

    # ---------- widgets per screen ----------
    def _reset_widgets(self):
        for widget in self.widgets:
            widget.kill()
        self.widgets = []

    def _add_button(self, pos, size, text: str, oid: str):
        self.widgets.append(pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(pos, size), text=text, manager=self.manager, object_id=oid,
        ))

    def _add_label(self, pos, size, text: str):
        self.widgets.append(pygame_gui.elements.UILabel(pygame.Rect(pos, size), text, self.manager))

    def _show_menu(self):
        self.screen_name = "menu"
        self._reset_widgets()
        left = self.screen.get_width() // 2 - 140
        entries = [("Play", "#btn_play"), ("How to play", "#btn_how"),
                   ("Settings", "#btn_settings"), ("Quit", "#btn_exit")]
        for i, (text, oid) in enumerate(entries):
            self._add_button((left, 190 + 70 * i), (280, 55), text, oid)

    def _show_how(self):
        self.screen_name = "how"
        self._reset_widgets()
        self._add_button((20, 20), (120, 40), "Back", "#btn_back")

    def _show_settings(self):
        self.screen_name = "settings"
        self._reset_widgets()
        self._add_button((20, 20), (120, 40), "Back", "#btn_back")
        self._add_label((160, 25), (460, 30), "Settings: board, bot and colors")
        self._add_button((400, 90), (180, 40), "Apply", "#apply_color")
        self._add_button((20, 300), (240, 45), f"Versus bot: {'yes' if self.vs_bot else 'no'}", "#toggle_bot")
        self._add_button((280, 300), (160, 45), "Color: Blue", "#pick_blue")
        self._add_button((450, 300), (160, 45), "Color: Red", "#pick_red")
        self._add_label((20, 360), (700, 25), "Pick a hue and a saturation/value, then press Apply.")
        self._add_button((20, 400), (240, 45), f"Board: {self.size}x{self.size}", "#cycle_size")
        self._add_button((280, 400), (330, 45),
                         f"You play: {COLOR_NAMES[self.human]} ({self._order_word(self.human)})", "#toggle_side")

    def _show_game(self):
        self.screen_name = "game"
        self._reset_widgets()
        x = self.screen.get_width() - 180
        self._add_button((x, 20), (160, 40), "Menu", "#btn_menu")
        self._add_button((x, 70), (160, 40), "New game", "#btn_new")
        self._new_game()

    # ---------- game flow ----------
    def _new_game(self):
        self.game = HexGame(self.size)
        self.layout = self._make_layout()
        self.chain = set()
        self.bot_result = None
        self._maybe_start_bot()

    def _play(self, mv: Move) -> bool:
        if not self.game.play(mv):
            return False
        if self.game.winner != EMPTY:
            self.chain = {(m.r, m.c) for m in self.game.winning_chain()}
        return True

    def _maybe_start_bot(self):
        if not self.vs_bot or self.bot_busy:
            return
        if self.game.winner != EMPTY or self.game.current != self.bot_player:
            return

        live = self.game
        snapshot = live.clone()

        def think():
            try:
                self.bot_result = (live, self.bot.choose(snapshot))
            except Exception:
                logger.exception("bot failed to choose a move, playing a random one")
                self.bot_result = (live, self.bot.rng.choice(snapshot.legal_moves()))
            finally:
                self.bot_busy = False

        self.bot_busy = True
        self.bot_result = None
        self.bot_thread = threading.Thread(target=think, daemon=True)
        self.bot_thread.start()

    def _collect_bot_move(self):
        if self.bot_result is None or self.bot_busy:
            return
        game, mv = self.bot_result
        self.bot_result = None
        # a move computed for an abandoned game is dropped
        if game is self.game and game.current == self.bot_player:
            self._play(mv)
        self._maybe_start_bot()

    def _on_click(self, pos):
        if self.screen_name == "settings":
            self.picker.click(pos)
            return
        if self.screen_name != "game" or self.game.winner != EMPTY:
            return
        if self.vs_bot and (self.bot_busy or self.game.current != self.human):
            return
        mv = self.layout.pick(pos)
        if mv is not None and self._play(mv):
            self._maybe_start_bot()

    def _on_button(self, oid: str) -> bool:
        """Handle a pygame_gui button; returns False to quit."""
        action = oid.rsplit("#", 1)[-1]
        if action == "btn_exit":
            return False
        if action == "btn_play":
            self._show_game()
        elif action == "btn_how":
            self._show_how()
        elif action == "btn_settings":
            self._show_settings()
        elif action in ("btn_back", "btn_menu"):
            self._show_menu()
        elif action == "btn_new":
            self._new_game()
        elif action == "toggle_bot":
            self.vs_bot = not self.vs_bot
            self._show_settings()
        elif action == "toggle_side":
            self.human = self.bot_player
            self._show_settings()
        elif action == "cycle_size":
            i = BOARD_SIZES.index(self.size) if self.size in BOARD_SIZES else -1
            self.size = BOARD_SIZES[(i + 1) % len(BOARD_SIZES)]
            self._show_settings()
        elif action == "pick_red":
            self.picker_target = RED
        elif action == "pick_blue":
            self.picker_target = BLUE
        elif action == "apply_color":
            self.theme.recolor(self.picker_target, self.picker.color)
        return True

    def run(self):
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                self.manager.process_events(event)
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._on_click(event.pos)
                elif event.type == pygame_gui.UI_BUTTON_PRESSED:
                    running = self._on_button(event.ui_object_id)

            self.manager.update(dt)
            if self.screen_name == "game":
                self._collect_bot_move()
            self._draw()
        pygame.quit()

    # ---------- drawing ----------
    def _text(self, text: str, pos, color: Optional[RGB] = None, big: bool = False):
        font = self.big_font if big else self.font
        self.screen.blit(font.render(text, True, color or self.theme.text), pos)

    def _draw(self):
        self.screen.fill(self.theme.bg)
        if self.screen_name == "menu":
            title = self.big_font.render("HEX", True, self.theme.text)
            self.screen.blit(title, ((self.screen.get_width() - title.get_width()) // 2, 120))
        elif self.screen_name == "how":
            self._draw_rules()
        elif self.screen_name == "settings":
            self._draw_settings()
        elif self.screen_name == "game":
            hud = pygame.Rect(0, 0, self.screen.get_width(), self.HUD_H)
            pygame.draw.rect(self.screen, self.theme.panel, hud)
            pygame.draw.rect(self.screen, self.theme.panel_border, hud, 1)
            self._draw_board()
            self._draw_hud()
        self.manager.draw_ui(self.screen)
        pygame.display.flip()

    def _draw_rules(self):
        first, second = self.game.players
        lines = [
            "Hex:",
            f"{COLOR_NAMES[first]} moves first and joins LEFT and RIGHT.",
            f"{COLOR_NAMES[second]} moves second and joins TOP and BOTTOM.",
            "Players take turns claiming one empty cell.",
            "Cells touch their six neighbours; a draw is impossible.",
        ]
        for i, line in enumerate(lines):
            self._text(line, (20, 80 + 26 * i))

    def _draw_settings(self):
        self.picker.draw(self.screen, self.theme.panel_border)
        swatch = pygame.Rect(400, 145, 180, 75)
        pygame.draw.rect(self.screen, self.picker.color, swatch)
        pygame.draw.rect(self.screen, self.theme.panel_border, swatch, 1)
        self._text(f"Target: {COLOR_NAMES[self.picker_target]}", (400, 230))
        self._text("Hint: click the hue bar and the S/V square.", (20, 60), self.theme.muted)

    def _draw_board(self):
        n = self.game.size
        board = self.game.board
        for r, c, poly, _ in self.layout.cells:
            v = board[r][c]
            pygame.draw.polygon(self.screen, self.theme.empty if v == EMPTY else self.theme.stone(v), poly)
            pygame.draw.polygon(self.screen, self.theme.grid, poly, width=1)

        # edge cells take the color of the player who has to join them
        for color in self.game.players:
            horizontal = self.game.orientation_of(color) == HORIZONTAL
            for r, c, poly, _ in self.layout.cells:
                if (c if horizontal else r) in (0, n - 1):
                    pygame.draw.polygon(self.screen, self.theme.side(color), poly, width=3)

        last = self.game.last_move
        for r, c, poly, _ in self.layout.cells:
            if (r, c) in self.chain:
                pygame.draw.polygon(self.screen, self.theme.chain, poly, width=3)
            elif last is not None and (r, c) == (last.r, last.c):
                pygame.draw.polygon(self.screen, self.theme.last_move, poly, width=3)

    def _draw_hud(self):
        if self.game.winner != EMPTY:
            self._text(f"Winner: {COLOR_NAMES[self.game.winner]}", (20, 18), big=True)
        else:
            self._text(f"To move: {COLOR_NAMES[self.game.current]}", (20, 18), big=True)

        for i, color in enumerate(self.game.players):
            edges = "LEFT <-> RIGHT" if self.game.orientation_of(color) == HORIZONTAL else "TOP <-> BOTTOM"
            self._text(f"{COLOR_NAMES[color]}: join {edges}", (20, 70 + 24 * i), self.theme.stone(color))

        if not self.vs_bot:
            status = "Two players"
        elif self.bot_busy:
            status = "Bot is thinking..."
        else:
            status = f"Bot plays {COLOR_NAMES[self.bot_player]}"
        self._text(status, (20, 122))
