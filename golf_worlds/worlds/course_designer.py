"""
Golf Worlds - Course Designer World
====================================
Paint a hole onto an 80-column terrain grid, drop a tee and a cup,
then switch to play mode and putt across what you built.

Design mode:
  Drag        - paint with the current brush
  1..5        - grass / sand / water / green / eraser
  H, T        - next click places the hole / the tee
Play mode:
  LEFT/RIGHT  - rotate aim (held)
  SPACE       - hold to charge, release to putt

Each terrain type doubles as a per-cell friction multiplier in play
mode.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
import logging
import math

import pygame

from golf_worlds.core.constants import COLOR_BLACK, COLOR_DANGER, COLOR_WHITE, KEY_LEFT, KEY_RIGHT, KEY_SPACE
from golf_worlds.core.errors import InvalidPlacementError
from golf_worlds.core.input_router import PointerState
from golf_worlds.core.utils import clamp
from golf_worlds.core.world import FrameContext, World
from golf_worlds.ui.draw import draw_text, fill_alpha
from golf_worlds.ui.elements import UIButton

logger = logging.getLogger(__name__)


class Terrain(enum.IntEnum):
    GRASS = 0
    SAND = 1
    WATER = 2
    GREEN = 3
    TEE = 4


# ── Tuning ──────────────────────────────────────────────────────────
COLS = 80
ROTATE_STEP = 0.05
CHARGE_RATE = 2
MAX_POWER = 200
POWER_TO_SPEED = 0.05
STOP_SPEED = 0.1
CUP_RATIO = 0.36
MESSAGE_MS = 1800

FRICTION: dict[Terrain, float] = {
    Terrain.GRASS: 0.98,
    Terrain.SAND: 0.9,
    Terrain.WATER: 0.85,
    Terrain.GREEN: 0.95,
    Terrain.TEE: 0.98,
}

TERRAIN_COLORS: dict[Terrain, tuple[int, int, int]] = {
    Terrain.GRASS: (47, 161, 74),
    Terrain.SAND: (230, 212, 166),
    Terrain.WATER: (143, 187, 230),
    Terrain.GREEN: (118, 210, 126),
    Terrain.TEE: (106, 168, 79),
}

BRUSH_KEYS: dict[str, str] = {
    "1": "grass",
    "2": "sand",
    "3": "water",
    "4": "green",
    "5": "eraser",
}

BRUSH_TERRAIN: dict[str, Terrain] = {
    "grass": Terrain.GRASS,
    "sand": Terrain.SAND,
    "water": Terrain.WATER,
    "green": Terrain.GREEN,
    "tee": Terrain.TEE,
}


@dataclass(frozen=True)
class Cell:
    r: int
    c: int


@dataclass
class PuttBall:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    moving: bool = False


class CourseDesignerWorld(World):
    """Terrain painter with a top-down putting test mode."""

    def __init__(self) -> None:
        super().__init__()
        self.rows = 0
        self.cell_w = 1.0
        self.cell_h = 1.0
        self.grid: list[list[Terrain]] = []

        self.brush = "sand"
        self.placing_hole = False
        self.placing_tee = False
        self.hole: Cell | None = None
        self.tee: Cell | None = None

        self.in_play_mode = False
        self.ball = PuttBall()
        self.aim = 0.0
        self.power = 0
        self.charging = False
        self.strokes = 0

        self.message: str | None = None
        self._message_timer: int | None = None
        self._grid_surface: pygame.Surface | None = None
        self._btn_play: UIButton | None = None
        self._btn_eraser: UIButton | None = None
        self._btn_back: UIButton | None = None

    # ── Lifecycle ───────────────────────────────────────────────────
    def reset(self) -> None:
        self.rows = max(1, round(self.height / self.width * COLS))
        self.grid = [[Terrain.GRASS] * COLS for _ in range(self.rows)]
        self.hole = None
        self.tee = None
        self.placing_hole = False
        self.placing_tee = False
        self.brush = "sand"
        self.in_play_mode = False
        self._layout()
        self._enter_design_hud()
        logger.debug("Designer grid %dx%d", COLS, self.rows)

    def stop(self) -> None:
        if self.ctx:
            self.ctx.cancel(self._message_timer)
        self._message_timer = None

    def on_resize(self) -> None:
        old_w, old_h = self.cell_w * COLS, self.cell_h * self.rows
        self._layout()
        if self.in_play_mode and old_w > 0 and old_h > 0:
            self.ball.x *= self.width / old_w
            self.ball.y *= self.height / old_h

    def _layout(self) -> None:
        w, h = self.width, self.height
        self.cell_w = w / COLS
        self.cell_h = h / self.rows
        self._grid_surface = None
        self._btn_play = UIButton(w - 280, h - 60, 120, 36, "Play")
        self._btn_eraser = UIButton(w - 140, h - 60, 120, 36, "Eraser", text_color=COLOR_DANGER)
        self._btn_back = UIButton(w - 140, 10, 120, 36, "Back")

    def _enter_design_hud(self) -> None:
        self.ctx.set_subtitle(
            "Drag to paint. 1-5 pick a brush, H/T place hole and tee, then press Play."
        )
        self.ctx.set_status("Designer mode")

    # ── Grid ────────────────────────────────────────────────────────
    def world_to_cell(self, x: float, y: float) -> Cell:
        c = int(clamp(math.floor(x / self.cell_w), 0, COLS - 1))
        r = int(clamp(math.floor(y / self.cell_h), 0, self.rows - 1))
        return Cell(r, c)

    def cell_center(self, cell: Cell) -> tuple[float, float]:
        return (cell.c * self.cell_w + self.cell_w / 2, cell.r * self.cell_h + self.cell_h / 2)

    def terrain_at(self, x: float, y: float) -> Terrain:
        cell = self.world_to_cell(x, y)
        return self.grid[cell.r][cell.c]

    def paint_at(self, x: float, y: float) -> None:
        if self.in_play_mode:
            return
        cell = self.world_to_cell(x, y)
        if self.placing_hole:
            self.hole = cell
            self.placing_hole = False
            return
        if self.placing_tee:
            self.tee = cell
            self.placing_tee = False
            return

        if self.brush == "eraser":
            if self.hole == cell:
                self.hole = None
            if self.tee == cell:
                self.tee = None
            self._set_cell(cell, Terrain.GRASS)
        else:
            self._set_cell(cell, BRUSH_TERRAIN.get(self.brush, Terrain.GRASS))

    def _set_cell(self, cell: Cell, terrain: Terrain) -> None:
        self.grid[cell.r][cell.c] = terrain
        if self._grid_surface is not None:
            self._paint_cell(self._grid_surface, cell.r, cell.c)

    # ── Play mode ───────────────────────────────────────────────────
    def start_play_mode(self) -> None:
        """Switch to putting.  Needs both a tee and a hole."""
        if self.tee is None or self.hole is None:
            raise InvalidPlacementError("Place both tee and hole first!")
        self.in_play_mode = True
        self.strokes = 0
        self._reset_ball_to_tee()
        self.ctx.set_subtitle("Left/Right to aim, hold Space to charge, release to putt.")
        self.ctx.set_status("Play mode - Strokes 0")

    def exit_play_mode(self) -> None:
        self.in_play_mode = False
        self.charging = False
        self._enter_design_hud()

    def _reset_ball_to_tee(self) -> None:
        x, y = self.cell_center(self.tee)
        self.ball = PuttBall(x, y)
        self.aim = 0.0
        self.power = 0
        self.charging = False

    def update_play(self) -> None:
        ball = self.ball
        if not ball.moving:
            if self.ctx.keys.is_down(KEY_LEFT):
                self.aim -= ROTATE_STEP
            if self.ctx.keys.is_down(KEY_RIGHT):
                self.aim += ROTATE_STEP
            return

        ball.x += ball.vx
        ball.y += ball.vy
        if not (0 <= ball.x <= self.width and 0 <= ball.y <= self.height):
            logger.debug("Putt left the course, back to the tee")
            self._reset_ball_to_tee()
            self.show_message("Out of bounds - back to the tee")
            return

        friction = FRICTION[self.terrain_at(ball.x, ball.y)]
        ball.vx *= friction
        ball.vy *= friction
        if abs(ball.vx) < STOP_SPEED and abs(ball.vy) < STOP_SPEED:
            ball.moving = False
            ball.vx = 0.0
            ball.vy = 0.0

        hx, hy = self.cell_center(self.hole)
        if math.hypot(ball.x - hx, ball.y - hy) < min(self.cell_w, self.cell_h) * CUP_RATIO:
            logger.info("Designer hole completed in %d strokes", self.strokes)
            self.show_message(f"Hole completed in {self.strokes} strokes!")
            self.exit_play_mode()

    def putt(self) -> None:
        if not self.charging:
            return
        self.charging = False
        speed = self.power * POWER_TO_SPEED
        self.ball.vx = math.cos(self.aim) * speed
        self.ball.vy = math.sin(self.aim) * speed
        self.ball.moving = True
        self.strokes += 1
        self.power = 0
        self.ctx.set_status(f"Play mode - Strokes {self.strokes}")

    # ── Transient message ───────────────────────────────────────────
    def show_message(self, text: str) -> None:
        self.message = text
        self.ctx.cancel(self._message_timer)

        def clear() -> None:
            if self.message == text:
                self.message = None

        self._message_timer = self.ctx.call_later(MESSAGE_MS, clear)

    # ── Tick ────────────────────────────────────────────────────────
    def frame(self, frame: FrameContext) -> bool:
        if self.in_play_mode:
            if self.charging:
                self.power = min(self.power + CHARGE_RATE, MAX_POWER)
            self.update_play()
        self.draw(frame.canvas)
        return True

    # ── Input ───────────────────────────────────────────────────────
    def on_pointer_move(self, pointer: PointerState) -> None:
        if not self.in_play_mode and pointer.is_down:
            self.paint_at(pointer.x, pointer.y)

    def on_pointer_down(self, pointer: PointerState) -> None:
        if self.in_play_mode:
            if self._btn_back.contains(pointer.x, pointer.y):
                self.exit_play_mode()
            return
        if self._btn_play.contains(pointer.x, pointer.y):
            try:
                self.start_play_mode()
            except InvalidPlacementError as exc:
                self.show_message(str(exc))
            return
        if self._btn_eraser.contains(pointer.x, pointer.y):
            self.brush = "eraser"
            return
        self.paint_at(pointer.x, pointer.y)

    def on_key_down(self, code: str) -> None:
        if not self.in_play_mode:
            if code in BRUSH_KEYS:
                self.brush = BRUSH_KEYS[code]
            elif code == "h":
                self.placing_hole = True
            elif code == "t":
                self.placing_tee = True
        elif code == KEY_SPACE and not self.ball.moving:
            self.charging = True

    def on_key_up(self, code: str) -> None:
        if self.in_play_mode and code == KEY_SPACE:
            self.putt()

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> None:
        surface.blit(self._get_grid_surface(), (0, 0))
        marker = min(self.cell_w, self.cell_h)

        if self.hole is not None:
            pygame.draw.circle(surface, COLOR_BLACK, self.cell_center(self.hole), max(2, marker * CUP_RATIO))

        if self.in_play_mode:
            pygame.draw.circle(surface, (220, 30, 30), (self.ball.x, self.ball.y), max(2, marker * 0.3))
            if not self.ball.moving:
                length = marker * 3.2
                tip = (self.ball.x + math.cos(self.aim) * length, self.ball.y + math.sin(self.aim) * length)
                pygame.draw.line(surface, COLOR_WHITE, (self.ball.x, self.ball.y), tip, 5)
            pygame.draw.rect(surface, COLOR_WHITE, (10, 40, MAX_POWER, 16))
            pygame.draw.rect(surface, (0, 128, 0), (10, 40, min(self.power, MAX_POWER), 16))
            self._btn_back.draw(surface)
        else:
            if self.tee is not None:
                pygame.draw.circle(surface, COLOR_WHITE, self.cell_center(self.tee), max(2, marker * 0.32))
            self._btn_play.draw(surface)
            self._btn_eraser.draw(surface)
            label = f"Brush: {self.brush}"
            if self.placing_hole:
                label = "Click to place the hole"
            elif self.placing_tee:
                label = "Click to place the tee"
            draw_text(surface, label, (self._btn_play.rect.x + 10, self._btn_play.rect.y - 35), 14, (17, 17, 17))

        if self.message:
            fill_alpha(surface, (0, 0, 0, 100), (0, self.height - 120, self.width, 44))
            draw_text(surface, self.message, (self.width / 2, self.height - 92), 18, align="center")

    def _get_grid_surface(self) -> pygame.Surface:
        if self._grid_surface is None:
            grid_surface = pygame.Surface((self.width, self.height))
            grid_surface.fill((167, 211, 154))
            for r in range(self.rows):
                for c in range(COLS):
                    self._paint_cell(grid_surface, r, c)
            self._grid_surface = grid_surface
        return self._grid_surface

    def _paint_cell(self, target: pygame.Surface, r: int, c: int) -> None:
        x0 = int(c * self.cell_w)
        y0 = int(r * self.cell_h)
        x1 = int((c + 1) * self.cell_w)
        y1 = int((r + 1) * self.cell_h)
        pygame.draw.rect(target, TERRAIN_COLORS[self.grid[r][c]], (x0, y0, x1 - x0, y1 - y0))
