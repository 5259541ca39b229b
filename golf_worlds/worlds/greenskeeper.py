"""
Golf Worlds - Greenskeeper World
=================================
A relaxed irrigation round: turf patches slowly dry out and clicking
one waters it back to full.  Every tenth watering unlocks a short
sprinkler burst that soaks every patch within a radius of the click.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import pygame

from golf_worlds.core.input_router import PointerState
from golf_worlds.core.utils import clamp
from golf_worlds.core.world import FrameContext, World
from golf_worlds.ui.draw import draw_circle_alpha, draw_rounded_rect, draw_text, fill_alpha

logger = logging.getLogger(__name__)

# ── Tuning ──────────────────────────────────────────────────────────
COLS = 22
ROWS = 10
PAD = 12
ROUND_SECONDS = 90.0
MIN_MOISTURE = 0.2
MOISTURE_SPREAD = 0.7
MIN_DRYING_RATE = 0.00001  # moisture / ms
DRYING_SPREAD = 0.00002
DRY_THRESHOLD = 0.25
POINTS_PER_PATCH = 20
SPRINKLER_RADIUS = 75
SPRINKLER_DURATION_MS = 3000
SPRINKLER_UNLOCK = 10
HUD_BAR_HEIGHT = 60


@dataclass
class Patch:
    r: int
    c: int
    moisture: float
    drying_rate: float


@dataclass
class Splash:
    x: float
    y: float
    alpha: float = 0.8
    size: float = 4.0


class GreenskeeperWorld(World):
    """Moisture decay grid with a click-to-water action."""

    def __init__(self) -> None:
        super().__init__()
        self.patches: list[Patch] = []
        self.splashes: list[Splash] = []
        self.score = 0
        self.tasks_done = 0
        self.time_left = ROUND_SECONDS
        self.game_over = False
        self.sprinkler_active = False
        self.sprinkler_ms = 0.0
        self.cell_w = 1.0
        self.cell_h = 1.0
        self._last_tick = 0.0
        self._hover: tuple[float, float] | None = None

    # ── Lifecycle ───────────────────────────────────────────────────
    def reset(self) -> None:
        rng = self.ctx.rng
        self.patches = [
            Patch(
                r,
                c,
                moisture=rng.random() * MOISTURE_SPREAD + MIN_MOISTURE,
                drying_rate=MIN_DRYING_RATE + rng.random() * DRYING_SPREAD,
            )
            for r in range(ROWS)
            for c in range(COLS)
        ]
        self.splashes = []
        self.score = 0
        self.tasks_done = 0
        self.time_left = ROUND_SECONDS
        self.game_over = False
        self.sprinkler_active = False
        self.sprinkler_ms = 0.0
        self._last_tick = self.ctx.now()
        self._layout()
        self.ctx.set_subtitle("Click dry patches to water them. Keep moisture up to score.")
        self.ctx.set_status(f"Time {math.ceil(self.time_left)}s")

    def on_resize(self) -> None:
        self._layout()
        if self.game_over:
            # The loop is stopped; paint the results once onto the new surface.
            self.ctx.resume()

    def _layout(self) -> None:
        self.cell_w = (self.width - PAD * 2) / COLS
        self.cell_h = (self.height - PAD * 2) / ROWS

    # ── Simulation ──────────────────────────────────────────────────
    def advance(self, dt_ms: float) -> None:
        """Dry every patch and run the round/sprinkler clocks."""
        if self.game_over:
            return
        for patch in self.patches:
            patch.moisture = max(0.0, patch.moisture - patch.drying_rate * dt_ms)

        if self.sprinkler_active:
            self.sprinkler_ms -= dt_ms
            if self.sprinkler_ms <= 0:
                self.sprinkler_active = False
                self.sprinkler_ms = 0.0
                logger.debug("Sprinkler expired")

        self.time_left -= dt_ms / 1000
        self.ctx.set_status(f"Time {max(0, math.ceil(self.time_left))}s")
        if self.time_left <= 0:
            self.game_over = True
            self.ctx.set_subtitle("Time up - results finalized")
            logger.info("Greenskeeper round over, score %d", self.score)

    def patch_at(self, x: float, y: float) -> Patch:
        c = int(clamp(math.floor((x - PAD) / self.cell_w), 0, COLS - 1))
        r = int(clamp(math.floor((y - PAD) / self.cell_h), 0, ROWS - 1))
        return self.patches[r * COLS + c]

    def patch_center(self, patch: Patch) -> tuple[float, float]:
        return (
            PAD + patch.c * self.cell_w + self.cell_w / 2,
            PAD + patch.r * self.cell_h + self.cell_h / 2,
        )

    def water(self, x: float, y: float) -> int:
        """Water at a surface point.  Returns how many patches were reset."""
        if self.sprinkler_active:
            watered = 0
            for patch in self.patches:
                px, py = self.patch_center(patch)
                if (px - x) ** 2 + (py - y) ** 2 <= SPRINKLER_RADIUS ** 2:
                    patch.moisture = 1.0
                    self.score += POINTS_PER_PATCH
                    watered += 1
        else:
            patch = self.patch_at(x, y)
            patch.moisture = 1.0
            self.score += POINTS_PER_PATCH
            self.tasks_done += 1
            watered = 1
            if self.tasks_done % SPRINKLER_UNLOCK == 0:
                self.sprinkler_active = True
                self.sprinkler_ms = SPRINKLER_DURATION_MS
                logger.debug("Sprinkler unlocked after %d tasks", self.tasks_done)

        self.splashes.append(Splash(x, y))
        return watered

    # ── Tick ────────────────────────────────────────────────────────
    def frame(self, frame: FrameContext) -> bool:
        dt = frame.now_ms - self._last_tick
        self._last_tick = frame.now_ms
        self.advance(dt)
        self.draw(frame.canvas)
        # Stop ticking on game over; a click restarts the loop.
        return not self.game_over

    # ── Input ───────────────────────────────────────────────────────
    def on_pointer_down(self, pointer: PointerState) -> None:
        self._hover = (pointer.x, pointer.y)
        if self.game_over:
            self.reset()
            self.ctx.resume()
            return
        self.water(pointer.x, pointer.y)

    def on_pointer_move(self, pointer: PointerState) -> None:
        self._hover = (pointer.x, pointer.y)

    def on_pointer_leave(self, pointer: PointerState) -> None:
        self._hover = None

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> None:
        surface.fill((223, 245, 231))

        for patch in self.patches:
            x = PAD + patch.c * self.cell_w
            y = PAD + patch.r * self.cell_h
            if y < HUD_BAR_HEIGHT:
                continue
            m = clamp(patch.moisture, 0, 1)
            color = (int(140 + 80 * (1 - m)), int(200 + 30 * m), int(100 + 60 * m))
            pygame.draw.rect(surface, color, (x + 2, y + 2, self.cell_w - 4, self.cell_h - 4))
            if m < DRY_THRESHOLD:
                pygame.draw.circle(surface, (255, 255, 255), (x + self.cell_w / 2, y + self.cell_h / 2), 6)

        for splash in self.splashes:
            draw_circle_alpha(surface, (255, 255, 255, int(255 * splash.alpha)), (splash.x, splash.y), splash.size)
            splash.alpha -= 0.04
            splash.size += 0.6
        self.splashes = [s for s in self.splashes if s.alpha > 0]

        if self.sprinkler_active and self._hover is not None:
            draw_circle_alpha(surface, (0, 200, 255, 51), self._hover, SPRINKLER_RADIUS)

        draw_rounded_rect(surface, (0, 0, 0, 46), (10, 10, 220, 40), 8)
        draw_text(surface, f"Score: {self.score} - Tasks: {self.tasks_done}", (26, 36), 14)

        if self.game_over:
            w, h = self.width, self.height
            fill_alpha(surface, (0, 0, 0, 102))
            draw_text(surface, f"Game Over - Score: {self.score}", (w / 2, h / 2 - 10), 26, align="center")
            draw_text(surface, "Click to play again or return to menu", (w / 2, h / 2 + 22), 14, align="center")
