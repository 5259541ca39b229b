"""
Golf Worlds - Pro Golfer World
===============================
A par-3 side-view hole.  Aim with the pointer or UP/DOWN, hold SPACE
(or press near the ball) to charge power, release to swing.

Physics is integrated per tick: constant gravity, air friction, a
small wind drift, a bounce-or-settle rule on landing and rolling
friction on the ground.  The ball drops only when it reaches the cup
slowly enough; a fast ball is kicked away by the lip instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import pygame

from golf_worlds.core.constants import (
    COLOR_BLACK,
    COLOR_OVERLAY,
    COLOR_WHITE,
    KEY_DOWN,
    KEY_RETURN,
    KEY_SPACE,
    KEY_UP,
)
from golf_worlds.core.input_router import PointerState
from golf_worlds.core.utils import clamp, distance
from golf_worlds.core.world import FrameContext, World
from golf_worlds.ui.draw import draw_rounded_rect, draw_text, fill_alpha
from golf_worlds.ui.elements import UIButton

logger = logging.getLogger(__name__)

# ── Tuning ──────────────────────────────────────────────────────────
PAR = 3
BALL_RADIUS = 8
GRAVITY = 0.45  # px / tick²
AIR_FRICTION = 0.995
WIND_RANGE = 0.8
WIND_FACTOR = 0.01
BOUNCE_MIN_SPEED = 1.5
BOUNCE_RESTITUTION = 0.2
BOUNCE_ROLL = 0.8
SETTLE_ROLL = 0.9
ROLL_FRICTION = 0.96  # per tick while grounded
ROLL_STOP_SPEED = 0.05
CHARGE_RATE = 1.6  # power / tick
CHARGE_GRAB_RADIUS = 40
MIN_SHOT_POWER = 2
SHOT_POWER_DIVISOR = 3.5
AIM_MIN = 0.12
AIM_MAX = math.pi * 0.75
AIM_STEP = 0.04
CUP_MARGIN = 10
CAPTURE_MAX_SPEED = 1.6
LIP_KICK = 0.8
OUT_OF_BOUNDS_X = 50
OUT_OF_BOUNDS_Y = 200

_SKY_TOP = (191, 239, 255)
_SKY_BOTTOM = (142, 208, 155)
_HILL_FAR = (109, 187, 123)
_HILL_NEAR = (74, 155, 102)
_GROUND = (30, 123, 74)
_TEE = (12, 92, 56)
_FLAG = (244, 67, 54)
_POWER = (0, 200, 83)


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    on_ground: bool = True

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def at_rest(self) -> bool:
        return self.on_ground and self.vx == 0.0


class ProGolferWorld(World):
    """Swing timing, ball flight and putting on a single hole."""

    def __init__(self) -> None:
        super().__init__()
        self.ball = Ball(0.0, 0.0)
        self.strokes = 0
        self.power = 0.0
        self.angle = math.pi / 4
        self.charging = False
        self.wind = 0.0
        self.overlay_text: str | None = None
        self.holed = False

        self.ground_h = 0
        self.tee_x = 0
        self.hole_x = 0
        self.hole_y = 0
        self._background: pygame.Surface | None = None
        self._btn_again: UIButton | None = None
        self._btn_menu: UIButton | None = None

    # ── Lifecycle ───────────────────────────────────────────────────
    def reset(self) -> None:
        self.wind = self.ctx.rng.uniform(-WIND_RANGE, WIND_RANGE)
        self._layout()
        self.reset_ball()
        self.ctx.set_subtitle(
            "Hold Space or press near the ball to charge power. Use Up/Down to adjust aim."
        )

    def reset_ball(self) -> None:
        self.ball = Ball(self.tee_x, self.ground_y)
        self.strokes = 0
        self.charging = False
        self.power = 0.0
        self.overlay_text = None
        self.holed = False
        self.ctx.set_status(f"Par {PAR} - Strokes {self.strokes}/{PAR}")

    def on_resize(self) -> None:
        was_resting = self.ball.on_ground
        self._layout()
        if was_resting:
            self.ball.y = self.ground_y

    def _layout(self) -> None:
        w, h = self.width, self.height
        self.ground_h = int(h * 0.20)
        self.tee_x = int(w * 0.12)
        self.hole_x = int(w * 0.82)
        self.hole_y = h - self.ground_h - 6
        self._background = None

        self._btn_again = UIButton(w / 2 - 170, h / 2 + 8, 160, 40, "Play Again")
        self._btn_menu = UIButton(w / 2 + 10, h / 2 + 8, 160, 40, "Menu")

    @property
    def ground_y(self) -> float:
        return self.height - self.ground_h - BALL_RADIUS

    # ── Tick ────────────────────────────────────────────────────────
    def frame(self, frame: FrameContext) -> bool:
        if self.overlay_text is None:
            if self.charging and self.ball.at_rest:
                self.power = min(100.0, self.power + CHARGE_RATE)
            self.physics_step()
            if self.overlay_text is None:
                self.check_capture()
        self.draw(frame.canvas)
        return True

    def physics_step(self) -> None:
        ball = self.ball
        if ball.on_ground:
            self._roll()
            return
        ball.vy += GRAVITY
        ball.vx *= AIR_FRICTION
        ball.vx += self.wind * WIND_FACTOR
        ball.x += ball.vx
        ball.y += ball.vy

        if ball.y >= self.ground_y:
            ball.y = self.ground_y
            ball.on_ground = True
            if abs(ball.vy) > BOUNCE_MIN_SPEED:
                ball.vy *= -BOUNCE_RESTITUTION
                ball.vx *= BOUNCE_ROLL
                ball.on_ground = False
            else:
                ball.vy = 0.0
                ball.vx *= SETTLE_ROLL

        if (
            ball.x < -OUT_OF_BOUNDS_X
            or ball.x > self.width + OUT_OF_BOUNDS_X
            or ball.y > self.height + OUT_OF_BOUNDS_Y
        ):
            logger.debug("Ball out of bounds at (%.1f, %.1f)", ball.x, ball.y)
            self.overlay_text = "Ball out of bounds - Reset to tee"

    def check_capture(self) -> bool:
        """Drop the ball if it is at the cup and slow enough.

        Returns True on a hole.  A ball inside the cup radius that is
        still too fast is pushed away from the cup instead.
        """
        ball = self.ball
        dx = ball.x - self.hole_x
        dy = ball.y - self.hole_y
        dist = math.hypot(dx, dy)
        if dist >= BALL_RADIUS + CUP_MARGIN:
            return False

        if ball.speed <= CAPTURE_MAX_SPEED:
            self.holed = True
            plural = "" if self.strokes == 1 else "s"
            self.overlay_text = f"Hole in {self.strokes} stroke{plural}!"
            self.ctx.set_status("Hole!")
            logger.info("Holed out in %d strokes", self.strokes)
            return True

        ball.vx += (dx / (dist or 1)) * LIP_KICK
        ball.vy -= LIP_KICK
        ball.on_ground = False
        return False

    def _roll(self) -> None:
        ball = self.ball
        if ball.vx == 0.0:
            return
        ball.x += ball.vx
        ball.vx *= ROLL_FRICTION
        if abs(ball.vx) < ROLL_STOP_SPEED:
            ball.vx = 0.0
        if ball.x < -OUT_OF_BOUNDS_X or ball.x > self.width + OUT_OF_BOUNDS_X:
            self.overlay_text = "Ball out of bounds - Reset to tee"

    def swing(self) -> None:
        if not (self.charging and self.ball.at_rest):
            return
        self.charging = False
        speed = clamp(self.power, MIN_SHOT_POWER, 100) / SHOT_POWER_DIVISOR
        self.ball.vx = math.cos(self.angle) * speed
        self.ball.vy = -math.sin(self.angle) * speed
        self.ball.on_ground = False
        self.strokes += 1
        self.ctx.set_status(f"Strokes {self.strokes}/{PAR}")
        if self.strokes > PAR:
            self.overlay_text = "Par exceeded. Resetting..."

    # ── Input ───────────────────────────────────────────────────────
    def on_key_down(self, code: str) -> None:
        if self.overlay_text is not None:
            if code in (KEY_RETURN, "r"):
                self.reset_ball()
            return
        if code == KEY_SPACE and self.ball.at_rest and not self.charging:
            self.charging = True
            self.power = 0.0
        elif code == KEY_UP:
            self.angle = clamp(self.angle + AIM_STEP, AIM_MIN, AIM_MAX)
        elif code == KEY_DOWN:
            self.angle = clamp(self.angle - AIM_STEP, AIM_MIN, AIM_MAX)

    def on_key_up(self, code: str) -> None:
        if code == KEY_SPACE:
            self.swing()

    def on_pointer_move(self, pointer: PointerState) -> None:
        if self.overlay_text is None and self.ball.at_rest and not self.charging:
            dx = pointer.x - self.ball.x
            dy = self.ball.y - pointer.y
            self.angle = clamp(math.atan2(dy, dx), AIM_MIN, AIM_MAX)

    def on_pointer_down(self, pointer: PointerState) -> None:
        if self.overlay_text is not None:
            if self._btn_again and self._btn_again.contains(pointer.x, pointer.y):
                self.reset_ball()
            elif self._btn_menu and self._btn_menu.contains(pointer.x, pointer.y):
                self.ctx.request_menu()
            return
        near = distance(pointer.x, pointer.y, self.ball.x, self.ball.y) < CHARGE_GRAB_RADIUS
        if near and self.ball.at_rest:
            self.charging = True
            self.power = 0.0

    def on_pointer_up(self, pointer: PointerState) -> None:
        self.swing()

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> None:
        w, h = self.width, self.height
        surface.blit(self._get_background(), (0, 0))

        # Cup and flag
        pygame.draw.circle(surface, COLOR_BLACK, (self.hole_x, self.hole_y), 10)
        pygame.draw.rect(surface, (51, 51, 51), (self.hole_x - 2, self.hole_y - 60, 4, 60))
        pygame.draw.polygon(
            surface,
            _FLAG,
            [
                (self.hole_x + 2, self.hole_y - 60),
                (self.hole_x + 28, self.hole_y - 48),
                (self.hole_x + 2, self.hole_y - 36),
            ],
        )

        # Ball
        center = (int(self.ball.x), int(self.ball.y))
        pygame.draw.circle(surface, COLOR_WHITE, center, BALL_RADIUS)
        pygame.draw.circle(surface, (221, 221, 221), center, BALL_RADIUS, 1)

        # Swing UI
        if self.ball.at_rest and self.overlay_text is None:
            length = 60 + self.power * 0.6
            tip = (
                self.ball.x + math.cos(self.angle) * length,
                self.ball.y - math.sin(self.angle) * length,
            )
            pygame.draw.line(surface, (235, 250, 240), (self.ball.x, self.ball.y - 2), tip, 2)

            bar_w = 220
            bar_x = w / 2 - bar_w / 2
            bar_y = h - 44
            draw_rounded_rect(surface, (255, 255, 255, 36), (bar_x, bar_y, bar_w, 12), 6)
            fill_w = clamp(self.power / 100, 0, 1) * (bar_w - 2)
            draw_rounded_rect(surface, _POWER, (bar_x + 1, bar_y + 1, fill_w, 10), 6)
            draw_text(surface, f"Power: {round(self.power)}%", (bar_x + bar_w + 10, bar_y + 10), 12)

        draw_text(surface, f"Par {PAR} - Strokes {self.strokes}/{PAR}", (18, 26), 14)
        draw_text(surface, f"Wind: {self.wind:.2f}", (18, 46), 14)

        if self.overlay_text is not None:
            fill_alpha(surface, COLOR_OVERLAY)
            draw_text(surface, self.overlay_text, (w / 2, h / 2 - 20), 28, bold=True, align="center")
            self._btn_again.draw(surface)
            self._btn_menu.draw(surface)

    def _get_background(self) -> pygame.Surface:
        if self._background is not None:
            return self._background
        w, h = self.width, self.height
        bg = pygame.Surface((w, h))
        grad_h = max(1, int(h * 0.6))
        for y in range(h):
            t = min(1.0, y / grad_h)
            color = tuple(int(a + (b - a) * t) for a, b in zip(_SKY_TOP, _SKY_BOTTOM))
            pygame.draw.line(bg, color, (0, y), (w, y))
        pygame.draw.ellipse(bg, _HILL_FAR, _ellipse_rect(w * 0.3, h * 0.55, w * 0.4, h * 0.18))
        pygame.draw.ellipse(bg, _HILL_NEAR, _ellipse_rect(w * 0.85, h * 0.6, w * 0.3, h * 0.14))
        pygame.draw.rect(bg, _GROUND, (0, h - self.ground_h, w, self.ground_h))
        pygame.draw.rect(bg, _TEE, (self.tee_x - 20, h - self.ground_h - 6, 44, 10))
        self._background = bg
        return bg


def _ellipse_rect(cx: float, cy: float, rx: float, ry: float) -> pygame.Rect:
    return pygame.Rect(int(cx - rx), int(cy - ry), int(rx * 2), int(ry * 2))
