"""
Golf Worlds - Caddy World
==========================
Multi-round carrying challenge.  Walk the caddy with the arrow keys,
pick up every bag, avoid the traps and bring the bags to the golfer
before stamina runs out.  Each delivered round ends with a club-choice
question: a right answer starts a longer, harder round, a wrong one
ends the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
import logging
import math

import pygame

from golf_worlds.core.constants import COLOR_SAFE, COLOR_DANGER, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP
from golf_worlds.core.input_router import PointerState
from golf_worlds.core.utils import clamp
from golf_worlds.core.world import FrameContext, World
from golf_worlds.ui.draw import draw_rounded_rect, draw_text, fill_alpha

logger = logging.getLogger(__name__)

# ── Tuning ──────────────────────────────────────────────────────────
MAX_FRAME_MS = 100  # cap on one tick's elapsed time
CADDY_SPEED = 2.2
CADDY_START_X = 60
MAX_STAMINA = 100.0
STAMINA_REGEN = 0.05  # per ms while standing still
STAMINA_DRAIN = 0.02  # per ms per carried bag
DRAIN_GROWTH = 0.2  # extra drain per round after the first
PICKUP_RADIUS = 20
GOLFER_RADIUS = 30
TRAP_CLEARANCE = 10
MAX_TRAPS = 10
BAG_PLACEMENT_TRIES = 100
POINTS_PER_BAG = 10
POINTS_PER_ROUND = 100
CORRECT_DELAY_MS = 1000
WRONG_DELAY_MS = 800
BANNER_HOLD_MS = 1000
BANNER_FADE_STEP = 0.02

OPTION_W = 180
OPTION_H = 35
OPTION_SPACING = 45


@dataclass(frozen=True)
class Question:
    prompt: str
    options: tuple[str, ...]
    answer: int


QUESTIONS: tuple[Question, ...] = (
    Question("Ball is in a bunker near the green. What club do you use?",
             ("Driver", "Sand Wedge", "Putter"), 1),
    Question("You're 150 yards from the hole on the fairway. What do you use?",
             ("7 Iron", "Putter", "Wedge"), 0),
    Question("You're on the green, 20 feet from the hole. What club?",
             ("Putter", "9 Iron", "Driver"), 0),
    Question("Ball stuck in rough grass, close to green. What should you use?",
             ("Pitching Wedge", "Driver", "Putter"), 0),
    Question("You're teeing off on a long par 5. What club do you start with?",
             ("Driver", "9 Iron", "Putter"), 0),
)


class Phase(enum.Enum):
    WALKING = "walking"
    QUESTION = "question"
    ANSWERED = "answered"
    GAME_OVER = "game_over"


@dataclass
class Stamina:
    """The caddy's energy pool."""

    value: float = MAX_STAMINA
    maximum: float = MAX_STAMINA

    def drain(self, amount: float) -> None:
        self.value = max(0.0, self.value - amount)

    def regen(self, amount: float) -> None:
        self.value = min(self.maximum, self.value + amount)

    @property
    def ratio(self) -> float:
        return self.value / self.maximum if self.maximum else 0.0

    @property
    def exhausted(self) -> bool:
        return self.value <= 0


@dataclass
class Caddy:
    x: float = CADDY_START_X
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    stamina: Stamina = field(default_factory=Stamina)

    @property
    def idle(self) -> bool:
        return self.vx == 0 and self.vy == 0


@dataclass
class Bag:
    x: float
    y: float
    carried: bool = False
    delivered: bool = False


@dataclass
class Trap:
    x: float
    y: float
    r: float


@dataclass
class Golfer:
    x: float
    y: float
    reached: bool = False


class CaddyWorld(World):
    """Carry-and-deliver rounds with stamina and trap hazards."""

    def __init__(self) -> None:
        super().__init__()
        self.caddy = Caddy()
        self.bags: list[Bag] = []
        self.traps: list[Trap] = []
        self.golfer = Golfer(0.0, 0.0)
        self.round = 1
        self.score = 0
        self.phase = Phase.WALKING
        self.question: Question | None = None
        self.selected: int | None = None
        self.game_over_text = ""

        self.banner = ""
        self.banner_alpha = 0.0
        self._banner_fading_in = False
        self._banner_fading_out = False
        self._last_tick = 0.0

    # ── Lifecycle ───────────────────────────────────────────────────
    def reset(self) -> None:
        self.round = 1
        self.score = 0
        self._last_tick = self.ctx.now()
        self.start_round()

    def start_round(self) -> None:
        w, h = self.width, self.height
        rng = self.ctx.rng
        trap_count = min(3 + self.round, MAX_TRAPS)
        bag_count = 2 + self.round // 2
        course_length = min(w * (0.4 + self.round * 0.1), w - 40)

        self.caddy = Caddy(x=CADDY_START_X, y=h - 140)
        self.traps = [
            Trap(
                x=150 + rng.random() * (course_length - 200),
                y=h - 160 + rng.random() * 20,
                r=12 + rng.random() * 4,
            )
            for _ in range(trap_count)
        ]
        self.bags = [self._place_bag(course_length) for _ in range(bag_count)]
        self.golfer = Golfer(course_length, h - 150)

        self.phase = Phase.WALKING
        self.question = None
        self.selected = None
        self.ctx.set_subtitle(
            f"Round {self.round}: Carry all bags to the golfer without hitting traps."
        )
        self.ctx.set_status(f"Round {self.round}")
        logger.debug("Caddy round %d: %d traps, %d bags", self.round, trap_count, bag_count)

    def _place_bag(self, course_length: float) -> Bag:
        rng = self.ctx.rng
        y = self.height - 140
        x = 120 + rng.random() * (course_length - 150)
        for _ in range(BAG_PLACEMENT_TRIES):
            if not any(math.hypot(x - t.x, y - t.y) < t.r + 20 for t in self.traps):
                break
            x = 120 + rng.random() * (course_length - 150)
        return Bag(x, y)

    # ── Simulation ──────────────────────────────────────────────────
    def update(self, dt: float) -> None:
        if self.phase is not Phase.WALKING:
            return
        caddy = self.caddy
        caddy.x = clamp(caddy.x + caddy.vx, 16, self.width - 16)
        caddy.y = clamp(caddy.y + caddy.vy, 50, self.height - 50)

        if caddy.idle:
            caddy.stamina.regen(STAMINA_REGEN * dt)

        drain = STAMINA_DRAIN * dt * (1 + (self.round - 1) * DRAIN_GROWTH)
        for bag in self.bags:
            if bag.delivered:
                continue
            if not bag.carried and math.hypot(caddy.x - bag.x, caddy.y - bag.y) < PICKUP_RADIUS:
                bag.carried = True
                self.ctx.set_status("Picked up bag!")
            if bag.carried:
                bag.x = caddy.x + 10
                bag.y = caddy.y
                caddy.stamina.drain(drain)

        if caddy.stamina.exhausted:
            self.end_run("You collapsed from exhaustion!")
            return

        for trap in self.traps:
            if math.hypot(caddy.x - trap.x, caddy.y - trap.y) < trap.r + TRAP_CLEARANCE:
                self.end_run("You got caught in a trap! Game Over.")
                return

        if math.hypot(caddy.x - self.golfer.x, caddy.y - self.golfer.y) < GOLFER_RADIUS:
            self._deliver()

    def _deliver(self) -> None:
        for bag in self.bags:
            if bag.carried:
                bag.carried = False
                bag.delivered = True
                self.score += POINTS_PER_BAG
        remaining = sum(1 for bag in self.bags if not bag.delivered)
        if remaining:
            self.ctx.set_status(f"{remaining} bag(s) still on the course")
            return
        if not self.golfer.reached:
            self.golfer.reached = True
            self.ask_question()

    def ask_question(self) -> None:
        self.phase = Phase.QUESTION
        self.selected = None
        self.question = self.ctx.rng.choice(QUESTIONS)
        self.caddy.vx = self.caddy.vy = 0.0

    def answer(self, index: int) -> None:
        if self.phase is not Phase.QUESTION or self.question is None:
            return
        self.selected = index
        self.phase = Phase.ANSWERED
        answered_round = self.round

        if index == self.question.answer:
            self.score += POINTS_PER_ROUND

            def advance() -> None:
                if self.round == answered_round and self.phase is Phase.ANSWERED:
                    self.next_round()

            self.ctx.call_later(CORRECT_DELAY_MS, advance)
        else:
            def fail() -> None:
                if self.round == answered_round and self.phase is Phase.ANSWERED:
                    self.end_run("Incorrect! Game Over.")

            self.ctx.call_later(WRONG_DELAY_MS, fail)

    def next_round(self) -> None:
        self.round += 1
        logger.info("Caddy advanced to round %d", self.round)
        self.start_round()
        self.show_banner(f"Round {self.round}")

    def end_run(self, message: str) -> None:
        logger.info("Caddy run ended in round %d: %s", self.round, message)
        self.phase = Phase.GAME_OVER
        self.game_over_text = message
        self.question = None
        self.selected = None
        self.ctx.set_status("Game over")

    # ── Round banner ────────────────────────────────────────────────
    def show_banner(self, text: str) -> None:
        self.banner = text
        self.banner_alpha = 0.0
        self._banner_fading_in = True
        self._banner_fading_out = False

    def _step_banner(self) -> None:
        if self._banner_fading_in:
            self.banner_alpha = min(1.0, self.banner_alpha + BANNER_FADE_STEP)
            if self.banner_alpha >= 1.0:
                self._banner_fading_in = False
                shown = self.banner

                def fade_out() -> None:
                    if self.banner == shown:
                        self._banner_fading_out = True

                self.ctx.call_later(BANNER_HOLD_MS, fade_out)
        elif self._banner_fading_out:
            self.banner_alpha = max(0.0, self.banner_alpha - BANNER_FADE_STEP)
            if self.banner_alpha <= 0:
                self._banner_fading_out = False

    # ── Tick ────────────────────────────────────────────────────────
    def frame(self, frame: FrameContext) -> bool:
        dt = clamp(frame.now_ms - self._last_tick, 0, MAX_FRAME_MS)
        self._last_tick = frame.now_ms
        self.update(dt)
        self._step_banner()
        self.draw(frame.canvas)
        return True

    # ── Input ───────────────────────────────────────────────────────
    def on_key_down(self, code: str) -> None:
        if self.phase is Phase.QUESTION:
            if code in ("1", "2", "3"):
                self.answer(int(code) - 1)
            return
        if self.phase is not Phase.WALKING:
            return
        if code == KEY_RIGHT:
            self.caddy.vx = CADDY_SPEED
        elif code == KEY_LEFT:
            self.caddy.vx = -CADDY_SPEED
        elif code == KEY_UP:
            self.caddy.vy = -CADDY_SPEED
        elif code == KEY_DOWN:
            self.caddy.vy = CADDY_SPEED

    def on_key_up(self, code: str) -> None:
        if code in (KEY_RIGHT, KEY_LEFT):
            self.caddy.vx = 0.0
        elif code in (KEY_UP, KEY_DOWN):
            self.caddy.vy = 0.0

    def on_pointer_down(self, pointer: PointerState) -> None:
        if self.phase is Phase.GAME_OVER:
            self.reset()
            return
        if self.phase is Phase.QUESTION and self.question is not None:
            index = self.option_at(pointer.x, pointer.y)
            if index is not None:
                self.answer(index)

    def option_rect(self, index: int) -> pygame.Rect:
        return pygame.Rect(
            int(self.width / 2 - OPTION_W / 2),
            int(self.height / 2 + index * OPTION_SPACING),
            OPTION_W,
            OPTION_H,
        )

    def option_at(self, x: float, y: float) -> int | None:
        for i in range(len(self.question.options)):
            rect = self.option_rect(i)
            if rect.left < x < rect.right and rect.top < y < rect.bottom:
                return i
        return None

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> None:
        w, h = self.width, self.height
        surface.fill((207, 238, 230))
        pygame.draw.rect(surface, (58, 126, 82), (0, h - 150, w, 150))

        for trap in self.traps:
            pygame.draw.circle(surface, (170, 51, 51), (trap.x, trap.y), trap.r)
        for bag in self.bags:
            if not bag.delivered:
                pygame.draw.rect(surface, (181, 101, 29), (bag.x - 8, bag.y - 8, 16, 16))
        pygame.draw.circle(surface, (255, 213, 79), (self.golfer.x, self.golfer.y), 20)
        pygame.draw.circle(surface, (255, 255, 255), (self.caddy.x, self.caddy.y), 10)

        # Stamina bar (top-right)
        draw_rounded_rect(surface, (0, 0, 0, 136), (w - 160, 20, 140, 12), 6)
        draw_rounded_rect(surface, (255, 112, 67), (w - 159, 21, self.caddy.stamina.ratio * 138, 10), 6)
        draw_text(surface, f"Round {self.round} - Score {self.score}", (w - 160, 52), 14, (20, 20, 20))

        if self.banner_alpha > 0:
            draw_text(surface, self.banner, (w / 2, h / 2), 28, align="center", alpha=int(255 * self.banner_alpha))

        if self.phase in (Phase.QUESTION, Phase.ANSWERED) and self.question is not None:
            self._draw_question(surface)
        elif self.phase is Phase.GAME_OVER:
            fill_alpha(surface, (0, 0, 0, 178))
            draw_text(surface, self.game_over_text, (w / 2, h / 2), 30, align="center")
            draw_text(surface, "Click to Restart", (w / 2, h / 2 + 40), 18, align="center")

    def _draw_question(self, surface: pygame.Surface) -> None:
        w, h = self.width, self.height
        q = self.question
        fill_alpha(surface, (0, 0, 0, 178))
        draw_text(surface, "Golf Situation!", (w / 2, h / 2 - 80), 22, align="center")
        draw_text(surface, q.prompt, (w / 2, h / 2 - 40), 22, align="center")

        for i, option in enumerate(q.options):
            fill = (255, 255, 255)
            if self.phase is Phase.ANSWERED:
                if i == q.answer:
                    fill = COLOR_SAFE
                elif i == self.selected:
                    fill = COLOR_DANGER
            rect = self.option_rect(i)
            draw_rounded_rect(surface, fill, rect, 10)
            draw_text(surface, f"{i + 1}. {option}", (rect.centerx, rect.y + 24), 18, (0, 0, 0), align="center")

        if self.phase is Phase.ANSWERED:
            verdict = "Correct!" if self.selected == q.answer else "Incorrect! Game Over."
            draw_text(surface, verdict, (w / 2, h / 2 + 160), 18, align="center")
