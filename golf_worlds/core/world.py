"""
Golf Worlds - World Contract
=============================
Every mini-game derives from :class:`World`.

Required:
  * ``reset()``  – rebuild all game state from the current surface size.
  * ``frame(f)`` – advance one tick and repaint the whole surface.
    Return ``False`` to stop asking for further ticks.

Optional hooks default to no-ops so the router can call them blindly:
``stop``, ``on_pointer_move/down/up/leave``, ``on_key_down/up`` and
``on_resize``.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
import logging
import random
from typing import TYPE_CHECKING, Callable

import pygame

if TYPE_CHECKING:
    from golf_worlds.core.input_router import KeyState, PointerState
    from golf_worlds.core.session import SessionController

logger = logging.getLogger(__name__)


# ── Frame Context ───────────────────────────────────────────────────
@dataclass(frozen=True)
class FrameContext:
    """What a single tick gets: the clock, a counter and the canvas."""

    now_ms: float
    index: int
    canvas: pygame.Surface


# ── World Context ───────────────────────────────────────────────────
class WorldContext:
    """A world's handle on the session for one start → stop interval.

    Delayed callbacks scheduled through :meth:`call_later` remember the
    session generation at scheduling time and are dropped if a world
    transition happened before they fire.
    """

    def __init__(self, session: "SessionController", world: "World", generation: int) -> None:
        self._session = session
        self._world = world
        self._generation = generation

    # ── Geometry / input ────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self._session.surface.width

    @property
    def height(self) -> int:
        return self._session.surface.height

    @property
    def keys(self) -> "KeyState":
        return self._session.input.keys

    @property
    def pointer(self) -> "PointerState":
        return self._session.input.pointer

    @property
    def rng(self) -> random.Random:
        return self._session.rng

    def now(self) -> float:
        return self._session.scheduler.now()

    # ── Relevance ───────────────────────────────────────────────────
    @property
    def is_current(self) -> bool:
        return (
            self._session.generation == self._generation
            and self._session.current is self._world
        )

    # ── Delayed callbacks ───────────────────────────────────────────
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        def fire() -> None:
            if not self.is_current:
                logger.debug("Dropped stale callback from generation %d", self._generation)
                return
            callback()

        return self._session.scheduler.call_later(delay_ms, fire)

    def cancel(self, handle: int | None) -> None:
        if handle is not None:
            self._session.scheduler.cancel(handle)

    # ── Shell pass-through ──────────────────────────────────────────
    def set_status(self, text: str) -> None:
        if self.is_current:
            self._session.shell.set_status(text)

    def set_subtitle(self, text: str) -> None:
        if self.is_current:
            self._session.shell.set_subtitle(text)

    # ── Session requests ────────────────────────────────────────────
    def request_menu(self) -> None:
        if self.is_current:
            self._session.show_menu()

    def resume(self) -> None:
        """Restart the frame loop after the world ended it itself."""
        if self.is_current:
            self._session.resume(self._world)


# ── World base ──────────────────────────────────────────────────────
class World(abc.ABC):
    """Base class for the five mini-games."""

    world_id: str = ""

    def __init__(self) -> None:
        self.ctx: WorldContext | None = None

    # ── Lifecycle ───────────────────────────────────────────────────
    def start(self, ctx: WorldContext) -> None:
        self.ctx = ctx
        self.reset()

    @abc.abstractmethod
    def reset(self) -> None:
        """Rebuild all game state from the current surface size."""

    @abc.abstractmethod
    def frame(self, frame: FrameContext) -> bool:
        """Advance one tick and repaint; False ends the loop."""

    def stop(self) -> None:
        pass

    # ── Optional input hooks ────────────────────────────────────────
    def on_pointer_move(self, pointer: "PointerState") -> None:
        pass

    def on_pointer_down(self, pointer: "PointerState") -> None:
        pass

    def on_pointer_up(self, pointer: "PointerState") -> None:
        pass

    def on_pointer_leave(self, pointer: "PointerState") -> None:
        pass

    def on_key_down(self, code: str) -> None:
        pass

    def on_key_up(self, code: str) -> None:
        pass

    def on_resize(self) -> None:
        pass

    # ── Helpers ─────────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self.ctx.width if self.ctx else 0

    @property
    def height(self) -> int:
        return self.ctx.height if self.ctx else 0
