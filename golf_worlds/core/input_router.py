"""
Golf Worlds - Input Router
===========================
Normalises pointer coordinates into surface pixels, tracks held keys,
and forwards every event to whichever world is active.

Events arriving while no world is active are dropped after the
pointer/key bookkeeping is updated.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Callable

import pygame

if TYPE_CHECKING:
    from golf_worlds.core.surface import RenderSurface
    from golf_worlds.core.world import World

logger = logging.getLogger(__name__)


# ── Input state ─────────────────────────────────────────────────────
@dataclass(frozen=True)
class PointerState:
    """Pointer position in surface pixels plus the primary button."""

    x: float = 0.0
    y: float = 0.0
    is_down: bool = False


class KeyState:
    """Held-key map, keyed by ``pygame.key.name`` identifiers."""

    def __init__(self) -> None:
        self._keys: dict[str, bool] = {}

    def __getitem__(self, code: str) -> bool:
        return self._keys.get(code, False)

    def __setitem__(self, code: str, down: bool) -> None:
        self._keys[code] = down

    def is_down(self, code: str) -> bool:
        return self._keys.get(code, False)

    def release_all(self) -> None:
        for code in self._keys:
            self._keys[code] = False


def key_code(event: pygame.event.Event) -> str:
    """Identifier string for a KEYDOWN/KEYUP event."""
    return pygame.key.name(event.key)


# ── Router ──────────────────────────────────────────────────────────
class InputRouter:
    """Routes host input to the active world.

    *active_world* returns the world currently receiving events (or
    ``None``); *generation* returns the session's transition counter so
    a press that switched worlds is not finished by the new one.
    """

    def __init__(
        self,
        surface: "RenderSurface",
        active_world: Callable[[], "World | None"],
        generation: Callable[[], int] = lambda: 0,
    ) -> None:
        self._surface = surface
        self._active_world = active_world
        self._generation = generation
        self.pointer = PointerState()
        self.keys = KeyState()
        self._press_generation: int | None = None

    # ── Pointer ─────────────────────────────────────────────────────
    def on_pointer_move(self, client_x: float, client_y: float) -> None:
        self._track(client_x, client_y, self.pointer.is_down)
        world = self._active_world()
        if world is not None:
            world.on_pointer_move(self.pointer)

    def on_pointer_down(self, client_x: float, client_y: float) -> None:
        self._track(client_x, client_y, True)
        self._press_generation = self._generation()
        world = self._active_world()
        if world is not None:
            world.on_pointer_down(self.pointer)

    def on_pointer_up(self, client_x: float, client_y: float) -> None:
        self._track(client_x, client_y, False)
        stale = (
            self._press_generation is not None
            and self._press_generation != self._generation()
        )
        self._press_generation = None
        if stale:
            logger.debug("Pointer-up swallowed: press began in a previous world")
            return
        world = self._active_world()
        if world is not None:
            world.on_pointer_up(self.pointer)

    def claim_press(self) -> None:
        """A press was consumed by the shell: do not route its release."""
        self._press_generation = -1

    def on_pointer_leave(self, client_x: float, client_y: float) -> None:
        self._track(client_x, client_y, False)
        self._press_generation = None
        world = self._active_world()
        if world is not None:
            world.on_pointer_leave(self.pointer)

    # ── Keyboard ────────────────────────────────────────────────────
    def on_key_down(self, code: str) -> None:
        self.keys[code] = True
        world = self._active_world()
        if world is not None:
            world.on_key_down(code)

    def on_key_up(self, code: str) -> None:
        self.keys[code] = False
        world = self._active_world()
        if world is not None:
            world.on_key_up(code)

    # ── pygame binding ──────────────────────────────────────────────
    def dispatch(self, event: pygame.event.Event) -> bool:
        """Translate a pygame event.  Returns True if it was routed."""
        if event.type == pygame.MOUSEMOTION:
            self.on_pointer_move(*event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.on_pointer_down(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.on_pointer_up(*event.pos)
        elif event.type == pygame.WINDOWLEAVE:
            self.on_pointer_leave(*pygame.mouse.get_pos())
        elif event.type == pygame.KEYDOWN:
            self.on_key_down(key_code(event))
        elif event.type == pygame.KEYUP:
            self.on_key_up(key_code(event))
        else:
            return False
        return True

    def _track(self, client_x: float, client_y: float, is_down: bool) -> None:
        x, y = self._surface.to_surface(client_x, client_y)
        self.pointer = PointerState(x, y, is_down)
