"""
Golf Worlds - Session Controller
=================================
Owns the one active world and its frame loop.

States are ``Idle`` (menu visible) and ``Active(world)``.  Every
transition goes through :meth:`SessionController.stop_current_world`,
which cancels the pending frame, stops the world, clears the surface
and bumps the generation so stale delayed callbacks are discarded.

* ``start_world(id)`` – stop whatever runs, build a fresh world, size
  the surface, start it and begin ticking.
* ``show_menu()``     – stop, then let the shell draw the selection UI.
* ``on_resize()``     – resize the surface and notify the world.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Protocol

from golf_worlds.core.errors import UnknownWorldError
from golf_worlds.core.input_router import InputRouter
from golf_worlds.core.registry import WorldRegistry
from golf_worlds.core.scheduler import Scheduler
from golf_worlds.core.surface import RenderSurface
from golf_worlds.core.world import FrameContext, World, WorldContext

logger = logging.getLogger(__name__)


# ── Shell Protocol ──────────────────────────────────────────────────
class Shell(Protocol):
    """What the core tells the surrounding menu/HUD."""

    def show_world(self, name: str, summary: str) -> None: ...
    def show_menu(self) -> None: ...
    def report_error(self, message: str) -> None: ...
    def set_status(self, text: str) -> None: ...
    def set_subtitle(self, text: str) -> None: ...


class NullShell:
    """Shell that ignores everything (headless runs)."""

    def show_world(self, name: str, summary: str) -> None:
        pass

    def show_menu(self) -> None:
        pass

    def report_error(self, message: str) -> None:
        pass

    def set_status(self, text: str) -> None:
        pass

    def set_subtitle(self, text: str) -> None:
        pass


# ── Session State ───────────────────────────────────────────────────
@dataclass
class SessionState:
    world: World | None = None
    world_id: str | None = None
    frame_handle: int | None = None
    generation: int = 0
    frame_index: int = 0

    @property
    def is_idle(self) -> bool:
        return self.world is None


# ── Session Controller ──────────────────────────────────────────────
class SessionController:
    """Single-world state machine driving one frame loop."""

    def __init__(
        self,
        registry: WorldRegistry,
        surface: RenderSurface,
        scheduler: Scheduler,
        shell: Shell | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.registry = registry
        self.surface = surface
        self.scheduler = scheduler
        self.shell: Shell = shell or NullShell()
        self.rng = rng or random.Random()
        self.state = SessionState()
        self.input = InputRouter(surface, lambda: self.state.world, lambda: self.state.generation)

    # ── public API ──────────────────────────────────────────────────
    @property
    def current(self) -> World | None:
        return self.state.world

    @property
    def current_id(self) -> str | None:
        return self.state.world_id

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def is_idle(self) -> bool:
        return self.state.is_idle

    def start_world(self, world_id: str) -> World:
        """Switch to a fresh instance of *world_id*.

        Raises :class:`UnknownWorldError` without touching the current
        world when the id is not registered.
        """
        if world_id not in self.registry:
            logger.warning("Refusing to start unknown world %r", world_id)
            error = UnknownWorldError(world_id)
            self.shell.report_error(str(error))
            raise error

        self.shell.set_status("Loading...")
        self.stop_current_world()

        entry = self.registry.entry(world_id)
        world = self.registry.create(world_id)
        self.surface.resize()
        self.surface.clear()

        self.state.world = world
        self.state.world_id = world_id
        self.state.frame_index = 0
        self.shell.show_world(entry.name, entry.summary)
        self.shell.set_status("Playing")
        # The world may overwrite the HUD text with its own instructions.
        try:
            world.start(WorldContext(self, world, self.state.generation))
        except Exception:
            logger.exception("World %r failed to start", world_id)
            self.stop_current_world()
            self.shell.report_error(f"{entry.name} failed to start")
            raise
        logger.info("Started world %r (generation %d)", world_id, self.state.generation)

        self._schedule(world)
        return world

    def stop_current_world(self) -> None:
        """Tear down the active world.  A no-op when already idle."""
        if self.state.frame_handle is not None:
            self.scheduler.cancel_frame(self.state.frame_handle)
            self.state.frame_handle = None

        world = self.state.world
        if world is not None:
            logger.info("Stopping world %r", self.state.world_id)
            world.stop()

        self.state.world = None
        self.state.world_id = None
        self.state.generation += 1
        self.input.keys.release_all()
        self.surface.clear()

    def show_menu(self) -> None:
        self.stop_current_world()
        self.shell.show_menu()

    def shutdown(self) -> None:
        self.stop_current_world()

    def on_resize(self) -> None:
        self.surface.resize()
        if self.state.world is not None:
            self.state.world.on_resize()

    def resume(self, world: World) -> None:
        """Re-arm the loop for *world* if it is active and not ticking."""
        if self.state.world is world and self.state.frame_handle is None:
            self._schedule(world)

    # ── frame loop ──────────────────────────────────────────────────
    def _schedule(self, world: World) -> None:
        self.state.frame_handle = self.scheduler.request_frame(
            lambda now: self._tick(world, now)
        )

    def _tick(self, world: World, now: float) -> None:
        # A transition elsewhere replaced the world: let this loop die.
        if self.state.world is not world:
            return
        self.state.frame_handle = None

        frame = FrameContext(now_ms=now, index=self.state.frame_index, canvas=self.surface.canvas)
        self.state.frame_index += 1
        keep_going = world.frame(frame)

        if keep_going and self.state.world is world and self.state.frame_handle is None:
            self._schedule(world)
