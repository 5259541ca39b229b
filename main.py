"""
Golf Worlds
============
Five golf-career mini-games sharing one window, one render surface and
one frame loop.

Entry point: initialises pygame, wires the render surface, session
controller and menu shell together, and runs the host loop.

Controls:
  Mouse Left    Select a world / interact inside it
  Arrow keys    Aim, move or navigate (per world)
  Space         Charge a shot
  ESC           Back to menu / quit from the menu
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

import pygame

from golf_worlds.core.constants import FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE
from golf_worlds.core.errors import UnknownWorldError
from golf_worlds.core.registry import WorldRegistry, default_registry
from golf_worlds.core.scheduler import Scheduler
from golf_worlds.core.session import SessionController
from golf_worlds.core.surface import RenderSurface, WindowContainer
from golf_worlds.shell.menu import MenuShell

logger = logging.getLogger("golf_worlds")


class Game:
    """Top-level application: owns the window, clock and session."""

    def __init__(self, registry: WorldRegistry, fps: int = FPS) -> None:
        pygame.init()
        pygame.display.set_caption(TITLE)
        self._window = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE)
        self._clock = pygame.time.Clock()
        self._fps = fps
        self._running = True

        self.surface = RenderSurface(WindowContainer())
        self.scheduler = Scheduler(pygame.time.get_ticks)
        self.shell = MenuShell(registry)
        self.session = SessionController(registry, self.surface, self.scheduler, self.shell)
        self.shell.attach(self.session)
        self.session.show_menu()

    def run(self, max_frames: int | None = None) -> None:
        """Main loop.  *max_frames* bounds the run (headless smoke runs)."""
        frames = 0
        while self._running:
            dt = self._clock.tick(self._fps) / 1000.0

            # ── Events ──────────────────────────────────────────────
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                    break
                if event.type == pygame.VIDEORESIZE:
                    self._window = pygame.display.get_surface()
                    self.session.on_resize()
                    continue
                if self.shell.handle_event(event):
                    if event.type == pygame.MOUSEBUTTONDOWN:
                        self.session.input.claim_press()
                    continue
                self.session.input.dispatch(event)

            # ── Update + world frame ────────────────────────────────
            self.shell.update(dt)
            self.scheduler.pump()

            # ── Draw ────────────────────────────────────────────────
            if not self.session.is_idle:
                self.surface.present(self._window)
            self.shell.draw(self._window)
            pygame.display.flip()

            frames += 1
            if max_frames is not None and frames >= max_frames:
                self._running = False

        self.session.shutdown()
        pygame.quit()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Golf Worlds: careers on the green.")
    parser.add_argument("--world", help="start directly in this world id")
    parser.add_argument("--fps", type=int, default=FPS, help=f"frame rate cap (default {FPS})")
    parser.add_argument("--headless", action="store_true", help="use SDL dummy video/audio drivers")
    parser.add_argument("--frames", type=int, default=None, help="quit after this many frames")
    parser.add_argument("--log-level", default="INFO", help="logging level (default INFO)")
    parser.add_argument("--list", action="store_true", help="print the available worlds and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    registry = default_registry()
    if args.list:
        for entry in registry.entries():
            print(f"{entry.world_id:10} {entry.name}: {entry.summary}")
        return 0

    if args.headless:
        os.environ["SDL_VIDEODRIVER"] = "dummy"
        os.environ["SDL_AUDIODRIVER"] = "dummy"

    game = Game(registry, fps=args.fps)
    if args.world:
        try:
            game.session.start_world(args.world)
        except UnknownWorldError as exc:
            logger.error("%s (known: %s)", exc, ", ".join(registry))
            pygame.quit()
            return 2

    logger.info("Golf Worlds loaded, available worlds: %s", ", ".join(registry))
    game.run(max_frames=args.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
