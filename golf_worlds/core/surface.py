"""
Golf Worlds - Render Surface
=============================
The single drawing area every world paints into.

The backing ``pygame.Surface`` is sized from the container's layout box
(never below 800×480) and scaled onto the window when the two differ,
the same way a canvas element is stretched by CSS.  Pointer
coordinates arriving in container space are mapped back to backing
pixels with :meth:`RenderSurface.to_surface`.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

import pygame

from golf_worlds.core.constants import COLOR_BG, MIN_SURFACE_HEIGHT, MIN_SURFACE_WIDTH

logger = logging.getLogger(__name__)


# ── Container Protocol ──────────────────────────────────────────────
class Container(Protocol):
    """Anything with a layout box: ``(left, top, width, height)``."""

    def layout_rect(self) -> tuple[float, float, float, float]: ...


class WindowContainer:
    """The pygame display window used as the surface's container."""

    def layout_rect(self) -> tuple[float, float, float, float]:
        window = pygame.display.get_surface()
        if window is None:
            return (0.0, 0.0, float(MIN_SURFACE_WIDTH), float(MIN_SURFACE_HEIGHT))
        width, height = window.get_size()
        return (0.0, 0.0, float(width), float(height))


# ── Render Surface ──────────────────────────────────────────────────
class RenderSurface:
    """Owns the backing surface and its pixel dimensions."""

    def __init__(
        self,
        container: Container,
        min_width: int = MIN_SURFACE_WIDTH,
        min_height: int = MIN_SURFACE_HEIGHT,
    ) -> None:
        self._container = container
        self._min_width = min_width
        self._min_height = min_height
        self.width: int = min_width
        self.height: int = min_height
        self.canvas: pygame.Surface = pygame.Surface((self.width, self.height))
        self.resize()

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def resize(self) -> None:
        """Re-read the container box and resize the backing store.

        The new surface starts blank; repainting is the caller's job.
        """
        _, _, layout_w, layout_h = self._container.layout_rect()
        width = max(self._min_width, _floor(layout_w))
        height = max(self._min_height, _floor(layout_h))
        if (width, height) != (self.width, self.height):
            logger.debug("Surface resized %dx%d -> %dx%d", self.width, self.height, width, height)
            self.width, self.height = width, height
            self.canvas = pygame.Surface((width, height))

    def clear(self, color: tuple[int, int, int] = COLOR_BG) -> None:
        self.canvas.fill(color)

    def to_surface(self, client_x: float, client_y: float) -> tuple[float, float]:
        """Map container-space client coordinates onto backing pixels."""
        left, top, layout_w, layout_h = self._container.layout_rect()
        scale_x = self.width / layout_w if layout_w > 0 else 1.0
        scale_y = self.height / layout_h if layout_h > 0 else 1.0
        return ((client_x - left) * scale_x, (client_y - top) * scale_y)

    def present(self, target: pygame.Surface) -> None:
        """Blit the backing store onto *target*, scaling if needed."""
        if target.get_size() == self.canvas.get_size():
            target.blit(self.canvas, (0, 0))
        else:
            target.blit(pygame.transform.smoothscale(self.canvas, target.get_size()), (0, 0))


def _floor(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value))
