"""
Golf Worlds - Drawing Helpers
==============================
Font cache, rounded rectangles, centred text and translucent overlays
shared by the shell and the worlds.
"""

from __future__ import annotations

import pygame

from golf_worlds.core.constants import FONT_UI

_FONT_CACHE: dict[tuple[str, int, bool], pygame.font.Font] = {}

Color = tuple[int, int, int] | tuple[int, int, int, int]


def get_font(size: int, bold: bool = False, name: str = FONT_UI) -> pygame.font.Font:
    """Cached ``SysFont`` lookup (initialises the font module on demand)."""
    key = (name, size, bold)
    font = _FONT_CACHE.get(key)
    if font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.SysFont(name, size, bold=bold)
        _FONT_CACHE[key] = font
    return font


def draw_rounded_rect(
    surface: pygame.Surface,
    color: Color,
    rect: pygame.Rect | tuple[float, float, float, float],
    radius: int,
) -> None:
    """Filled rounded rectangle; alpha colours are blended."""
    rect = pygame.Rect(rect)
    if rect.width <= 0 or rect.height <= 0:
        return
    radius = max(0, min(radius, rect.width // 2, rect.height // 2))
    if len(color) == 4 and color[3] < 255:
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, color, layer.get_rect(), border_radius=radius)
        surface.blit(layer, rect.topleft)
    else:
        pygame.draw.rect(surface, color[:3], rect, border_radius=radius)


def fill_alpha(
    surface: pygame.Surface,
    color: tuple[int, int, int, int],
    rect: pygame.Rect | tuple[float, float, float, float] | None = None,
) -> None:
    """Blend a translucent rectangle (the whole surface by default)."""
    rect = pygame.Rect(rect) if rect is not None else surface.get_rect()
    layer = pygame.Surface(rect.size, pygame.SRCALPHA)
    layer.fill(color)
    surface.blit(layer, rect.topleft)


def draw_circle_alpha(
    surface: pygame.Surface,
    color: tuple[int, int, int, int],
    center: tuple[float, float],
    radius: float,
) -> None:
    r = max(1, int(radius))
    layer = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
    pygame.draw.circle(layer, color, (r, r), r)
    surface.blit(layer, (int(center[0]) - r, int(center[1]) - r))


def draw_text(
    surface: pygame.Surface,
    text: str,
    pos: tuple[float, float],
    size: int = 14,
    color: Color = (255, 255, 255),
    *,
    bold: bool = False,
    align: str = "left",
    alpha: int = 255,
) -> pygame.Rect:
    """Render *text* with its baseline row at ``pos[1]``.

    *align* is ``"left"`` or ``"center"`` relative to ``pos[0]``.
    """
    rendered = get_font(size, bold).render(text, True, color[:3])
    if alpha < 255:
        rendered.set_alpha(max(0, alpha))
    x, y = pos
    if align == "center":
        x -= rendered.get_width() / 2
    rect = rendered.get_rect(topleft=(int(x), int(y - rendered.get_height() * 0.75)))
    surface.blit(rendered, rect)
    return rect
