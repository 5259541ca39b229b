"""
Golf Worlds - UI Elements
==========================
Clickable rounded button used by the menu shell and the in-world
overlays.
"""

from __future__ import annotations

import pygame

from golf_worlds.core.constants import (
    COLOR_BTN_BORDER,
    COLOR_BTN_BORDER_HOVER,
    COLOR_BTN_HOVER,
    COLOR_BTN_NORMAL,
    COLOR_BTN_TEXT,
)
from golf_worlds.ui.draw import draw_rounded_rect, get_font


class UIButton:
    """Rectangular button with hover highlight."""

    def __init__(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        label: str,
        font: pygame.font.Font | None = None,
        *,
        fill: tuple[int, int, int] = COLOR_BTN_NORMAL,
        text_color: tuple[int, int, int] = COLOR_BTN_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(int(x), int(y), int(w), int(h))
        self.label = label
        self._font = font
        self._fill = fill
        self._text_color = text_color
        self._radius = radius
        self._hovered = False

    def contains(self, x: float, y: float) -> bool:
        """Inclusive hit test in the button's own coordinate space."""
        return (
            self.rect.left <= x <= self.rect.right
            and self.rect.top <= y <= self.rect.bottom
        )

    def is_hovered(self, pos: tuple[float, float]) -> bool:
        self._hovered = self.contains(*pos)
        return self._hovered

    @property
    def hovered(self) -> bool:
        return self._hovered

    @hovered.setter
    def hovered(self, value: bool) -> None:
        self._hovered = bool(value)

    def is_clicked(self, event: pygame.event.Event) -> bool:
        return (
            event.type == pygame.MOUSEBUTTONDOWN
            and event.button == 1
            and self.contains(*event.pos)
        )

    def draw(self, surface: pygame.Surface) -> None:
        fill = COLOR_BTN_HOVER if self._hovered and self._fill == COLOR_BTN_NORMAL else self._fill
        border = COLOR_BTN_BORDER_HOVER if self._hovered else COLOR_BTN_BORDER
        draw_rounded_rect(surface, border, self.rect, self._radius)
        draw_rounded_rect(surface, fill, self.rect.inflate(-2, -2), max(0, self._radius - 1))

        font = self._font or get_font(16)
        text = font.render(self.label, True, self._text_color)
        surface.blit(text, text.get_rect(center=self.rect.center))
