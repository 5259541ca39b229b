"""
Golf Worlds - Menu Shell
=========================
The window chrome around the core: a world-selection menu while the
session is idle, plus a HUD (world name, instructions, status pill)
and a "Back to Menu" button while a world runs.

Everything here is drawn in window coordinates on top of the
presented render surface, so it never touches a world's pixels.

Navigation works via both mouse clicks and keyboard (UP/DOWN + ENTER,
ESC to leave a world or quit from the menu).
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import pygame

from golf_worlds.core.constants import (
    BACK_BTN_HEIGHT,
    BACK_BTN_WIDTH,
    COLOR_ACCENT,
    COLOR_BG,
    COLOR_BG_LOW,
    COLOR_DANGER,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    FONT_TITLE,
    HUD_MARGIN,
    MENU_TILE_HEIGHT,
    MENU_TILE_SPACING,
    MENU_TILE_WIDTH,
    SUBTITLE,
    TITLE,
)
from golf_worlds.core.errors import UnknownWorldError
from golf_worlds.core.registry import WorldEntry, WorldRegistry
from golf_worlds.ui.draw import draw_rounded_rect, draw_text, get_font
from golf_worlds.ui.elements import UIButton

if TYPE_CHECKING:
    from golf_worlds.core.session import SessionController

logger = logging.getLogger(__name__)


class MenuTile(UIButton):
    """A world tile: coloured badge with initials, name and summary."""

    def __init__(self, entry: WorldEntry, x: float, y: float, w: float, h: float) -> None:
        super().__init__(x, y, w, h, entry.name, radius=10)
        self.entry = entry

    def draw(self, surface: pygame.Surface) -> None:
        rect = self.rect.move(0, -4) if self.hovered else self.rect
        border = COLOR_ACCENT if self.hovered else (222, 230, 228)
        draw_rounded_rect(surface, border, rect, 10)
        draw_rounded_rect(surface, (255, 255, 255), rect.inflate(-2, -2), 9)

        badge = pygame.Rect(rect.x + 10, rect.y + 14, 64, 48)
        draw_rounded_rect(surface, self.entry.color, badge, 6)
        initials = get_font(18, bold=True).render(self.entry.initials, True, (51, 51, 51))
        surface.blit(initials, initials.get_rect(center=badge.center))

        draw_text(surface, self.entry.name, (rect.x + 88, rect.y + 28), 16, COLOR_TEXT, bold=True)
        draw_text(surface, _ellipsize(self.entry.summary, 62), (rect.x + 88, rect.y + 52), 12, COLOR_TEXT_DIM)


class MenuShell:
    """Menu + HUD collaborator for a :class:`SessionController`."""

    def __init__(self, registry: WorldRegistry) -> None:
        self._registry = registry
        self._session: SessionController | None = None

        self.menu_visible = True
        self.hud_title = "Select a world"
        self.hud_subtitle = "Click a tile to begin."
        self.status = "Idle"
        self.error: str | None = None

        self._tiles: list[MenuTile] = []
        self._btn_back: UIButton | None = None
        self._selected_index = 0
        self._window_size: tuple[int, int] = (0, 0)
        self._time = 0.0

    def attach(self, session: "SessionController") -> None:
        self._session = session

    # ── Shell protocol ──────────────────────────────────────────────
    def show_world(self, name: str, summary: str) -> None:
        self.menu_visible = False
        self.error = None
        self.hud_title = name
        self.hud_subtitle = summary

    def show_menu(self) -> None:
        self.menu_visible = True
        self.hud_title = "Select a world"
        self.hud_subtitle = "Click a tile to begin."
        self.status = "Idle"

    def report_error(self, message: str) -> None:
        self.error = message
        self.status = "Error"

    def set_status(self, text: str) -> None:
        self.status = text

    def set_subtitle(self, text: str) -> None:
        self.hud_subtitle = text

    # ── Layout ──────────────────────────────────────────────────────
    def layout(self, window_size: tuple[int, int]) -> None:
        if window_size == self._window_size and self._tiles:
            return
        self._window_size = window_size
        width, height = window_size
        entries = self._registry.entries()
        total_h = len(entries) * MENU_TILE_HEIGHT + (len(entries) - 1) * MENU_TILE_SPACING
        start_y = max(150, height // 2 - total_h // 2 + 50)
        x = width // 2 - MENU_TILE_WIDTH // 2
        self._tiles = [
            MenuTile(entry, x, start_y + i * (MENU_TILE_HEIGHT + MENU_TILE_SPACING), MENU_TILE_WIDTH, MENU_TILE_HEIGHT)
            for i, entry in enumerate(entries)
        ]
        self._btn_back = UIButton(
            width // 2 - BACK_BTN_WIDTH - 6,
            height - BACK_BTN_HEIGHT - 14,
            BACK_BTN_WIDTH,
            BACK_BTN_HEIGHT,
            "Back to Menu",
            get_font(14),
        )

    # ── Events ──────────────────────────────────────────────────────
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return True when the shell consumed *event*."""
        if self.menu_visible:
            return self._handle_menu_event(event)

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self._session.show_menu()
            return True
        if self._btn_back is not None and self._btn_back.is_clicked(event):
            self._session.show_menu()
            return True
        return False

    def _handle_menu_event(self, event: pygame.event.Event) -> bool:
        if not self._tiles:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_UP:
                self._selected_index = (self._selected_index - 1) % len(self._tiles)
            elif event.key == pygame.K_DOWN:
                self._selected_index = (self._selected_index + 1) % len(self._tiles)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._activate(self._selected_index)
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for i, tile in enumerate(self._tiles):
                if tile.is_clicked(event):
                    self._selected_index = i
                    self._activate(i)
                    return True
        return False

    def _activate(self, index: int) -> None:
        entry = self._tiles[index].entry
        try:
            self._session.start_world(entry.world_id)
        except UnknownWorldError:
            logger.warning("Menu tile %r has no world behind it", entry.world_id)

    # ── Update ──────────────────────────────────────────────────────
    def update(self, dt: float) -> None:
        self._time += dt
        mouse_pos = pygame.mouse.get_pos()
        if self.menu_visible:
            for i, tile in enumerate(self._tiles):
                if tile.contains(*mouse_pos):
                    self._selected_index = i
            for i, tile in enumerate(self._tiles):
                tile.hovered = i == self._selected_index
        elif self._btn_back is not None:
            self._btn_back.is_hovered(mouse_pos)

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, window: pygame.Surface) -> None:
        self.layout(window.get_size())
        if self.menu_visible:
            self._draw_menu(window)
        self._draw_hud(window)

    def _draw_menu(self, window: pygame.Surface) -> None:
        width, height = window.get_size()
        window.fill(COLOR_BG)
        pygame.draw.rect(window, COLOR_BG_LOW, (0, height * 2 // 3, width, height - height * 2 // 3))

        pulse = 0.85 + 0.15 * math.sin(self._time * 1.5)
        title_color = tuple(int(c * pulse) for c in COLOR_ACCENT)
        title = get_font(36, bold=True, name=FONT_TITLE).render(TITLE, True, title_color)
        window.blit(title, (width // 2 - title.get_width() // 2, 60))
        draw_text(window, SUBTITLE, (width // 2, 126), 16, COLOR_TEXT_DIM, align="center")

        for tile in self._tiles:
            tile.draw(window)

    def _draw_hud(self, window: pygame.Surface) -> None:
        width, height = window.get_size()

        # Top-left HUD card
        if not self.menu_visible:
            sub = _ellipsize(self.hud_subtitle, 90)
            box_w = max(get_font(14, bold=True).size(self.hud_title)[0], get_font(12).size(sub)[0]) + 20
            draw_rounded_rect(window, (255, 255, 255, 170), (HUD_MARGIN, HUD_MARGIN, box_w, 50), 8)
            draw_text(window, self.hud_title, (HUD_MARGIN + 10, HUD_MARGIN + 20), 14, COLOR_TEXT, bold=True)
            draw_text(window, sub, (HUD_MARGIN + 10, HUD_MARGIN + 40), 12, COLOR_TEXT_DIM)

        # Bottom bar: back button + status pill
        pill_text = self.error or self.status
        pill_font = get_font(13)
        pill_w = pill_font.size(pill_text)[0] + 24
        if self.menu_visible:
            pill = pygame.Rect(width // 2 - pill_w // 2, height - BACK_BTN_HEIGHT - 14, pill_w, BACK_BTN_HEIGHT)
        else:
            if self._btn_back is not None:
                self._btn_back.draw(window)
            pill = pygame.Rect(width // 2 + 6, height - BACK_BTN_HEIGHT - 14, pill_w, BACK_BTN_HEIGHT)
        draw_rounded_rect(window, (255, 255, 255), pill, BACK_BTN_HEIGHT // 2)
        color = COLOR_DANGER if self.error else COLOR_TEXT
        rendered = pill_font.render(pill_text, True, color)
        window.blit(rendered, rendered.get_rect(center=pill.center))


def _ellipsize(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3].rstrip() + "..."
