"""
Golf Worlds - Global Constants
===============================
Window, surface and palette configuration shared by the shell and
every world.  Per-world tuning lives at the top of each world module.
"""

from __future__ import annotations

# ── Window ──────────────────────────────────────────────────────────
SCREEN_WIDTH: int = 1280
SCREEN_HEIGHT: int = 720
FPS: int = 60
TITLE: str = "Golf Worlds - Careers on the Green"
SUBTITLE: str = "Jump into mini-worlds that demonstrate five different golf careers."

# ── Render Surface ──────────────────────────────────────────────────
MIN_SURFACE_WIDTH: int = 800
MIN_SURFACE_HEIGHT: int = 480

# ── Shell layout ────────────────────────────────────────────────────
MENU_TILE_WIDTH: int = 460
MENU_TILE_HEIGHT: int = 76
MENU_TILE_SPACING: int = 14
HUD_MARGIN: int = 20
BACK_BTN_WIDTH: int = 150
BACK_BTN_HEIGHT: int = 34

# ── Key identifiers (pygame.key.name) ───────────────────────────────
KEY_SPACE: str = "space"
KEY_UP: str = "up"
KEY_DOWN: str = "down"
KEY_LEFT: str = "left"
KEY_RIGHT: str = "right"
KEY_RETURN: str = "return"

# ── Colors ──────────────────────────────────────────────────────────
COLOR_BG: tuple[int, int, int] = (231, 244, 242)
COLOR_BG_LOW: tuple[int, int, int] = (210, 240, 234)
COLOR_ACCENT: tuple[int, int, int] = (0, 105, 92)
COLOR_TEXT: tuple[int, int, int] = (34, 34, 34)
COLOR_TEXT_DIM: tuple[int, int, int] = (107, 107, 107)
COLOR_WHITE: tuple[int, int, int] = (255, 255, 255)
COLOR_BLACK: tuple[int, int, int] = (0, 0, 0)
COLOR_DANGER: tuple[int, int, int] = (244, 67, 54)
COLOR_SAFE: tuple[int, int, int] = (76, 175, 80)
COLOR_OVERLAY: tuple[int, int, int, int] = (0, 0, 0, 82)

# Buttons
COLOR_BTN_NORMAL: tuple[int, int, int] = (255, 255, 255)
COLOR_BTN_HOVER: tuple[int, int, int] = (236, 246, 244)
COLOR_BTN_BORDER: tuple[int, int, int] = (200, 214, 210)
COLOR_BTN_BORDER_HOVER: tuple[int, int, int] = (0, 105, 92)
COLOR_BTN_TEXT: tuple[int, int, int] = (34, 34, 34)

# ── Fonts ───────────────────────────────────────────────────────────
FONT_UI: str = "dejavusans,arial,helvetica"
FONT_TITLE: str = "georgia,dejavuserif"
