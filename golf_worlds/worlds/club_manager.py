"""
Golf Worlds - Club Manager World
=================================
Event budgeting: toggle catalog items on and off against a fixed
budget, watching expected satisfaction change, then book the event.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

import pygame

from golf_worlds.core.constants import COLOR_ACCENT, KEY_RETURN
from golf_worlds.core.input_router import PointerState
from golf_worlds.core.world import FrameContext, World
from golf_worlds.ui.draw import draw_rounded_rect, draw_text, fill_alpha

logger = logging.getLogger(__name__)

# ── Tuning ──────────────────────────────────────────────────────────
START_BUDGET = 2000
START_SATISFACTION = 40
PLAYERS = 120
REJECT_MESSAGE_MS = 1000
BOOKED_MESSAGE_MS = 2200

ITEM_TOP = 84
ITEM_PITCH = 56


@dataclass(frozen=True)
class CatalogItem:
    item_id: str
    name: str
    cost: int
    benefit: int


CATALOG: tuple[CatalogItem, ...] = (
    CatalogItem("catering", "Catering", 400, 60),
    CatalogItem("pr", "PR Campaign", 300, 40),
    CatalogItem("prize", "Prizes", 450, 70),
    CatalogItem("security", "Security", 250, 30),
    CatalogItem("greens", "Extra Greens Crew", 200, 25),
)


class ClubManagerWorld(World):
    """Budget allocation puzzle with a finalize action."""

    def __init__(self) -> None:
        super().__init__()
        self.budget = START_BUDGET
        self.satisfaction = START_SATISFACTION
        self.chosen: set[str] = set()
        self.booked = False
        self.message: str | None = None
        self._message_timer: int | None = None

    # ── Lifecycle ───────────────────────────────────────────────────
    def reset(self) -> None:
        self.budget = START_BUDGET
        self.satisfaction = START_SATISFACTION
        self.chosen = set()
        self.booked = False
        self.message = None
        self.ctx.set_subtitle(
            "Allocate budget across items and book your event. Click options to toggle."
        )
        self.ctx.set_status("Manager mode")

    def stop(self) -> None:
        if self.ctx:
            self.ctx.cancel(self._message_timer)
        self._message_timer = None

    # ── Allocation ──────────────────────────────────────────────────
    def toggle(self, item: CatalogItem) -> bool:
        """Select or deselect *item*.  Returns False if it was rejected."""
        if self.booked:
            self.show_message("Event already booked.", REJECT_MESSAGE_MS)
            return False

        if item.item_id in self.chosen:
            self.chosen.discard(item.item_id)
            self.budget += item.cost
            self.satisfaction -= item.benefit
            return True

        if self.budget < item.cost:
            self.show_message("Not enough budget for that item.", REJECT_MESSAGE_MS)
            return False

        self.chosen.add(item.item_id)
        self.budget -= item.cost
        self.satisfaction += item.benefit
        return True

    def book(self) -> None:
        self.booked = True
        logger.info("Event booked: satisfaction %d%%, budget left %d", self.satisfaction, self.budget)
        self.show_message(f"Event Booked! Final satisfaction {self.satisfaction}%", BOOKED_MESSAGE_MS)
        self.ctx.set_status("Event booked")

    def show_message(self, text: str, duration_ms: float) -> None:
        self.message = text
        self.ctx.cancel(self._message_timer)

        def clear() -> None:
            if self.message == text:
                self.message = None

        self._message_timer = self.ctx.call_later(duration_ms, clear)

    # ── Hit regions ─────────────────────────────────────────────────
    @staticmethod
    def item_rect(index: int) -> pygame.Rect:
        y = ITEM_TOP + index * ITEM_PITCH
        return pygame.Rect(36, y - 24, 320, 44)

    def book_rect(self) -> pygame.Rect:
        return pygame.Rect(self.width - 320, self.height - 100, 200, 44)

    # ── Tick ────────────────────────────────────────────────────────
    def frame(self, frame: FrameContext) -> bool:
        self.draw(frame.canvas)
        return True

    # ── Input ───────────────────────────────────────────────────────
    def on_pointer_down(self, pointer: PointerState) -> None:
        for i, item in enumerate(CATALOG):
            rect = self.item_rect(i)
            if rect.left <= pointer.x <= rect.right and rect.top <= pointer.y <= rect.bottom:
                self.toggle(item)
                return
        book = self.book_rect()
        if book.left <= pointer.x <= book.right and book.top <= pointer.y <= book.bottom:
            self.book()

    def on_key_down(self, code: str) -> None:
        if code.isdigit() and 1 <= int(code) <= len(CATALOG):
            self.toggle(CATALOG[int(code) - 1])
        elif code == KEY_RETURN:
            self.book()

    # ── Draw ────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> None:
        w, h = self.width, self.height
        surface.fill((238, 246, 251))

        # Left: catalog
        draw_rounded_rect(surface, (255, 255, 255), (20, 20, 360, h - 40), 12)
        draw_text(surface, "Event Options", (40, 48), 16, (34, 34, 34))
        for i, item in enumerate(CATALOG):
            rect = self.item_rect(i)
            chosen = item.item_id in self.chosen
            draw_rounded_rect(surface, (215, 255, 217) if chosen else (249, 249, 249), rect, 8)
            y = rect.y + 24
            draw_text(surface, f"{i + 1}. {item.name} - ${item.cost}", (48, y), 14, (51, 51, 51))
            draw_text(surface, f"Benefit: +{item.benefit}% satisfaction", (48, y + 18), 12, (102, 102, 102))

        # Right: budget and result
        draw_rounded_rect(surface, (255, 255, 255), (w - 380, 20, 340, h - 40), 12)
        draw_text(surface, "Budget", (w - 360, 48), 16, (51, 51, 51))
        draw_text(surface, f"Remaining: ${self.budget}", (w - 360, 80), 14, (51, 51, 51))
        draw_text(surface, f"Expected satisfaction: {self.satisfaction}%", (w - 360, 112), 14, (51, 51, 51))
        draw_text(surface, f"Players attending: {PLAYERS}", (w - 360, 144), 14, (102, 102, 102))

        book = self.book_rect()
        draw_rounded_rect(surface, (120, 120, 120) if self.booked else COLOR_ACCENT, book, 8)
        draw_text(surface, "Booked" if self.booked else "Book Event", (book.centerx, book.y + 28), 16, align="center")

        if self.message:
            fill_alpha(surface, (0, 0, 0, 102), (0, h - 80, w, 80))
            draw_text(surface, self.message, (w / 2, h - 40), 18, align="center")
