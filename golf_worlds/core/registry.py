"""
Golf Worlds - World Registry
=============================
Static catalog of world identifier → factory plus the display
metadata the shell shows for each entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from golf_worlds.core.errors import RegistryFrozenError, UnknownWorldError
from golf_worlds.core.world import World

WorldFactory = Callable[[], World]


@dataclass(frozen=True)
class WorldEntry:
    world_id: str
    name: str
    summary: str
    color: tuple[int, int, int]
    factory: WorldFactory

    @property
    def initials(self) -> str:
        return "".join(word[0] for word in self.name.split() if word[0].isalpha())


class WorldRegistry:
    """Ordered mapping of world id to :class:`WorldEntry`."""

    def __init__(self) -> None:
        self._entries: dict[str, WorldEntry] = {}
        self._frozen = False

    def register(
        self,
        world_id: str,
        factory: WorldFactory,
        *,
        name: str | None = None,
        summary: str = "",
        color: tuple[int, int, int] = (240, 240, 240),
    ) -> None:
        """Add *factory* under *world_id*; an existing id is overwritten."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {world_id!r} after startup")
        self._entries[world_id] = WorldEntry(world_id, name or world_id, summary, color, factory)

    def freeze(self) -> None:
        self._frozen = True

    def create(self, world_id: str) -> World:
        entry = self.entry(world_id)
        world = entry.factory()
        world.world_id = world_id
        return world

    def entry(self, world_id: str) -> WorldEntry:
        try:
            return self._entries[world_id]
        except KeyError:
            raise UnknownWorldError(world_id) from None

    def entries(self) -> list[WorldEntry]:
        return list(self._entries.values())

    def __contains__(self, world_id: object) -> bool:
        return world_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> WorldRegistry:
    """The five golf-career worlds in menu order, frozen."""
    from golf_worlds.worlds.caddy import CaddyWorld
    from golf_worlds.worlds.club_manager import ClubManagerWorld
    from golf_worlds.worlds.course_designer import CourseDesignerWorld
    from golf_worlds.worlds.greenskeeper import GreenskeeperWorld
    from golf_worlds.worlds.pro_golfer import ProGolferWorld

    registry = WorldRegistry()
    registry.register(
        "pro", ProGolferWorld,
        name="Pro Golfer",
        summary="Power, angle, and course strategy. Play a par-3 with realistic ball flight.",
        color=(166, 240, 198),
    )
    registry.register(
        "designer", CourseDesignerWorld,
        name="Course Designer",
        summary="Paint terrain, place hazards, test play lines and difficulty.",
        color=(255, 233, 163),
    )
    registry.register(
        "greens", GreenskeeperWorld,
        name="Greenskeeper",
        summary="Repair damage, manage irrigation, and keep turf healthy under time pressure.",
        color=(200, 231, 255),
    )
    registry.register(
        "caddy", CaddyWorld,
        name="Caddy (Carrying)",
        summary="Carry gear, manage stamina, and place the bags under constraints.",
        color=(255, 214, 218),
    )
    registry.register(
        "manager", ClubManagerWorld,
        name="Club Manager",
        summary="Plan events, manage budget and logistics, keep players happy.",
        color=(230, 209, 255),
    )
    registry.freeze()
    return registry
