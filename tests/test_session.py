import random

import pytest

from conftest import FakeClock, FakeContainer, RecordingShell, run_frames
from golf_worlds.core.errors import UnknownWorldError
from golf_worlds.core.registry import WorldRegistry
from golf_worlds.core.scheduler import Scheduler
from golf_worlds.core.session import SessionController
from golf_worlds.core.surface import RenderSurface
from golf_worlds.core.world import World


class CounterWorld(World):
    """Counts ticks; optionally stops itself after *limit* ticks."""

    def __init__(self, limit=None):
        super().__init__()
        self.ticks = 0
        self.limit = limit
        self.starts = 0
        self.stops = 0
        self.resizes = 0
        self.fired = []

    def reset(self):
        self.starts += 1

    def frame(self, frame):
        self.ticks += 1
        frame.canvas.fill((10, 20, 30))
        return self.limit is None or self.ticks < self.limit

    def stop(self):
        self.stops += 1

    def on_resize(self):
        self.resizes += 1


def make_session(**factories):
    clock = FakeClock(0.0)
    container = FakeContainer()
    shell = RecordingShell()
    registry = WorldRegistry()
    for world_id, factory in factories.items():
        registry.register(world_id, factory, name=world_id.title(), summary=f"{world_id} world")
    surface = RenderSurface(container)
    session = SessionController(registry, surface, Scheduler(clock), shell, rng=random.Random(1))
    return session, clock, container, shell


def test_starts_idle_with_nothing_scheduled():
    session, _, _, _ = make_session(a=CounterWorld)
    assert session.is_idle
    assert session.current is None
    assert session.scheduler.pending_frames == 0


def test_start_world_activates_and_schedules_one_frame():
    session, clock, _, shell = make_session(a=CounterWorld)
    world = session.start_world("a")

    assert session.current is world
    assert session.current_id == "a"
    assert world.starts == 1
    assert session.scheduler.pending_frames == 1
    assert shell.worlds == [("A", "a world")]

    run_frames(session, clock, 5)
    assert world.ticks == 5
    assert session.scheduler.pending_frames == 1


def test_switching_worlds_keeps_single_active_and_single_frame():
    session, clock, _, _ = make_session(a=CounterWorld, b=CounterWorld)
    first = session.start_world("a")
    run_frames(session, clock, 2)
    second = session.start_world("b")
    run_frames(session, clock, 3)

    assert first.stops == 1
    assert first.ticks == 2
    assert second.ticks == 3
    assert session.current is second
    assert session.scheduler.pending_frames == 1


def test_fast_switch_without_pumping_runs_only_newest_loop():
    session, clock, _, _ = make_session(a=CounterWorld)
    first = session.start_world("a")
    second = session.start_world("a")
    third = session.start_world("a")
    run_frames(session, clock, 4)

    assert first is not second is not third
    assert first.ticks == 0
    assert second.ticks == 0
    assert third.ticks == 4


def test_unknown_world_from_idle_stays_idle():
    session, _, _, shell = make_session(a=CounterWorld)
    generation = session.generation

    with pytest.raises(UnknownWorldError):
        session.start_world("nope")

    assert session.is_idle
    assert session.generation == generation
    assert session.scheduler.pending_frames == 0
    assert shell.errors


def test_unknown_world_keeps_active_world_running():
    session, clock, _, _ = make_session(a=CounterWorld)
    world = session.start_world("a")

    with pytest.raises(UnknownWorldError):
        session.start_world("nope")

    assert session.current is world
    assert world.stops == 0
    run_frames(session, clock, 2)
    assert world.ticks == 2


def test_ticks_freeze_after_stop():
    session, clock, _, _ = make_session(a=CounterWorld)
    world = session.start_world("a")
    run_frames(session, clock, 3)

    session.stop_current_world()
    frozen = world.ticks
    run_frames(session, clock, 10)

    assert world.ticks == frozen == 3
    assert world.stops == 1
    assert session.is_idle
    assert session.scheduler.pending_frames == 0


def test_stop_when_idle_is_a_noop():
    session, _, _, _ = make_session(a=CounterWorld)
    session.stop_current_world()
    session.stop_current_world()
    assert session.is_idle


def test_stop_clears_surface_to_background():
    session, clock, _, _ = make_session(a=CounterWorld)
    session.start_world("a")
    run_frames(session, clock, 1)
    assert session.surface.canvas.get_at((5, 5))[:3] == (10, 20, 30)

    session.stop_current_world()
    assert session.surface.canvas.get_at((5, 5))[:3] != (10, 20, 30)


def test_show_menu_stops_world_and_notifies_shell():
    session, _, _, shell = make_session(a=CounterWorld)
    world = session.start_world("a")
    session.show_menu()

    assert session.is_idle
    assert world.stops == 1
    assert shell.menus == 1


def test_stale_delayed_callback_is_dropped():
    session, clock, _, _ = make_session(a=CounterWorld)
    world = session.start_world("a")
    world.ctx.call_later(100, lambda: world.fired.append("late"))

    session.show_menu()
    clock.advance(500)
    session.scheduler.pump()

    assert world.fired == []


def test_current_delayed_callback_fires():
    session, clock, _, _ = make_session(a=CounterWorld)
    world = session.start_world("a")
    world.ctx.call_later(100, lambda: world.fired.append("on time"))

    clock.advance(150)
    session.scheduler.pump()

    assert world.fired == ["on time"]


def test_world_can_end_its_own_loop_and_resume():
    session, clock, _, _ = make_session(a=lambda: CounterWorld(limit=2))
    world = session.start_world("a")
    run_frames(session, clock, 5)

    assert world.ticks == 2
    assert session.current is world
    assert session.scheduler.pending_frames == 0

    world.limit = None
    world.ctx.resume()
    world.ctx.resume()
    assert session.scheduler.pending_frames == 1
    run_frames(session, clock, 3)
    assert world.ticks == 5


def test_resize_updates_surface_then_notifies_world():
    session, _, container, _ = make_session(a=CounterWorld)
    world = session.start_world("a")
    container.set_size(1024.7, 700.2)

    session.on_resize()

    assert session.surface.size == (1024, 700)
    assert world.resizes == 1


def test_resize_while_idle_only_resizes_surface():
    session, _, container, _ = make_session(a=CounterWorld)
    container.set_size(900, 600)
    session.on_resize()
    assert session.surface.size == (900, 600)


def test_world_context_requests_menu():
    session, _, _, shell = make_session(a=CounterWorld)
    world = session.start_world("a")
    ctx = world.ctx

    ctx.request_menu()
    assert session.is_idle
    assert shell.menus == 1

    ctx.request_menu()
    assert shell.menus == 1


class BrokenWorld(World):
    def reset(self):
        raise RuntimeError("no course")

    def frame(self, frame):
        return True


def test_world_that_fails_to_start_leaves_session_idle():
    session, _, _, shell = make_session(a=CounterWorld, broken=BrokenWorld)
    session.start_world("a")

    with pytest.raises(RuntimeError):
        session.start_world("broken")

    assert session.is_idle
    assert session.scheduler.pending_frames == 0
    assert shell.errors == ["Broken failed to start"]
