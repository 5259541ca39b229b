import pytest

from conftest import FakeClock
from golf_worlds.core.errors import RegistryFrozenError, UnknownWorldError
from golf_worlds.core.registry import WorldRegistry, default_registry
from golf_worlds.core.scheduler import Scheduler
from golf_worlds.core.world import World


class DummyWorld(World):
    def reset(self):
        pass

    def frame(self, frame):
        return True


def test_default_registry_lists_five_worlds_in_menu_order():
    registry = default_registry()
    assert list(registry) == ["pro", "designer", "greens", "caddy", "manager"]
    assert registry.entry("pro").name == "Pro Golfer"
    assert registry.entry("pro").initials == "PG"


def test_create_returns_independent_instances():
    registry = default_registry()
    first = registry.create("manager")
    second = registry.create("manager")
    assert first is not second
    assert first.chosen is not second.chosen
    assert first.world_id == "manager"


def test_create_unknown_raises():
    registry = WorldRegistry()
    with pytest.raises(UnknownWorldError) as excinfo:
        registry.create("ghost")
    assert excinfo.value.world_id == "ghost"
    assert isinstance(excinfo.value, LookupError)


def test_duplicate_register_overwrites():
    registry = WorldRegistry()
    registry.register("x", DummyWorld, name="First")
    registry.register("x", DummyWorld, name="Second")
    assert len(registry) == 1
    assert registry.entry("x").name == "Second"


def test_frozen_registry_rejects_registration():
    registry = default_registry()
    with pytest.raises(RegistryFrozenError):
        registry.register("extra", DummyWorld)


def test_frames_requested_during_pump_wait_for_next_pump():
    clock = FakeClock()
    scheduler = Scheduler(clock)
    calls = []

    def tick(now):
        calls.append(now)
        scheduler.request_frame(tick)

    scheduler.request_frame(tick)
    scheduler.pump()
    assert len(calls) == 1
    assert scheduler.pending_frames == 1
    clock.advance(16)
    scheduler.pump()
    assert calls == [0.0, 16.0]


def test_cancelled_frame_does_not_run():
    scheduler = Scheduler(FakeClock())
    calls = []
    handle = scheduler.request_frame(calls.append)
    scheduler.cancel_frame(handle)
    scheduler.pump()
    assert calls == []
    assert scheduler.pending_frames == 0


def test_timers_fire_in_due_order_and_honour_cancel():
    clock = FakeClock()
    scheduler = Scheduler(clock)
    fired = []
    scheduler.call_later(200, lambda: fired.append("b"))
    scheduler.call_later(100, lambda: fired.append("a"))
    dropped = scheduler.call_later(150, lambda: fired.append("x"))
    scheduler.cancel(dropped)

    clock.advance(120)
    scheduler.pump()
    assert fired == ["a"]
    clock.advance(100)
    scheduler.pump()
    assert fired == ["a", "b"]
    assert scheduler.pending_timers == 0


def test_world_without_frame_cannot_be_built():
    class HalfWorld(World):
        def reset(self):
            pass

    registry = WorldRegistry()
    registry.register("half", HalfWorld)
    with pytest.raises(TypeError):
        registry.create("half")
