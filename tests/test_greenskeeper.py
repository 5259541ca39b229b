import pytest

from conftest import run_frames
from golf_worlds.core.input_router import PointerState
from golf_worlds.worlds.greenskeeper import (
    COLS,
    POINTS_PER_PATCH,
    ROWS,
    SPRINKLER_UNLOCK,
)


@pytest.fixture
def greens(session):
    return session.start_world("greens")


def test_round_starts_with_partially_dry_grid(greens):
    assert len(greens.patches) == COLS * ROWS
    assert all(0.2 <= p.moisture <= 0.9 for p in greens.patches)
    assert all(1e-5 <= p.drying_rate <= 3e-5 for p in greens.patches)
    assert greens.time_left == 90.0
    assert greens.score == 0


def test_moisture_strictly_decreases_over_time(greens):
    before = [p.moisture for p in greens.patches]
    greens.advance(500)
    after = [p.moisture for p in greens.patches]
    assert all(a < b for a, b in zip(after, before))


def test_moisture_never_goes_negative(greens):
    greens.advance(60_000)
    greens.advance(29_000)
    assert all(p.moisture >= 0.0 for p in greens.patches)
    assert min(p.moisture for p in greens.patches) == 0.0


def test_clicking_a_patch_waters_it_fully(greens):
    patch = greens.patches[3 * COLS + 4]
    x, y = greens.patch_center(patch)
    patch.moisture = 0.1

    greens.on_pointer_down(PointerState(x, y, True))

    assert patch.moisture == 1.0
    assert greens.score == POINTS_PER_PATCH
    assert greens.tasks_done == 1
    assert len(greens.splashes) == 1


def test_patch_lookup_clamps_to_grid(greens):
    assert greens.patch_at(-100, -100) is greens.patches[0]
    assert greens.patch_at(10_000, 10_000) is greens.patches[-1]


def test_tenth_task_unlocks_sprinkler(greens):
    x, y = greens.patch_center(greens.patches[0])
    for _ in range(SPRINKLER_UNLOCK - 1):
        greens.water(x, y)
    assert not greens.sprinkler_active

    greens.water(x, y)
    assert greens.sprinkler_active
    assert greens.sprinkler_ms == 3000


def test_sprinkler_soaks_every_patch_in_radius(greens):
    greens.sprinkler_active = True
    greens.sprinkler_ms = 3000
    for p in greens.patches:
        p.moisture = 0.1
    centre = greens.patches[5 * COLS + 10]
    x, y = greens.patch_center(centre)

    watered = greens.water(x, y)

    assert watered > 1
    assert centre.moisture == 1.0
    assert greens.score == watered * POINTS_PER_PATCH
    assert greens.tasks_done == 0
    assert greens.patches[0].moisture < 1.0


def test_sprinkler_expires(greens):
    greens.sprinkler_active = True
    greens.sprinkler_ms = 3000
    greens.advance(2999)
    assert greens.sprinkler_active
    greens.advance(2)
    assert not greens.sprinkler_active


def test_round_ends_and_loop_stops(greens, session, clock, shell):
    run_frames(session, clock, 95, step_ms=1000)

    assert greens.game_over
    assert session.scheduler.pending_frames == 0
    assert shell.subtitle == "Time up - results finalized"
    time_left = greens.time_left
    greens.advance(1000)
    assert greens.time_left == time_left


def test_click_after_round_restarts(greens, session, clock):
    run_frames(session, clock, 95, step_ms=1000)
    greens.on_pointer_down(PointerState(100, 100, True))

    assert not greens.game_over
    assert greens.time_left == 90.0
    assert greens.tasks_done == 0
    assert session.scheduler.pending_frames == 1
    run_frames(session, clock, 1)
    assert greens.time_left == pytest.approx(90.0 - 0.016)


def test_resize_after_round_repaints_results(greens, session, clock, container):
    run_frames(session, clock, 95, step_ms=1000)
    container.set_size(1000, 600)

    session.on_resize()
    assert session.scheduler.pending_frames == 1
    run_frames(session, clock, 3)

    assert session.surface.size == (1000, 600)
    assert session.surface.canvas.get_at((500, 300))[:3] != (0, 0, 0)
    assert session.scheduler.pending_frames == 0
    assert greens.game_over


def test_pointer_leave_clears_hover(greens, session):
    session.input.on_pointer_move(100, 100)
    assert greens._hover == (100, 100)
    session.input.on_pointer_leave(100, 100)
    assert greens._hover is None
