import pytest

from conftest import run_frames
from golf_worlds.core.input_router import PointerState
from golf_worlds.worlds.club_manager import CATALOG, START_BUDGET, START_SATISFACTION


@pytest.fixture
def manager(session):
    return session.start_world("manager")


def test_starts_with_full_budget(manager, shell):
    assert manager.budget == START_BUDGET
    assert manager.satisfaction == START_SATISFACTION
    assert manager.chosen == set()
    assert shell.status == "Manager mode"


def test_select_then_deselect_restores_exact_values(manager):
    item = CATALOG[2]
    assert manager.toggle(item)
    assert manager.budget == START_BUDGET - item.cost
    assert manager.satisfaction == START_SATISFACTION + item.benefit

    assert manager.toggle(item)
    assert manager.budget == START_BUDGET
    assert manager.satisfaction == START_SATISFACTION
    assert manager.chosen == set()


def test_over_budget_item_is_rejected_without_state_change(manager, session, clock):
    manager.budget = 100
    before = (manager.budget, manager.satisfaction, set(manager.chosen))

    assert not manager.toggle(CATALOG[0])

    assert (manager.budget, manager.satisfaction, manager.chosen) == before
    assert manager.message == "Not enough budget for that item."
    clock.advance(1100)
    session.scheduler.pump()
    assert manager.message is None


def test_digit_keys_toggle_catalog_items(manager):
    manager.on_key_down("1")
    manager.on_key_down("4")
    assert manager.chosen == {CATALOG[0].item_id, CATALOG[3].item_id}
    manager.on_key_down("9")
    assert len(manager.chosen) == 2


def test_clicking_an_item_row_toggles_it(manager):
    rect = manager.item_rect(1)
    manager.on_pointer_down(PointerState(rect.centerx, rect.centery, True))
    assert manager.chosen == {CATALOG[1].item_id}


def test_booking_locks_selection(manager, shell):
    manager.toggle(CATALOG[0])
    manager.on_key_down("return")

    assert manager.booked
    assert manager.message.startswith("Event Booked! Final satisfaction")
    assert shell.status == "Event booked"

    budget = manager.budget
    assert not manager.toggle(CATALOG[1])
    assert manager.budget == budget
    assert manager.message == "Event already booked."


def test_message_from_previous_run_does_not_leak(session, clock):
    first = session.start_world("manager")
    first.toggle(CATALOG[0])
    first.book()
    second = session.start_world("manager")
    run_frames(session, clock, 200)

    assert second.message is None
    assert second.budget == START_BUDGET
