"""
Scenario tests for the ledger: adding, completing, renaming and deleting
tasks across days, and the contribution returned with each change.
"""
import pytest

from yizhi.repository.snapshot import SnapshotRepository
from yizhi.repository.task import TaskRepository
from yizhi.service.ledger import Ledger

from conftest import FlakyBlobStore, local_day


@pytest.fixture
def ledger(store, jan_1):
    return Ledger(store, active_day=jan_1, clock=lambda: jan_1)


def visible_names(ledger, day=None):
    return [day_task["task"]["name"] for day_task in ledger.get_visible_tasks(day)]


def test_water_scenario(ledger, jan_1):
    added = ledger.add_task("water")

    assert added["changed"]
    assert added["persisted"]
    assert visible_names(ledger) == ["water"]
    assert added["contribution"][0] == 0.0

    toggled = ledger.toggle_completion(added["task"]["id"])

    assert toggled["contribution"][0] == 100.0
    assert ledger.get_visible_tasks()[0]["completed"]


def test_deletion_scenario(ledger, jan_1):
    a = ledger.add_task("A", local_day(2025, 1, 1))["task"]
    ledger.add_task("B", local_day(2025, 1, 3))
    ledger.soft_delete_task(a["id"], local_day(2025, 1, 5))

    assert visible_names(ledger, local_day(2025, 1, 2)) == ["A"]
    assert visible_names(ledger, local_day(2025, 1, 4)) == ["A", "B"]
    assert visible_names(ledger, local_day(2025, 1, 5)) == ["B"]


def test_toggle_twice_restores_completion(ledger, jan_1):
    id = ledger.add_task("water")["task"]["id"]

    ledger.toggle_completion(id)
    ledger.toggle_completion(id)

    assert not ledger.get_visible_tasks()[0]["completed"]
    assert ledger.get_contribution()[0] == 0.0


def test_toggle_does_not_touch_registry(store, ledger):
    id = ledger.add_task("water")["task"]["id"]
    registry_blob = store.get("tasks")

    ledger.toggle_completion(id)

    assert store.get("tasks") == registry_blob
    assert ledger.get_task(id)["completed"] is False
    assert store.get("data") is not None


def test_empty_names_are_ignored(store, ledger):
    result = ledger.add_task("   ")

    assert not result["changed"]
    assert result["contribution"] is None
    assert ledger.get_all_tasks() == []
    assert store.get("tasks") is None


def test_add_uses_start_of_active_day(ledger, jan_1):
    ledger.navigate(2)

    task = ledger.add_task("  stretch  ")["task"]

    assert task["name"] == "stretch"
    assert task["created"] == local_day(2025, 1, 3)
    assert visible_names(ledger, jan_1) == []


def test_rename_keeps_history(store, ledger, jan_1):
    id = ledger.add_task("water")["task"]["id"]
    ledger.toggle_completion(id)

    result = ledger.rename_task(id, "drink water")

    assert result["task"]["name"] == "drink water"
    assert visible_names(ledger) == ["drink water"]
    assert TaskRepository(store).get_task(id)["name"] == "drink water"
    record = SnapshotRepository(store).get_snapshot(jan_1)[id]
    assert record["name"] == "water"
    assert record["completed"]


def test_rename_stores_the_name_as_given(ledger):
    id = ledger.add_task("water")["task"]["id"]

    assert ledger.rename_task(id, " tea ")["changed"]
    assert ledger.get_task(id)["name"] == " tea "
    assert ledger.rename_task(id, "")["changed"]
    assert ledger.get_task(id)["name"] == ""


def test_unknown_task_ids_are_ignored(ledger):
    assert not ledger.toggle_completion("missing")["changed"]
    assert not ledger.rename_task("missing", "x")["changed"]
    assert not ledger.soft_delete_task("missing")["changed"]


def test_toggle_on_day_task_is_not_listed_is_ignored(store, ledger, jan_1):
    id = ledger.add_task("water", local_day(2025, 1, 3))["task"]["id"]

    result = ledger.toggle_completion(id, jan_1)

    assert not result["changed"]
    assert store.get("data") is None


def test_soft_delete_keeps_history(ledger, jan_1):
    id = ledger.add_task("water")["task"]["id"]
    ledger.toggle_completion(id, local_day(2025, 1, 1))
    ledger.toggle_completion(id, local_day(2025, 1, 2))

    result = ledger.soft_delete_task(id, local_day(2025, 1, 3))

    assert result["task"]["deleted"] == local_day(2025, 1, 3)
    contribution = result["contribution"]
    assert contribution[0] == 100.0
    assert contribution[1] == 100.0
    assert contribution[2] == 0.0


def test_soft_delete_is_not_moved_by_second_delete(ledger):
    id = ledger.add_task("water")["task"]["id"]
    ledger.soft_delete_task(id, local_day(2025, 1, 3))

    result = ledger.soft_delete_task(id, local_day(2025, 1, 9))

    assert not result["changed"]
    assert ledger.get_task(id)["deleted"] == local_day(2025, 1, 3)


def test_soft_delete_before_creation_is_clamped(ledger):
    id = ledger.add_task("water", local_day(2025, 1, 5))["task"]["id"]

    ledger.soft_delete_task(id, local_day(2025, 1, 2))

    assert ledger.get_task(id)["deleted"] == local_day(2025, 1, 5)


def test_completion_then_deletion_same_day_is_not_counted(ledger):
    a = ledger.add_task("A")["task"]["id"]
    ledger.add_task("B")
    ledger.toggle_completion(a, local_day(2025, 1, 4))

    result = ledger.soft_delete_task(a, local_day(2025, 1, 4))

    assert result["contribution"][3] == 0.0


def test_navigate_moves_active_day(ledger):
    assert ledger.navigate(-1) == local_day(2024, 12, 31)
    assert ledger.active_year == 2024
    assert ledger.navigate(1) == local_day(2025, 1, 1)


def test_clear_all_wipes_everything(store, ledger):
    id = ledger.add_task("water")["task"]["id"]
    ledger.toggle_completion(id)

    result = ledger.clear_all()

    assert result["changed"]
    assert ledger.get_all_tasks() == []
    assert store.get("tasks") is None
    assert store.get("data") is None
    assert result["contribution"][0] == 0.0


def test_state_survives_a_new_ledger(store, ledger, jan_1):
    id = ledger.add_task("water")["task"]["id"]
    ledger.toggle_completion(id)

    reopened = Ledger(store, active_day=jan_1, clock=lambda: jan_1)

    assert reopened.get_visible_tasks()[0]["completed"]
    assert reopened.get_contribution()[0] == 100.0


def test_contribution_not_returned_when_tracking_is_off(store, jan_1):
    ledger = Ledger(store, active_day=jan_1, track_contribution=False)

    result = ledger.add_task("water")

    assert result["changed"]
    assert result["contribution"] is None


def test_failed_write_is_reported_not_raised(jan_1):
    store = FlakyBlobStore(failures=2)
    ledger = Ledger(store, active_day=jan_1)

    result = ledger.add_task("water")

    assert result["changed"]
    assert not result["persisted"]
    assert visible_names(ledger) == ["water"]


def test_single_failed_write_is_retried(jan_1):
    store = FlakyBlobStore(failures=1)
    ledger = Ledger(store, active_day=jan_1)

    result = ledger.add_task("water")

    assert result["persisted"]
    assert store.get("tasks") is not None


def test_is_today_slot_follows_clock(store):
    today = local_day(2025, 3, 1)
    ledger = Ledger(store, clock=lambda: today)

    assert ledger.active_day == today
    assert ledger.is_today_slot(59)
    assert not ledger.is_today_slot(58)
