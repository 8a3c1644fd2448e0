"""
Unit tests for the per-day task visibility rule.
"""
import pendulum

from yizhi.service.visibility import (
    get_available_tasks,
    get_visibility_span,
    is_task_visible,
    is_visible_on_ordinal,
)

from conftest import local_day, make_task


def test_task_is_hidden_before_its_creation_day():
    task = make_task("water", local_day(2025, 1, 10))

    assert not is_task_visible(task, local_day(2025, 1, 9))
    assert not is_task_visible(task, local_day(2024, 12, 31))


def test_task_without_deletion_is_visible_forever_after_creation():
    task = make_task("water", local_day(2025, 1, 10))

    assert is_task_visible(task, local_day(2025, 1, 10))
    assert is_task_visible(task, local_day(2025, 6, 1))
    assert is_task_visible(task, local_day(2030, 1, 1))


def test_creation_time_of_day_does_not_matter():
    task = make_task("water", pendulum.datetime(2025, 1, 10, 22, 30, tz="local"))

    assert is_task_visible(task, local_day(2025, 1, 10))
    assert is_task_visible(task, pendulum.datetime(2025, 1, 10, 6, tz="local"))


def test_deleted_task_is_visible_only_before_its_deletion_day():
    task = make_task("water", local_day(2025, 1, 1), deleted=local_day(2025, 1, 5))

    for day in range(1, 5):
        assert is_task_visible(task, local_day(2025, 1, day))
    assert not is_task_visible(task, local_day(2025, 1, 5))
    assert not is_task_visible(task, pendulum.datetime(2025, 1, 5, 23, 59, tz="local"))
    assert not is_task_visible(task, local_day(2025, 2, 1))


def test_task_deleted_on_its_creation_day_is_never_visible():
    day = local_day(2025, 1, 5)
    task = make_task("water", day, deleted=day)

    assert not is_task_visible(task, day)


def test_available_tasks_are_ordered_by_name():
    tasks = [
        make_task("walk", local_day(2025, 1, 1)),
        make_task("read", local_day(2025, 1, 2)),
        make_task("apple", local_day(2025, 1, 3)),
        make_task("gone", local_day(2025, 1, 1), deleted=local_day(2025, 1, 2)),
    ]

    names = [task["name"] for task in get_available_tasks(tasks, local_day(2025, 1, 3))]

    assert names == ["apple", "read", "walk"]


def test_visibility_span_uses_local_day_ordinals():
    task = make_task(
        "water",
        pendulum.datetime(2025, 1, 10, 18, 30, tz="local"),
        deleted=local_day(2025, 1, 12),
    )

    created, deleted = get_visibility_span(task)

    assert created == local_day(2025, 1, 10).date().toordinal()
    assert deleted == created + 2
    assert is_visible_on_ordinal((created, deleted), created + 1)
    assert not is_visible_on_ordinal((created, deleted), deleted)
    assert not is_visible_on_ordinal((created, None), created - 1)
