# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias

import pendulum

from yizhi.model.task import Task
from yizhi.time import day_to_ordinal

VisibilitySpan: TypeAlias = tuple[int, Optional[int]]


def get_visibility_span(task: Task) -> VisibilitySpan:
    """Creation and deletion day ordinals. The task shows on [created, deleted)."""
    deleted = task["deleted"]
    return (
        day_to_ordinal(task["created"]),
        None if deleted is None else day_to_ordinal(deleted),
    )


def is_visible_on_ordinal(span: VisibilitySpan, ordinal: int) -> bool:
    created, deleted = span
    if created > ordinal:
        return False
    return deleted is None or deleted > ordinal


def is_task_visible(task: Task, day: pendulum.DateTime) -> bool:
    """
    A task shows from its creation day up to, but not including, its
    deletion day. Tasks that were never deleted show forever after creation.
    """
    return is_visible_on_ordinal(get_visibility_span(task), day_to_ordinal(day))


def get_available_tasks(tasks: list[Task], day: pendulum.DateTime) -> list[Task]:
    """Tasks visible on the day, ordered by name."""
    ordinal = day_to_ordinal(day)
    available_tasks = [
        task
        for task in tasks
        if is_visible_on_ordinal(get_visibility_span(task), ordinal)
    ]
    return sorted(
        available_tasks,
        key=lambda task: (task["name"], task["created"], task["id"]),
    )
