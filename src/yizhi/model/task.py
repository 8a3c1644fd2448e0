# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from yizhi.model.entity_id import EntityId


class Task(TypedDict):
    id: EntityId
    name: str
    completed: bool  # Registry default only, per-day state lives in snapshots
    created: pendulum.DateTime  # Start of the day the task was added
    deleted: Optional[pendulum.DateTime]  # Soft delete, start of day


class DayTask(TypedDict):
    task: Task
    completed: bool
