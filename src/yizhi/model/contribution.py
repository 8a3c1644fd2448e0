# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias, TypedDict

import pendulum

from yizhi.model.task import Task

# Always allocated regardless of leap year, slot 0 is Jan 1
CONTRIBUTION_SLOTS = 366

ContributionArray: TypeAlias = list[float]


class ContributionSlot(TypedDict):
    offset: int
    day: pendulum.DateTime
    in_year: bool
    available_count: int
    completed_count: int
    percentage: float
    has_data: bool
    intensity: int  # 0-4


class ContributionSummary(TypedDict):
    days_with_data: int
    full_days: int
    mean_percentage: Optional[float]
    current_run: int
    longest_run: int


class MutationResult(TypedDict):
    changed: bool
    persisted: bool
    task: Optional[Task]
    contribution: Optional[ContributionArray]
