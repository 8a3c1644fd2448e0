# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from yizhi.model.completion import SnapshotStore
from yizhi.model.contribution import (
    CONTRIBUTION_SLOTS,
    ContributionArray,
    ContributionSlot,
    ContributionSummary,
)
from yizhi.model.task import Task
from yizhi.service.visibility import get_visibility_span, is_visible_on_ordinal
from yizhi.time import (
    day_of_year_offset,
    day_to_ordinal,
    days_in_year,
    start_of_year,
    today as local_today,
)


def get_contribution_intensity(percentage: float) -> int:
    """Bucket a completion percentage into a 0-4 heat-map level."""
    if percentage <= 0:
        return 0
    if percentage >= 100:
        return 4
    if percentage < 34:
        return 1
    if percentage < 67:
        return 2
    return 3


def get_contribution_timeline_data(
    tasks: list[Task],
    snapshots: SnapshotStore,
    year: int,
) -> list[ContributionSlot]:
    """
    Generate per-day completion data for every slot of the year.

    A day's denominator is the set of registry tasks visible on it. Its
    numerator is the completed records of that day's snapshot whose task is
    in that set, so a task deleted by that day counts on neither side.

    Slots past Dec 31 (the last slot of a 365-day year) are marked out of
    year and stay at 0.

    Args:
        tasks: Every task in the registry, deleted ones included
        snapshots: Completion records keyed by day ordinal
        year: Calendar year to compute

    Returns:
        List of CONTRIBUTION_SLOTS slot dicts, slot 0 is Jan 1
    """
    year_start = start_of_year(year)
    year_start_ordinal = day_to_ordinal(year_start)
    year_length = days_in_year(year)
    spans = [(task["id"], get_visibility_span(task)) for task in tasks]
    timeline_data: list[ContributionSlot] = []

    for offset in range(CONTRIBUTION_SLOTS):
        day = year_start.add(days=offset)
        in_year = offset < year_length

        available_count = 0
        completed_count = 0
        if in_year:
            ordinal = year_start_ordinal + offset
            available_ids = {
                id for id, span in spans if is_visible_on_ordinal(span, ordinal)
            }
            snapshot = snapshots.get(ordinal, {})
            available_count = len(available_ids)
            completed_count = sum(
                1
                for id, record in snapshot.items()
                if record["completed"] and id in available_ids
            )

        percentage = 0.0
        if available_count > 0:
            percentage = 100.0 * completed_count / available_count

        timeline_data.append(
            {
                "offset": offset,
                "day": day,
                "in_year": in_year,
                "available_count": available_count,
                "completed_count": completed_count,
                "percentage": percentage,
                "has_data": available_count > 0,
                "intensity": get_contribution_intensity(percentage),
            }
        )

    return timeline_data


def compute_contribution(
    tasks: list[Task],
    snapshots: SnapshotStore,
    year: int,
) -> ContributionArray:
    return [
        slot["percentage"]
        for slot in get_contribution_timeline_data(tasks, snapshots, year)
    ]


def is_today_slot(
    offset: int,
    year: int,
    today: Optional[pendulum.DateTime] = None,
) -> bool:
    if today is None:
        today = local_today()
    return today.in_tz("local").year == year and day_of_year_offset(today) == offset


def get_contribution_summary(
    timeline_data: list[ContributionSlot],
    today: Optional[pendulum.DateTime] = None,
) -> ContributionSummary:
    """
    Summarize a year of slots.

    The current run counts fully completed days backwards from today, or from
    yesterday when today is not complete yet. For a year that does not contain
    today it counts back from Dec 31.
    """
    if today is None:
        today = local_today()

    in_year_slots = [slot for slot in timeline_data if slot["in_year"]]
    slots_with_data = [slot for slot in in_year_slots if slot["has_data"]]
    full_flags = [slot["percentage"] >= 100.0 for slot in in_year_slots]

    longest_run = 0
    run = 0
    for is_full in full_flags:
        run = run + 1 if is_full else 0
        longest_run = max(longest_run, run)

    last_index = len(in_year_slots) - 1
    if in_year_slots and in_year_slots[0]["day"].year == today.in_tz("local").year:
        last_index = min(day_of_year_offset(today), last_index)
        if last_index >= 0 and not full_flags[last_index]:
            last_index -= 1

    current_run = 0
    for index in range(last_index, -1, -1):
        if not full_flags[index]:
            break
        current_run += 1

    mean_percentage: Optional[float] = None
    if slots_with_data:
        mean_percentage = sum(slot["percentage"] for slot in slots_with_data) / len(
            slots_with_data
        )

    return {
        "days_with_data": len(slots_with_data),
        "full_days": sum(full_flags),
        "mean_percentage": mean_percentage,
        "current_run": current_run,
        "longest_run": longest_run,
    }
