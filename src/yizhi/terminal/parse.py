# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from yizhi.model.task import DayTask
from yizhi.time import day_to_ordinal, today


def parse_day_offset(day_param: Optional[str]) -> int:
    """
    Parse a --day value into a signed number of days from today.

    Accepts a day offset ("1", "-1"), a name ("today"/"t", "yesterday"/"y",
    "tomorrow"/"o") or a local date in YYYY-MM-DD format.

    Raises:
        typer.BadParameter: If the value matches none of the formats
    """
    if day_param is None:
        return 0

    day = day_param.strip()

    if re.match(r"^-?\d+$", day):
        return int(day)

    if day == "today" or day == "t":
        return 0
    if day == "yesterday" or day == "y":
        return -1
    if day == "tomorrow" or day == "o":
        return 1

    if re.match(r"^\d{4}-\d{2}-\d{2}$", day):
        try:
            target = pendulum.from_format(day, "YYYY-MM-DD", tz="local")
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")
        return day_to_ordinal(target) - day_to_ordinal(today())

    raise typer.BadParameter("Incorrect day format")


def resolve_position(day_tasks: list[DayTask], position: int) -> DayTask:
    """
    Look up a task by the 1-based position shown in the day list.

    Raises:
        typer.BadParameter: If no task is listed at that position
    """
    if position < 1 or position > len(day_tasks):
        raise typer.BadParameter(
            f"No task at position {position} (the day lists {len(day_tasks)})"
        )
    return day_tasks[position - 1]
