# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yizhi.color import COMPLETED_TASK_COLOR, DELETED_TASK_COLOR
from yizhi.model.task import DayTask, Task
from yizhi.time import (
    datetime_to_display_local_date_str,
    datetime_to_display_local_date_str_optional,
)
from yizhi.view.views.header import header


def day_tasks_view(day: pendulum.DateTime, day_tasks: list[DayTask]) -> None:
    """Display the tasks visible on a day, numbered by their position."""
    header(datetime_to_display_local_date_str(day), "today")

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("#")
    tasks_table.add_column("done")
    tasks_table.add_column("name")
    tasks_table.add_column("since")

    for position, day_task in enumerate(day_tasks, start=1):
        task = day_task["task"]
        name = escape(task["name"])
        if day_task["completed"]:
            name = f"[{COMPLETED_TASK_COLOR}]{name}[/{COMPLETED_TASK_COLOR}]"
        tasks_table.add_row(
            str(position),
            "X" if day_task["completed"] else " ",
            name,
            datetime_to_display_local_date_str(task["created"]),
        )

    console = Console()
    if len(day_tasks) == 0:
        console.print("  no tasks")
        return
    console.print(tasks_table)


def single_task_view(task: Task) -> None:
    """Display detailed view of a single task."""
    header(task["name"], "task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", task["id"])
    task_table.add_row("name", escape(task["name"]))
    task_table.add_row("created", datetime_to_display_local_date_str(task["created"]))
    deleted = datetime_to_display_local_date_str_optional(task["deleted"])
    task_table.add_row(
        "deleted",
        f"[{DELETED_TASK_COLOR}]{deleted}[/{DELETED_TASK_COLOR}]" if deleted else "",
    )

    console = Console()
    console.print(task_table)
