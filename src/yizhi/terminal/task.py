# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from yizhi.terminal.custom_typer import AliasedTyperGroup
from yizhi.terminal.parse import resolve_position
from yizhi.terminal.session import get_ledger, report_result
from yizhi.view.views import task as task_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DayOption = Annotated[
    Optional[str],
    typer.Option(
        "--day",
        "-d",
        help="day offset (-1), today/t, yesterday/y, tomorrow/o or YYYY-MM-DD",
    ),
]


@app.command("add, a", no_args_is_help=True)
def add(name: str, day: DayOption = None) -> None:
    """Add a task starting on the day."""
    ledger = get_ledger(day)
    result = ledger.add_task(name)
    report_result(result, "task name cannot be empty", ledger.active_day)

    task_report.day_tasks_view(ledger.active_day, ledger.get_visible_tasks())


@app.command("list, l")
def list_tasks(day: DayOption = None) -> None:
    """List the tasks of the day."""
    ledger = get_ledger(day)
    task_report.day_tasks_view(ledger.active_day, ledger.get_visible_tasks())


@app.command("toggle, x", no_args_is_help=True)
def toggle(position: int, day: DayOption = None) -> None:
    """Mark a task done for the day, or undo it."""
    ledger = get_ledger(day)
    day_task = resolve_position(ledger.get_visible_tasks(), position)

    result = ledger.toggle_completion(day_task["task"]["id"])
    report_result(result, "task is not listed on this day", ledger.active_day)

    task_report.day_tasks_view(ledger.active_day, ledger.get_visible_tasks())


@app.command("rename, r", no_args_is_help=True)
def rename(position: int, name: str, day: DayOption = None) -> None:
    """Rename a task. Days already recorded keep the old name."""
    ledger = get_ledger(day)
    day_task = resolve_position(ledger.get_visible_tasks(), position)

    result = ledger.rename_task(day_task["task"]["id"], name)
    report_result(result, "task is not listed on this day", ledger.active_day)

    task_report.day_tasks_view(ledger.active_day, ledger.get_visible_tasks())


@app.command("delete, d", no_args_is_help=True)
def delete(position: int, day: DayOption = None) -> None:
    """Remove a task from the day onwards. Earlier days are kept."""
    ledger = get_ledger(day)
    day_task = resolve_position(ledger.get_visible_tasks(), position)

    result = ledger.soft_delete_task(day_task["task"]["id"])
    report_result(result, "task was already deleted", ledger.active_day)

    if result["task"] is not None:
        task_report.single_task_view(result["task"])
    task_report.day_tasks_view(ledger.active_day, ledger.get_visible_tasks())
