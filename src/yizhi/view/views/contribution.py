# SPDX-License-Identifier: MIT

from typing import Callable

import pendulum
from rich.console import Console
from rich.text import Text

from yizhi.color import INTENSITY_COLORS, TODAY_STYLE
from yizhi.model.contribution import ContributionSlot, ContributionSummary
from yizhi.view.views.header import header

MONTH_COLUMN_WIDTH = 5
SLOT_WIDTH = 2
DAY_LABELS = {1, 5, 10, 15, 20, 25, 30}


def get_contribution_symbol(
    slot: ContributionSlot,
    is_future: bool,
) -> tuple[str, str]:
    """
    Get the symbol and style for one day of the heat-map.

    Returns:
        Tuple of (symbol, style)
    """
    if is_future:
        return ("-", "dim")
    if not slot["has_data"]:
        return (" ", "")

    intensity = slot["intensity"]
    color = INTENSITY_COLORS[intensity]
    if intensity <= 0:
        return ("·", color)
    elif intensity == 1:
        return (".", color)
    elif intensity == 2:
        return ("o", color)
    elif intensity == 3:
        return ("O", color)
    else:  # intensity >= 4
        return ("#", color)


def build_month_row(
    month_label: str,
    slots: list[ContributionSlot],
    is_today: Callable[[int], bool],
    now: pendulum.DateTime,
) -> Text:
    row = Text()
    row.append(month_label.ljust(MONTH_COLUMN_WIDTH), style="plum1")

    for slot in slots:
        # Alternating day columns
        bg_style = " on grey23" if slot["day"].day % 2 == 0 else ""

        symbol, symbol_style = get_contribution_symbol(slot, slot["day"] > now)
        if is_today(slot["offset"]):
            symbol_style = f"{symbol_style} {TODAY_STYLE}".strip()

        final_style = (symbol_style + bg_style).strip()
        row.append(symbol, style=final_style)
        row.append(" " * (SLOT_WIDTH - 1), style=bg_style.strip())

    return row


def build_day_label_row() -> Text:
    row = Text(" " * MONTH_COLUMN_WIDTH)
    day = 1
    while day <= 31:
        if day in DAY_LABELS:
            label = str(day)
            row.append(label.ljust(SLOT_WIDTH * len(label)), style="dim")
            day += len(label)
        else:
            row.append(" " * SLOT_WIDTH)
            day += 1
    return row


def contribution_view(
    year: int,
    timeline_data: list[ContributionSlot],
    summary: ContributionSummary,
    is_today: Callable[[int], bool],
) -> None:
    """
    Display a year of completion percentages, one row per month.

        1       5         10        15
    Jan # # o . · #   # # # ...
    Feb # O o o # # # ...
    """
    header(str(year), "contribution")

    console = Console()
    now = pendulum.now("local")

    console.print(build_day_label_row())
    for month in range(1, 13):
        month_slots = [
            slot
            for slot in timeline_data
            if slot["in_year"] and slot["day"].month == month
        ]
        month_label = month_slots[0]["day"].format("MMM")
        console.print(build_month_row(month_label, month_slots, is_today, now))

    mean = summary["mean_percentage"]
    console.print()
    console.print(
        f"  days tracked: {summary['days_with_data']}"
        f"  full days: {summary['full_days']}"
        f"  mean: {'-' if mean is None else f'{mean:.0f}%'}"
        f"  current run: {summary['current_run']}"
        f"  longest run: {summary['longest_run']}"
    )
