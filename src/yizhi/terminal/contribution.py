# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from yizhi.service.contribution import get_contribution_summary
from yizhi.terminal.session import get_ledger
from yizhi.view.views.contribution import contribution_view


def contribution(
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", help="defaults to the current year"),
    ] = None,
) -> None:
    """Show the yearly completion heat-map."""
    ledger = get_ledger()
    view_year = year if year is not None else ledger.active_year

    timeline_data = ledger.get_contribution_timeline_data(view_year)
    summary = get_contribution_summary(timeline_data)

    contribution_view(
        view_year,
        timeline_data,
        summary,
        lambda offset: ledger.is_today_slot(offset, view_year),
    )
