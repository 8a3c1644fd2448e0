# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import typer
from rich import print

from yizhi import configuration, time
from yizhi.model.contribution import MutationResult
from yizhi.repository.blob_store import FileBlobStore
from yizhi.repository.configuration import CONFIGURATION_REPO
from yizhi.service.ledger import Ledger
from yizhi.terminal.parse import parse_day_offset


def get_ledger(day: Optional[str] = None) -> Ledger:
    """Open the ledger on the data directory and move it to the requested day."""
    config = CONFIGURATION_REPO.get_config()
    ledger = Ledger(
        FileBlobStore(configuration.DATA_PATH),
        track_contribution=config["track_contribution"],
        retry_failed_writes=config["retry_failed_writes"],
    )
    ledger.navigate(parse_day_offset(day))
    return ledger


def report_result(
    result: MutationResult,
    unchanged_message: str,
    day: Optional[pendulum.DateTime] = None,
) -> None:
    """Print the outcome of a mutation and the day's completion when it was recomputed."""
    if not result["changed"]:
        print(f"[yellow]{unchanged_message}[/yellow]")
        return
    if not result["persisted"]:
        print("[red]change could not be saved[/red]")
        raise typer.Exit(1)

    contribution = result["contribution"]
    if day is not None and contribution is not None:
        percentage = contribution[time.day_of_year_offset(day)]
        print(
            f"  {time.datetime_to_display_local_date_str(day)}: {percentage:.0f}% done"
        )
