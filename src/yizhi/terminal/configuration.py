# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from yizhi import configuration
from yizhi.repository.configuration import CONFIGURATION_REPO
from yizhi.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", escape(str(configuration.DATA_PATH)))
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("retry_failed_writes", _enabled(config["retry_failed_writes"]))
    table.add_row("track_contribution", _enabled(config["track_contribution"]))

    console.print(table)


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for the tasks and data blobs",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Go back to the platform data directory",
        ),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    retry_failed_writes: Annotated[
        Optional[bool],
        typer.Option(
            "--retry-failed-writes/--no-retry-failed-writes",
            help="Retry a failed save once before reporting it",
        ),
    ] = None,
    track_contribution: Annotated[
        Optional[bool],
        typer.Option(
            "--track-contribution/--no-track-contribution",
            help="Recompute the yearly contribution after every change",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
    ):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        show_header=show_header,
        log_level=log_level,
        retry_failed_writes=retry_failed_writes,
        track_contribution=track_contribution,
        remove_data_path=remove_data_path,
    )
    CONFIGURATION_REPO.flush()

    view()
