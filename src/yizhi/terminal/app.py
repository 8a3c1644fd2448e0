# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich import print

from yizhi.terminal import configuration, task
from yizhi.terminal.contribution import contribution
from yizhi.terminal.custom_typer import OrderedAliasedTyperGroup
from yizhi.terminal.session import get_ledger, report_result
from yizhi.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="一只 yīzhí - daily habits and a yearly consistency heat-map",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(configuration.app, name="config, cf")
app.command(name="contribution, c")(contribution)


@app.command("clear")
def clear(
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Confirm wiping every task and completion"),
    ] = False,
) -> None:
    """Delete all tasks and all recorded days."""
    if not yes:
        typer.confirm("Delete every task and every recorded day?", abort=True)

    result = get_ledger().clear_all()
    report_result(result, "nothing to clear")
    print("[green]cleared[/green]")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    一只 yīzhí - daily habits and a yearly consistency heat-map

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
