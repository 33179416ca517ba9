from __future__ import annotations

import typer
from rich.console import Console

from .logging_handler import configure_logging

app = typer.Typer(
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main(  # noqa: D103
    ctx: typer.Context,
    *,
    dry_run: bool = typer.Option(
        False,  # noqa: FBT003
        help="Enable dry-run mode. If enabled, the task definition is validated and printed but nothing is deployed.",
    ),
    verbose: bool = typer.Option(
        False,  # noqa: FBT003
        "--verbose",
        "-v",
        help="Show debug logs.",
    ),
) -> None:
    ctx.meta["dry_run"] = dry_run
    configure_logging(Console(emoji=False), verbose=verbose)
