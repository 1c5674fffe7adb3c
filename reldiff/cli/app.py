from __future__ import annotations

import typer

from reldiff import __version__
from reldiff.cli.commands.compare import batch, compare


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(compare)
app.command()(batch)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Count the releases between two tags of a GitHub repository."""


def main() -> None:
    app()
