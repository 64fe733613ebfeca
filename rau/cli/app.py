from __future__ import annotations

import typer

from rau import __version__
from rau.cli.commands.action_cmd import action
from rau.cli.commands.upload_cmd import upload

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(upload)
app.command()(action)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Upload release assets to GitHub, refusing silent name collisions."""


def main() -> None:
    app()
