"""Cookbook cleaner CLI: retire stale cookbook versions from a Chef server."""

import typer
from rich.console import Console

from . import __version__
from .commands import clean, init
from .logging import configure_logging
from .output import OutputContext


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cookbook-cleaner {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="cookbook-cleaner",
    help="Delete old cookbook versions while keeping a window below each environment pin",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log warnings and errors",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Cookbook cleaner - retire stale cookbook versions."""
    configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color)
    console = Console(no_color=no_color, force_terminal=False if no_color else None)
    ctx.obj = OutputContext(console=console, json_mode=json_output)


app.command()(clean)
app.command()(init)


if __name__ == "__main__":
    app()
