"""Output formatting for cookbook-cleaner CLI."""

import json
from dataclasses import dataclass, field
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Context for output formatting.

    Human-readable output goes to the console. In JSON mode console output
    is suppressed and callers emit a single JSON document instead.
    """

    console: Console = field(default_factory=Console)
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style, highlight=False)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)

    def warning(self, message: str) -> None:
        """Print a warning in human mode."""
        self.print(f"[yellow]{escape(message)}[/yellow]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{escape(message)}[/green]", highlight=False)


def get_output_context(ctx: typer.Context | None = None) -> OutputContext:
    """Get the output context set up by the CLI main callback.

    Returns a default OutputContext if the callback has not run.
    """
    if ctx is not None and isinstance(ctx.obj, OutputContext):
        return ctx.obj
    return OutputContext()
