"""Init command implementation."""

from pathlib import Path

import typer

from ..config import write_config_template
from ..constants import DEFAULT_CONFIG_PATH
from ..errors import ConfigError
from ..output import get_output_context


def init(
    ctx: typer.Context,
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Where to write the config template",
    ),
) -> None:
    """Write a config template for the Chef server connection."""
    out = get_output_context(ctx)

    try:
        config_path = write_config_template(config)
    except ConfigError as e:
        out.warning(str(e))
        return
    except OSError as e:
        out.error(f"Cannot write config: {e}")
        raise typer.Exit(1) from None

    out.success(f"Created config template: {config_path}", {"path": str(config_path)})
    out.print("Edit [bold]server.url[/bold], [bold]client_name[/bold] and [bold]client_key[/bold]")
