"""Clean command implementation."""

import logging
from pathlib import Path

import typer

from ..config import load_config
from ..constants import DEFAULT_CONFIG_PATH, EXIT_CONFIG_ERROR, EXIT_REGISTRY_UNAVAILABLE
from ..core import CleanupOrchestrator
from ..errors import ConfigError, RegistryUnavailable
from ..output import get_output_context
from ..report import InventoryReport
from ..services import ChefServerClient

logger = logging.getLogger(__name__)


def clean(
    ctx: typer.Context,
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Config file with Chef server connection settings",
    ),
    historical_versions: int | None = typer.Option(
        None,
        "--historical-versions",
        "-k",
        min=0,
        help="Number of historical cookbook versions to keep [default: 5]",
    ),
    environment: str | None = typer.Option(
        None,
        "--environment",
        "-e",
        help="Environment whose pins protect cookbook versions [default: production]",
    ),
    really_clean: bool = typer.Option(
        False,
        "--really-clean",
        help="Actually delete old versions (default is a dry run)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Print the full list of deletion candidates",
    ),
    cookbook: list[str] | None = typer.Option(
        None,
        "--cookbook",
        help="Only process this cookbook (repeatable)",
    ),
) -> None:
    """Delete cookbook versions older than the environment's pin.

    Keeps the newest --historical-versions versions below each pinned
    version. Nothing is deleted without --really-clean.
    """
    out = get_output_context(ctx)

    try:
        cfg = load_config(config).with_overrides(
            historical_versions=historical_versions,
            environment=environment,
            really_clean=really_clean or None,
            verbose=verbose or None,
        )
        client = ChefServerClient(cfg.server)
    except ConfigError as e:
        out.error(str(e))
        raise typer.Exit(EXIT_CONFIG_ERROR) from None

    report = InventoryReport(out, verbose=cfg.retention.verbose)
    report.header(config, cfg.retention)

    try:
        with client:
            CleanupOrchestrator(client, cfg.retention, report).run(only=cookbook)
    except RegistryUnavailable as e:
        logger.debug("Registry load failed", exc_info=True)
        out.error(f"Chef server unavailable, nothing was deleted: {e}")
        raise typer.Exit(EXIT_REGISTRY_UNAVAILABLE) from None
