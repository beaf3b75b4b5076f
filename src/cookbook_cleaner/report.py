"""Human-readable and JSON reporting of cleanup runs.

The format_* functions are pure and return plain lines; InventoryReport
prints them through an OutputContext. In JSON mode nothing is printed per
cookbook and the whole CleanupSummary is emitted once at the end.
"""

from pathlib import Path

from rich.markup import escape

from .config import RetentionConfig
from .models import ArtifactOutcome, CleanupSummary, Version
from .output import OutputContext

BANNER = (
    "************************************",
    "*         Cookbook Cleaner         *",
    "************************************",
)


def _version_list(versions: tuple[Version, ...] | list[Version]) -> str:
    return "[" + ", ".join(str(v) for v in versions) + "]"


def format_header(config_path: Path, retention: RetentionConfig) -> list[str]:
    """Lines printed once before any cookbook is processed."""
    mode = "destructive (--really-clean)" if retention.really_clean else "dry run"
    return [
        *BANNER,
        "",
        f"Configuration: {config_path}",
        f"Historical Cookbook Versions to Keep: {retention.historical_versions}",
        f"Environment for constraint checking: {retention.environment}",
        f"Mode: {mode}",
        "",
    ]


def format_artifact(outcome: ArtifactOutcome, verbose: bool = False) -> list[str]:
    """Lines describing one cookbook's retention decision.

    Args:
        outcome: Cookbook outcome after evaluation
        verbose: Include the full candidate and to-delete lists; otherwise
            only their counts are printed

    Returns:
        Report lines, without deletion results
    """
    lines = [f"Cookbook: {outcome.name}"]
    lines.append(f"Current Promoted Version: {outcome.pinned or 'not promoted'}")

    if outcome.error is not None:
        lines.append(f"- Skipping: {outcome.error}")
        return lines

    decision = outcome.decision
    if decision is None or decision.skipped:
        reason = decision.skip_reason if decision is not None else "not evaluated"
        lines.append(f"Cookbook {reason}, skipping...")
        return lines

    lines.append(f"- Total Versions on Server: {outcome.total_versions}")
    lines.append(
        f"- Versions older than {outcome.pinned}: {len(decision.deletion_candidates)}"
    )
    if verbose:
        lines.append(f"- Deletion candidates: {_version_list(decision.deletion_candidates)}")

    if not decision.to_delete:
        if decision.skip_reason:
            lines.append(f"- {decision.skip_reason.capitalize()}")
        if decision.to_keep:
            lines.append(f"- Keeping versions {_version_list(decision.to_keep)}")
        return lines

    lines.append(f"- Keeping versions {_version_list(decision.to_keep)}")
    lines.append(f"- Versions fitting deletion criteria: {len(decision.to_delete)}")
    if verbose:
        lines.append(f"- Versions to delete: {_version_list(decision.to_delete)}")
    return lines


def format_summary(summary: CleanupSummary) -> list[str]:
    """Closing lines with run totals."""
    totals = summary.totals()
    lines = [
        "Summary:",
        f"- Cookbooks on server: {totals['cookbooks']}",
        f"- Evaluated: {totals['evaluated']}, skipped: {totals['skipped']}",
        f"- Versions fitting deletion criteria: {totals['planned_deletions']}",
    ]
    if summary.really_clean:
        lines.append(f"- Deleted: {totals['deleted']}, failed: {totals['failed']}")
    else:
        lines.append("- Dry run: nothing was deleted")
    return lines


class InventoryReport:
    """Prints cleanup progress through an OutputContext."""

    def __init__(self, output: OutputContext, verbose: bool = False) -> None:
        self.output = output
        self.verbose = verbose

    def header(self, config_path: Path, retention: RetentionConfig) -> None:
        for line in format_header(config_path, retention):
            self.output.print(escape(line))

    def artifact(self, outcome: ArtifactOutcome) -> None:
        for line in format_artifact(outcome, verbose=self.verbose):
            self.output.print(escape(line))

    def dry_run(self) -> None:
        self.output.print("-- Skipping deletions as --really-clean not specified", style="cyan")

    def deletion(self, name: str, version: Version, error: str | None = None) -> None:
        """Report the result of a single delete call."""
        if error is None:
            self.output.print(f"-- Deleted {escape(name)} version {version}", style="green")
        else:
            self.output.print(
                f"-- Failed to delete {escape(name)} version {version}: {escape(error)}",
                style="red",
            )

    def artifact_done(self) -> None:
        self.output.print("")

    def summary(self, summary: CleanupSummary) -> None:
        """Print totals, or the whole run as JSON in JSON mode."""
        if self.output.json_mode:
            self.output.print_json(
                {**summary.model_dump(mode="json"), "totals": summary.totals()}
            )
            return
        for line in format_summary(summary):
            self.output.print(line)
