"""Cleanup orchestration.

Drives one pass over the cookbook inventory: evaluate each cookbook
against its environment pin, report the decision, and delete the selected
versions only when destructive mode is enabled.

Each cookbook moves through:
    LOADED -> EVALUATED -> REPORTED -> (DELETED | SKIPPED) -> DONE
A cookbook whose versions cannot be parsed goes LOADED -> FAILED -> DONE.
"""

import logging
from collections.abc import Collection

from ..config import RetentionConfig
from ..errors import DeletionFailed, ParseError
from ..models import ArtifactOutcome, ArtifactState, CleanupSummary, DeletionFailure
from ..report import InventoryReport
from ..services.registry import ArtifactRegistryClient
from .retention import select_retention
from .versions import parse_pinned_version, parse_version

logger = logging.getLogger(__name__)


class CleanupOrchestrator:
    """Runs the retention policy over every cookbook on a registry.

    Args:
        registry: Source of inventory and pins, and target of deletions
        retention: Retention count, environment and mode flags
        report: Where per-cookbook results are rendered
    """

    def __init__(
        self,
        registry: ArtifactRegistryClient,
        retention: RetentionConfig,
        report: InventoryReport,
    ) -> None:
        self.registry = registry
        self.retention = retention
        self.report = report

    def run(self, only: Collection[str] | None = None) -> CleanupSummary:
        """Process every cookbook, or only the named ones.

        Inventory and pins are loaded once up front. Parse and deletion
        failures are recorded per cookbook and the run continues.

        Raises:
            RegistryUnavailable: If the inventory or environment cannot be loaded
        """
        environment = self.retention.environment
        logger.info("Loading environment %s to collect version constraints", environment)
        pins = self.registry.load_pinned_versions(environment)
        logger.info("Loading list of cookbooks from Chef server")
        inventory = self.registry.load_inventory()

        names = sorted(inventory)
        if only:
            missing = sorted(set(only) - set(inventory))
            for name in missing:
                logger.warning("Cookbook %s not found on server", name)
            names = [n for n in names if n in only]

        summary = CleanupSummary(
            environment=environment, really_clean=self.retention.really_clean
        )
        for name in names:
            summary.artifacts.append(self.process(name, inventory[name], pins.get(name)))

        self.report.summary(summary)
        return summary

    def evaluate(
        self, name: str, raw_versions: list[str], raw_pin: str | None
    ) -> ArtifactOutcome:
        """Parse a cookbook's versions and pin and select what to keep."""
        outcome = ArtifactOutcome(name=name, pinned=raw_pin, total_versions=len(raw_versions))
        try:
            versions = [parse_version(v) for v in raw_versions]
            pinned = parse_pinned_version(raw_pin) if raw_pin is not None else None
        except ParseError as e:
            logger.warning("Skipping cookbook %s: %s", name, e)
            outcome.error = str(e)
            outcome.advance(ArtifactState.FAILED)
            return outcome

        if pinned is not None:
            outcome.pinned = str(pinned)
        outcome.decision = select_retention(
            versions, pinned, self.retention.historical_versions
        )
        outcome.advance(ArtifactState.EVALUATED)
        return outcome

    def process(
        self, name: str, raw_versions: list[str], raw_pin: str | None
    ) -> ArtifactOutcome:
        """Evaluate, report and (in destructive mode) clean one cookbook."""
        outcome = self.evaluate(name, raw_versions, raw_pin)
        self.report.artifact(outcome)

        decision = outcome.decision
        if decision is not None:
            outcome.advance(ArtifactState.REPORTED)
            if decision.skipped or not decision.to_delete:
                outcome.advance(ArtifactState.SKIPPED)
            elif not self.retention.really_clean:
                self.report.dry_run()
                outcome.advance(ArtifactState.SKIPPED)
            else:
                self._delete(outcome)
                outcome.advance(ArtifactState.DELETED)

        outcome.advance(ArtifactState.DONE)
        self.report.artifact_done()
        return outcome

    def _delete(self, outcome: ArtifactOutcome) -> None:
        """Delete the decided versions, continuing past individual failures."""
        assert outcome.decision is not None
        for version in outcome.decision.to_delete:
            try:
                self.registry.delete_version(outcome.name, version)
            except DeletionFailed as e:
                logger.warning("Failed to delete %s version %s: %s", outcome.name, version, e)
                outcome.failures.append(DeletionFailure(version=str(version), error=str(e)))
                self.report.deletion(outcome.name, version, str(e))
            else:
                outcome.deleted.append(version)
                self.report.deletion(outcome.name, version)
