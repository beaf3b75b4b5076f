"""Run outcome models.

Captures what happened to each cookbook during a cleanup run and the
totals reported at the end.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .decision import RetentionDecision
from .version import Version


class ArtifactState(str, Enum):
    """Lifecycle of a single cookbook within a run."""

    LOADED = "loaded"
    EVALUATED = "evaluated"
    REPORTED = "reported"
    DELETED = "deleted"
    SKIPPED = "skipped"
    FAILED = "failed"
    DONE = "done"


class DeletionFailure(BaseModel):
    """A version whose delete call failed."""

    version: str = Field(description="Version that could not be deleted")
    error: str = Field(description="Cause reported by the server or transport")


class ArtifactOutcome(BaseModel):
    """Result of processing one cookbook.

    Attributes:
        name: Cookbook name.
        pinned: Raw pinned constraint from the environment, if any.
        total_versions: Number of versions on the server.
        decision: Retention decision, or None if versions could not be parsed.
        state: Last state reached.
        history: States passed through, in order.
        deleted: Versions deleted in this run.
        failures: Versions whose deletion failed.
        error: Parse error message when the cookbook could not be evaluated.
    """

    name: str
    pinned: str | None = None
    total_versions: int = 0
    decision: RetentionDecision | None = None
    state: ArtifactState = ArtifactState.LOADED
    history: list[ArtifactState] = Field(default_factory=lambda: [ArtifactState.LOADED])
    deleted: list[Version] = Field(default_factory=list)
    failures: list[DeletionFailure] = Field(default_factory=list)
    error: str | None = None

    def advance(self, state: ArtifactState) -> None:
        """Move to a new state and record it."""
        self.state = state
        self.history.append(state)


class CleanupSummary(BaseModel):
    """Totals for a cleanup run."""

    environment: str
    really_clean: bool = False
    artifacts: list[ArtifactOutcome] = Field(default_factory=list)

    @property
    def evaluated_count(self) -> int:
        return sum(1 for a in self.artifacts if a.decision is not None and not a.decision.skipped)

    @property
    def skipped_count(self) -> int:
        return sum(
            1
            for a in self.artifacts
            if a.error is not None or (a.decision is not None and a.decision.skipped)
        )

    @property
    def planned_deletions(self) -> int:
        return sum(len(a.decision.to_delete) for a in self.artifacts if a.decision is not None)

    @property
    def deleted_count(self) -> int:
        return sum(len(a.deleted) for a in self.artifacts)

    @property
    def failed_count(self) -> int:
        return sum(len(a.failures) for a in self.artifacts)

    def totals(self) -> dict[str, int]:
        """Return the summary counts as a dict."""
        return {
            "cookbooks": len(self.artifacts),
            "evaluated": self.evaluated_count,
            "skipped": self.skipped_count,
            "planned_deletions": self.planned_deletions,
            "deleted": self.deleted_count,
            "failed": self.failed_count,
        }
