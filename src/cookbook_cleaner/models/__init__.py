"""Data models for cookbook-cleaner.

This package defines the data structures passed between the retention
selector, the orchestrator and the report:
- Cookbook versions and their three-way ordering (Version, Ordering)
- Per-cookbook keep/delete partition (RetentionDecision)
- Per-cookbook run record and its lifecycle (ArtifactOutcome, ArtifactState)
- Run totals (CleanupSummary)

Version is a frozen dataclass; the rest are Pydantic BaseModel subclasses
so a run can be dumped to JSON for automation.
"""

from .decision import RetentionDecision
from .outcome import ArtifactOutcome, ArtifactState, CleanupSummary, DeletionFailure
from .version import Ordering, Version, compare_versions

__all__ = [
    "ArtifactOutcome",
    "ArtifactState",
    "CleanupSummary",
    "DeletionFailure",
    "Ordering",
    "RetentionDecision",
    "Version",
    "compare_versions",
]
