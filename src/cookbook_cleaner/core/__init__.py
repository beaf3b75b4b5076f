"""Core logic for cookbook-cleaner.

This package contains the retention logic and the loop that applies it:
- versions: Version parsing, constraint stripping and sorting
- retention: Keep/delete selection relative to an environment pin
- orchestrator: Per-cookbook evaluate, report and delete loop

versions and retention are pure; the orchestrator reaches the Chef server
only through the ArtifactRegistryClient it is given.
"""

from .orchestrator import CleanupOrchestrator
from .retention import INSUFFICIENT_HISTORY, NOT_PROMOTED, select_retention
from .versions import parse_pinned_version, parse_version, sort_descending

__all__ = [
    "INSUFFICIENT_HISTORY",
    "NOT_PROMOTED",
    "CleanupOrchestrator",
    "parse_pinned_version",
    "parse_version",
    "select_retention",
    "sort_descending",
]
