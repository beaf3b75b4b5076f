"""Retention selection for cookbook versions.

Given every version of a cookbook on the server, the version an
environment pins, and how many historical versions to keep, decide which
older versions are kept and which are deleted. Pure and deterministic.
"""

from collections.abc import Iterable

from ..models import Ordering, RetentionDecision, Version, compare_versions
from .versions import sort_descending

NOT_PROMOTED = "not promoted"
INSUFFICIENT_HISTORY = "insufficient history, keeping all"


def select_retention(
    all_versions: Iterable[Version],
    pinned: Version | None,
    retention_count: int,
) -> RetentionDecision:
    """Partition versions older than the pin into keep and delete sets.

    Args:
        all_versions: Every version of the cookbook, in any order
        pinned: Version pinned by the environment, or None if not promoted
        retention_count: Number of historical versions below the pin to keep

    Returns:
        RetentionDecision with candidates, keep and delete lists newest first

    Raises:
        ValueError: If retention_count is negative
    """
    if retention_count < 0:
        raise ValueError(f"retention_count must be >= 0, got {retention_count}")

    ordered = sort_descending(all_versions)

    if pinned is None:
        return RetentionDecision(skipped=True, skip_reason=NOT_PROMOTED)

    # Versions equal to the pin are neither kept nor deleted
    candidates = tuple(v for v in ordered if compare_versions(v, pinned) is Ordering.LESS)

    if len(candidates) < retention_count:
        return RetentionDecision(
            deletion_candidates=candidates,
            to_keep=candidates,
            skip_reason=INSUFFICIENT_HISTORY,
        )

    keep_end = min(retention_count, len(candidates))
    return RetentionDecision(
        deletion_candidates=candidates,
        to_keep=candidates[:keep_end],
        to_delete=candidates[keep_end:],
    )
