"""Retention decision model.

A RetentionDecision records how one cookbook's versions were partitioned
relative to the version its environment pins.
"""

from pydantic import BaseModel, ConfigDict, Field

from .version import Version


class RetentionDecision(BaseModel):
    """Per-cookbook keep/delete partition.

    Attributes:
        deletion_candidates: Versions strictly older than the pin, newest first.
        to_keep: Newest candidates retained as history.
        to_delete: Older candidates beyond the retention window.
        skipped: True when the cookbook was not evaluated (no pin).
        skip_reason: Why nothing will be deleted, when applicable.
    """

    model_config = ConfigDict(frozen=True)

    deletion_candidates: tuple[Version, ...] = Field(default=())
    to_keep: tuple[Version, ...] = Field(default=())
    to_delete: tuple[Version, ...] = Field(default=())
    skipped: bool = Field(default=False, description="True if cookbook was not evaluated")
    skip_reason: str | None = Field(default=None, description="Reason nothing is deleted")
