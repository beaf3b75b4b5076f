"""Cookbook version model and its three-way ordering.

Versions are dotted runs of non-negative integers ("1.2", "1.2.3", ...).
Ordering walks segments left to right and treats missing trailing segments
as zero, so "1.0" and "1.0.0" compare equal and "1.9" sorts before "1.10".
"""

from dataclasses import dataclass
from enum import IntEnum
from itertools import zip_longest
from typing import Any

from pydantic_core import core_schema

from ..errors import ParseError


class Ordering(IntEnum):
    """Three-way comparison result."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, eq=False)
class Version:
    """An immutable dotted numeric version."""

    segments: tuple[int, ...]

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        # Accept Version instances as-is; dump to "x.y.z" in JSON
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    def __post_init__(self) -> None:
        if not self.segments:
            raise ParseError("Version must have at least one segment")
        if any(s < 0 for s in self.segments):
            raise ParseError(f"Version segments must be non-negative: {self.segments}")

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)

    def __repr__(self) -> str:
        return f"Version('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) is Ordering.EQUAL

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) is Ordering.LESS

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) is not Ordering.GREATER

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) is Ordering.GREATER

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) is not Ordering.LESS

    def __hash__(self) -> int:
        # Must agree with __eq__: "1.0" and "1.0.0" hash the same
        segments = list(self.segments)
        while len(segments) > 1 and segments[-1] == 0:
            segments.pop()
        return hash(tuple(segments))


def compare_versions(a: Version, b: Version) -> Ordering:
    """Compare two versions segment by segment.

    Args:
        a: Left-hand version
        b: Right-hand version

    Returns:
        Ordering.LESS if a is older than b, Ordering.GREATER if newer,
        Ordering.EQUAL otherwise
    """
    for left, right in zip_longest(a.segments, b.segments, fillvalue=0):
        if left < right:
            return Ordering.LESS
        if left > right:
            return Ordering.GREATER
    return Ordering.EQUAL

