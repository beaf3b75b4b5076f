"""Parsing and sorting of cookbook versions.

Raw version strings come from the Chef server inventory and environment
constraints; everything past this module works with parsed Version objects.
"""

import re
from collections.abc import Iterable
from functools import cmp_to_key

from ..errors import ParseError
from ..models.version import Version, compare_versions

_SEGMENT_RE = re.compile(r"[0-9]+")
_CONSTRAINT_RE = re.compile(r"\s*(~>|>=|<=|=|>|<)?\s*(.*?)\s*", re.DOTALL)


def parse_version(text: str) -> Version:
    """Parse a dotted version string such as "1.2.3".

    Raises:
        ParseError: If the text is empty or has a non-numeric segment
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError("Empty version string")
    parts = stripped.split(".")
    for part in parts:
        if not _SEGMENT_RE.fullmatch(part):
            raise ParseError(f"Invalid version '{text}': segment '{part}' is not numeric")
    return Version(tuple(int(p) for p in parts))


def parse_pinned_version(constraint: str) -> Version:
    """Parse an environment constraint that pins an exact version.

    Only the equality operator names a single version. "= 1.2.3" and a bare
    "1.2.3" both yield 1.2.3.

    Raises:
        ParseError: If the constraint uses any other operator or the version is malformed
    """
    match = _CONSTRAINT_RE.fullmatch(constraint)
    if match is None:  # pragma: no cover - the pattern matches any string
        raise ParseError(f"Invalid constraint '{constraint}'")
    operator, version_text = match.groups()
    if operator not in (None, "="):
        raise ParseError(f"Constraint '{constraint}' does not pin an exact version")
    return parse_version(version_text)


def sort_descending(versions: Iterable[Version]) -> list[Version]:
    """Sort versions newest first; equal versions keep their input order."""
    return sorted(versions, key=cmp_to_key(compare_versions), reverse=True)
