"""Ordering of build-tool versions.

Prerequisites are ordered the way the build tool orders its own releases:
numeric items compared numerically, qualifiers ranked
``alpha < beta < milestone < rc < snapshot < release < sp`` with unknown
qualifiers after them. ``univers.versions.MavenVersion`` implements that
ordering, so ``3.0-final`` equals ``3`` and ``3.0-SNAPSHOT`` sorts below it.
"""

from __future__ import annotations

from typing import Protocol

from univers.versions import MavenVersion


class VersionComparator(Protocol):
    def compare(self, left: str, right: str) -> int:
        """Return a negative, zero or positive number as *left* is lower, equal or higher.

        Raises:
            ValueError: If either version cannot be parsed.
        """
        ...


def parse_version(text: str) -> MavenVersion:
    """Parse *text*; raises ``ValueError`` for blank or unparseable input."""
    text = text.strip()
    if not text:
        raise ValueError("empty version")
    return MavenVersion(text)


class MavenVersionComparator:
    """``VersionComparator`` with the build tool's own version ordering."""

    def compare(self, left: str, right: str) -> int:
        lhs, rhs = parse_version(left), parse_version(right)
        if lhs < rhs:
            return -1
        return 1 if lhs > rhs else 0
