# SPDX-License-Identifier: MIT
"""Typed segments that make up a PEP 440 version.

A version is a flat product of optional parts rather than a hierarchy:
epoch, release, pre-release, post-release, dev-release and local label.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

LocalSegment = Union[int, str]

# Spellings accepted for each pre-release kind, after lowercasing
PRE_RELEASE_SPELLINGS = {
    "alpha": "a",
    "a": "a",
    "beta": "b",
    "b": "b",
    "preview": "rc",
    "pre": "rc",
    "rc": "rc",
    "c": "rc",
}

POST_RELEASE_SPELLINGS = ("post", "rev", "r")

DEV_RELEASE_SPELLINGS = ("dev",)


class PreReleaseKind(Enum):
    """Pre-release phase, ordered alpha < beta < release candidate."""

    ALPHA = "a"
    BETA = "b"
    RC = "rc"

    @property
    def rank(self) -> int:
        return _KIND_RANK[self]

    @classmethod
    def from_spelling(cls, spelling: str) -> PreReleaseKind:
        """Map any accepted spelling (``alpha``, ``c``, ``preview``...) to its kind.

        Raises:
            KeyError: If the spelling is not a pre-release tag
        """
        return cls(PRE_RELEASE_SPELLINGS[spelling.lower()])


_KIND_RANK = {
    PreReleaseKind.ALPHA: 0,
    PreReleaseKind.BETA: 1,
    PreReleaseKind.RC: 2,
}


@dataclass(frozen=True, slots=True)
class PreRelease:
    """A pre-release marker such as ``a1`` or ``rc2``.

    Attributes:
        kind: Which pre-release phase this is
        number: Counter within the phase
    """

    kind: PreReleaseKind
    number: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.kind, PreReleaseKind):
            try:
                kind = PreReleaseKind.from_spelling(str(self.kind))
            except KeyError as e:
                raise ValueError(f"Unknown pre-release kind {self.kind!r}") from e
            object.__setattr__(self, "kind", kind)
        if not isinstance(self.number, int):
            raise ValueError(
                f"Pre-release number must be an integer, got {type(self.number).__name__}"
            )
        if self.number < 0:
            raise ValueError(f"Pre-release number must be non-negative, got {self.number}")

    def __str__(self) -> str:
        return f"{self.kind.value}{self.number}"

    def sort_key(self) -> tuple[int, int]:
        return (self.kind.rank, self.number)


def local_segment(token: str) -> LocalSegment:
    """Type a single local-version token: all digits become an int."""
    if token.isdigit():
        return int(token)
    return token.lower()


def format_local(local: tuple[LocalSegment, ...]) -> str:
    return ".".join(str(segment) for segment in local)


def local_sort_key(local: tuple[LocalSegment, ...] | None) -> tuple:
    """Sort key for a local label.

    Absent labels sort lowest. Numeric segments sort above alphanumeric ones
    at the same position. A strict prefix sorts before the longer label.
    """
    if local is None:
        return (0,)
    return (
        1,
        tuple((1, segment, "") if isinstance(segment, int) else (0, 0, segment) for segment in local),
    )
