# SPDX-License-Identifier: MIT
"""PEP 440 version specifiers and specifier sets.

A specifier is an operator plus an operand: ``>=1.16``, ``==1.*``,
``~=2.1``, ``===foobar``. A specifier set is the comma-separated
conjunction of specifiers, evaluated under a pre-release visibility policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from .config import DEFAULT_PRERELEASE_MODE, MatchConfig, PrereleaseMode
from .errors import InvalidSpecifierError, InvalidVersionError
from .version import Version, VersionLike, coerce_version, parse_version


class Operator(Enum):
    """Comparison operators allowed in a version specifier."""

    ARBITRARY_EQUAL = "==="
    EQUAL = "=="
    NOT_EQUAL = "!="
    COMPATIBLE = "~="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    LESS = "<"
    GREATER = ">"

    @property
    def allows_wildcard(self) -> bool:
        return self in (Operator.EQUAL, Operator.NOT_EQUAL)


# Longest tokens first so that "===" wins over "==" and "<=" over "<"
_OPERATORS_LONGEST_FIRST = sorted(Operator, key=lambda op: len(op.value), reverse=True)


@dataclass(frozen=True, slots=True)
class VersionPattern:
    """The release prefix of a wildcard operand such as ``1!2.3.*``.

    Attributes:
        epoch: Epoch the candidate must carry
        release: Release prefix the candidate must start with
    """

    epoch: int
    release: tuple[int, ...]

    def __str__(self) -> str:
        release = ".".join(str(segment) for segment in self.release)
        prefix = f"{self.epoch}!" if self.epoch else ""
        return f"{prefix}{release}.*"

    def matches(self, version: Version) -> bool:
        """Return True if ``version`` falls under this prefix.

        The candidate's release is zero-padded or truncated to the prefix
        length; its pre, post, dev and local segments are ignored.
        """
        if version.epoch != self.epoch:
            return False
        size = len(self.release)
        candidate = version.release[:size]
        candidate += (0,) * (size - len(candidate))
        return candidate == self.release


@dataclass(frozen=True, slots=True)
class Specifier:
    """A single version constraint.

    Exactly one operand is set: ``literal`` for ``===``, ``pattern`` for
    wildcard ``==``/``!=``, and ``version`` otherwise.

    Attributes:
        operator: Comparison operator
        version: Parsed version operand
        pattern: Release prefix for wildcard comparisons
        literal: Opaque text for arbitrary equality
    """

    operator: Operator
    version: Optional[Version] = None
    pattern: Optional[VersionPattern] = None
    literal: Optional[str] = None

    def __post_init__(self) -> None:
        operands = [x for x in (self.version, self.pattern, self.literal) if x is not None]
        if len(operands) != 1:
            raise ValueError("A specifier needs exactly one operand")
        if (self.literal is not None) != (self.operator is Operator.ARBITRARY_EQUAL):
            raise ValueError("Only the === operator takes a literal operand")
        if self.pattern is not None and not self.operator.allows_wildcard:
            raise ValueError(f"Wildcards are not allowed with {self.operator.value}")
        if self.operator is Operator.COMPATIBLE and self.version is not None:
            if len(self.version.release) < 2:
                raise ValueError("The ~= operator requires at least two release segments")
            if self.version.is_local:
                raise ValueError("The ~= operator does not allow a local version")

    @classmethod
    def parse(cls, specifier: str) -> Specifier:
        """Parse a specifier. See :func:`parse_specifier`."""
        return parse_specifier(specifier)

    def __str__(self) -> str:
        operand = self.literal if self.literal is not None else self.pattern or self.version
        return f"{self.operator.value}{operand}"

    def __contains__(self, version: VersionLike) -> bool:
        return self.matches(version)

    def matches(self, version: VersionLike) -> bool:
        """Return True if ``version`` satisfies this specifier on its own.

        Pre-release visibility is not applied here; see
        :meth:`SpecifierSet.matches`.

        Examples:
            >>> Specifier.parse("==1.0").matches("1.0+local")
            True
            >>> Specifier.parse("~=2.2").matches("3.0")
            False
        """
        candidate = coerce_version(version)
        op = self.operator

        if op is Operator.ARBITRARY_EQUAL:
            return str(candidate).lower() == self.literal.lower()

        if self.pattern is not None:
            matched = self.pattern.matches(candidate)
            return matched if op is Operator.EQUAL else not matched

        spec = self.version
        if op is Operator.EQUAL:
            return _equals(candidate, spec)
        if op is Operator.NOT_EQUAL:
            return not _equals(candidate, spec)

        # Ordered bounds ignore the candidate's local label unless the bound has one
        if not spec.is_local:
            candidate = candidate.without_local()

        if op is Operator.GREATER_EQUAL:
            return candidate >= spec
        if op is Operator.LESS_EQUAL:
            return candidate <= spec
        if op is Operator.LESS:
            if not candidate < spec:
                return False
            # <1.0 must not admit 1.0rc1 or 1.0.dev0
            return not (
                candidate.is_prerelease and not spec.is_prerelease and _same_release(candidate, spec)
            )
        if op is Operator.GREATER:
            if not candidate > spec:
                return False
            # >1.0 must not admit 1.0.post1
            return not (
                candidate.is_postrelease
                and not spec.is_postrelease
                and _same_release(candidate, spec)
            )

        # Compatible release: >=V and ==V.release[:-1].*
        prefix = VersionPattern(spec.epoch, spec.release[:-1])
        return candidate >= spec and prefix.matches(candidate)

    @property
    def has_prerelease_operand(self) -> bool:
        """True if the operand is a pre-release or dev-release version."""
        return self.version is not None and self.version.is_prerelease

    @property
    def pins_stable_release(self) -> bool:
        """True for ``==`` pins (exact or wildcard) onto a stable release."""
        if self.operator is not Operator.EQUAL:
            return False
        return self.pattern is not None or self.version.is_stable

    def bounding_specifiers(self) -> tuple[Specifier, Specifier]:
        """Return the ``(>=V, <U)`` pair a ``~=V`` specifier stands for.

        Raises:
            ValueError: If this is not a compatible-release specifier

        Examples:
            >>> [str(s) for s in Specifier.parse("~=3.10").bounding_specifiers()]
            ['>=3.10', '<4']
        """
        if self.operator is not Operator.COMPATIBLE:
            raise ValueError(f"{self} is not a compatible-release specifier")
        prefix = list(self.version.release[:-1])
        prefix[-1] += 1
        upper = Version(epoch=self.version.epoch, release=tuple(prefix))
        return (
            Specifier(Operator.GREATER_EQUAL, version=self.version),
            Specifier(Operator.LESS, version=upper),
        )


def _equals(candidate: Version, spec: Version) -> bool:
    if spec.is_local:
        return candidate == spec
    return candidate.public_equals(spec)


def _same_release(left: Version, right: Version) -> bool:
    return left.only_release() == right.only_release()


def parse_specifier(specifier: str) -> Specifier:
    """Parse a version specifier such as ``>=1.16``, ``==1.*`` or ``~=2.1``.

    Args:
        specifier: Operator followed by an operand, optionally separated by spaces

    Returns:
        A Specifier with a parsed operand

    Raises:
        InvalidSpecifierError: If the operator or operand is malformed

    Examples:
        >>> str(parse_specifier(">= 1.0-1"))
        '>=1.0.post1'
        >>> parse_specifier("==1.*").matches("1.2.3")
        True
    """
    if not isinstance(specifier, str):
        raise InvalidSpecifierError(
            str(specifier), f"Specifier must be a string, got {type(specifier).__name__}"
        )

    stripped = specifier.strip()
    start = len(specifier) - len(specifier.lstrip())
    if not stripped:
        raise InvalidSpecifierError(specifier, "Specifier cannot be empty", start, "")

    operator = next((op for op in _OPERATORS_LONGEST_FIRST if stripped.startswith(op.value)), None)
    if operator is None:
        choices = ", ".join(op.value for op in Operator)
        raise InvalidSpecifierError(
            specifier, f"Expected a comparison operator (one of {choices})", start
        )

    rest = stripped[len(operator.value) :]
    operand = rest.strip()
    operand_start = start + len(operator.value) + (len(rest) - len(rest.lstrip()))
    if not operand:
        raise InvalidSpecifierError(
            specifier, f"Missing version after {operator.value}", operand_start, ""
        )
    for index, char in enumerate(operand):
        if char.isspace():
            raise InvalidSpecifierError(
                specifier, "Version must not contain whitespace", operand_start + index, char
            )

    if operator is Operator.ARBITRARY_EQUAL:
        return Specifier(operator, literal=operand)

    if operand.endswith(".*"):
        if not operator.allows_wildcard:
            raise InvalidSpecifierError(
                specifier,
                f"Wildcards are only allowed with == and !=, not {operator.value}",
                operand_start + len(operand) - 2,
                ".*",
            )
        prefix = _parse_operand(specifier, operand[:-2], operand_start)
        if prefix.pre is not None or prefix.post is not None or prefix.dev is not None or prefix.is_local:
            raise InvalidSpecifierError(
                specifier,
                "Wildcard patterns may only contain an epoch and release segments",
                operand_start,
                operand,
            )
        return Specifier(operator, pattern=VersionPattern(prefix.epoch, prefix.release))

    version = _parse_operand(specifier, operand, operand_start)
    if operator is Operator.COMPATIBLE:
        if len(version.release) < 2:
            raise InvalidSpecifierError(
                specifier,
                "The ~= operator requires at least two release segments",
                operand_start,
                operand,
            )
        if version.is_local:
            raise InvalidSpecifierError(
                specifier,
                "The ~= operator does not allow a local version",
                operand_start,
                operand,
            )
    return Specifier(operator, version=version)


def _parse_operand(specifier: str, operand: str, offset: int) -> Version:
    try:
        return parse_version(operand)
    except InvalidVersionError as e:
        raise InvalidSpecifierError(specifier, e.reason, offset + e.position, e.fragment) from e


@dataclass(frozen=True, slots=True)
class SpecifierSet:
    """A conjunction of specifiers, e.g. ``>=1.0,<2.0,!=1.3.*``.

    Attributes:
        specifiers: The member specifiers (order-insensitive)
        prerelease_only: True when the set is explicitly aimed at pre-releases,
            which makes pre-release candidates visible by default
    """

    specifiers: frozenset[Specifier] = frozenset()
    prerelease_only: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "specifiers", frozenset(self.specifiers))
        object.__setattr__(self, "prerelease_only", _is_prerelease_only(self.specifiers))

    @classmethod
    def parse(cls, specifiers: str) -> SpecifierSet:
        """Parse comma-separated specifiers; blank text is the empty set.

        Raises:
            InvalidSpecifierError: If any member is malformed or empty
        """
        if not isinstance(specifiers, str):
            raise InvalidSpecifierError(
                str(specifiers), f"Specifiers must be a string, got {type(specifiers).__name__}"
            )
        if not specifiers.strip():
            return cls()

        members: list[Specifier] = []
        offset = 0
        for chunk in specifiers.split(","):
            if not chunk.strip():
                raise InvalidSpecifierError(
                    specifiers, "Empty specifier in set", max(offset - 1, 0), ","
                )
            try:
                members.append(parse_specifier(chunk))
            except InvalidSpecifierError as e:
                raise e.shifted(specifiers, offset) from e
            offset += len(chunk) + 1
        return cls(frozenset(members))

    def __str__(self) -> str:
        return ",".join(sorted(str(s) for s in self.specifiers))

    def __iter__(self):
        return iter(self.specifiers)

    def __len__(self) -> int:
        return len(self.specifiers)

    def __contains__(self, version: VersionLike) -> bool:
        return self.matches(version)

    def __and__(self, other: Union[SpecifierSet, str]) -> SpecifierSet:
        if isinstance(other, str):
            other = SpecifierSet.parse(other)
        if not isinstance(other, SpecifierSet):
            return NotImplemented
        return SpecifierSet(self.specifiers | other.specifiers)

    def matches(self, version: VersionLike, allow_prereleases: bool = False) -> bool:
        """Return True if ``version`` satisfies every member.

        Pre-releases and dev-releases are rejected unless ``allow_prereleases``
        is set or the set itself is :attr:`prerelease_only`. An empty set
        matches everything.

        Examples:
            >>> SpecifierSet.parse(">=1.0").matches("2.0b1")
            False
            >>> SpecifierSet.parse(">=1.0").matches("2.0b1", allow_prereleases=True)
            True
        """
        candidate = coerce_version(version)
        if not self.specifiers:
            return True
        if candidate.is_prerelease and not (allow_prereleases or self.prerelease_only):
            return False
        return all(s.matches(candidate) for s in self.specifiers)

    def filter(
        self,
        versions: Iterable[VersionLike],
        prerelease: Union[PrereleaseMode, MatchConfig] = DEFAULT_PRERELEASE_MODE,
    ) -> list[Version]:
        """Return the candidates visible under ``prerelease``, in input order.

        Args:
            versions: Candidate versions (strings or Version objects)
            prerelease: Pre-release visibility policy, or a MatchConfig whose
                policy applies

        Returns:
            Matching versions
        """
        if isinstance(prerelease, MatchConfig):
            prerelease = prerelease.prerelease
        candidates = [coerce_version(v) for v in versions]
        matching = [v for v in candidates if self.matches(v, allow_prereleases=True)]
        if prerelease is PrereleaseMode.ALLOW:
            return matching

        stable = [v for v in matching if v.is_stable]
        if prerelease is PrereleaseMode.DISALLOW:
            return stable
        if prerelease is PrereleaseMode.IF_NECESSARY:
            return stable or matching

        explicit = matching if self.prerelease_only else stable
        if prerelease is PrereleaseMode.EXPLICIT:
            return explicit
        return explicit or matching

    def best_match(
        self,
        versions: Iterable[VersionLike],
        prerelease: Union[PrereleaseMode, MatchConfig] = DEFAULT_PRERELEASE_MODE,
    ) -> Optional[Version]:
        """Return the greatest candidate visible under ``prerelease``, if any."""
        return max(self.filter(versions, prerelease), default=None)


def _is_prerelease_only(specifiers: frozenset[Specifier]) -> bool:
    # An == pin on a stable release always opts out
    explicit = any(s.has_prerelease_operand for s in specifiers)
    return explicit and not any(s.pins_stable_release for s in specifiers)


def parse_specifier_set(specifiers: str) -> SpecifierSet:
    """Parse comma-separated specifiers. See :meth:`SpecifierSet.parse`."""
    return SpecifierSet.parse(specifiers)
