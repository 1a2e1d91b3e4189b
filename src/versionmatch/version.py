# SPDX-License-Identifier: MIT
"""PEP 440 version parsing.

Supports ``[N!]N(.N)*[{a|b|rc}N][.postN][.devN][+local]`` along with the
spelling variants PEP 440 normalizes:
- Pre-release: a, alpha, b, beta, c, rc, pre, preview (with optional separators)
- Post-release: .postN, .revN, .rN, or a legacy -N after the release
- Dev-release: .devN
- Local version: +label with ., - or _ between segments
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from .errors import InvalidVersionError
from .segments import (
    DEV_RELEASE_SPELLINGS,
    POST_RELEASE_SPELLINGS,
    PRE_RELEASE_SPELLINGS,
    LocalSegment,
    PreRelease,
    PreReleaseKind,
    format_local,
    local_segment,
    local_sort_key,
)

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _LETTERS
_SEPARATORS = frozenset("._-")
_LOCAL_ALPHABET = frozenset(string.ascii_lowercase + string.digits)


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Represents a parsed PEP 440 version.

    Equality, hashing and ordering all use the normalized sort key, so
    ``1.0`` and ``1.0.0`` are equal while ``1.0+local`` is greater than
    ``1.0``. Use :meth:`public_equals` for the local-insensitive relation.

    Attributes:
        epoch: Version namespace; the highest-precedence sort key
        release: Dotted numeric core, trailing zeros preserved for display
        pre: Optional pre-release marker (alpha, beta or release candidate)
        post: Optional post-release counter
        dev: Optional dev-release counter
        local: Optional local label segments (ints or lowercase strings)
    """

    epoch: int = 0
    release: tuple[int, ...] = (0,)
    pre: Optional[PreRelease] = None
    post: Optional[int] = None
    dev: Optional[int] = None
    local: Optional[tuple[LocalSegment, ...]] = None
    _key: tuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "release", tuple(self.release))
        if self.local is not None:
            object.__setattr__(self, "local", tuple(self.local))
        self._validate()
        object.__setattr__(self, "_key", _cmpkey(self))

    def _validate(self) -> None:
        if not self.release:
            raise InvalidVersionError("", "Release must contain at least one segment")
        for name, value in (("epoch", self.epoch), ("post", self.post), ("dev", self.dev)):
            if value is not None and (not isinstance(value, int) or value < 0):
                raise InvalidVersionError(str(value), f"{name} must be a non-negative integer")
        for segment in self.release:
            if not isinstance(segment, int) or segment < 0:
                raise InvalidVersionError(str(segment), "Release segments must be non-negative integers")
        if self.pre is not None and not isinstance(self.pre, PreRelease):
            raise InvalidVersionError(str(self.pre), "pre must be a PreRelease")
        if self.local is not None:
            if not self.local:
                raise InvalidVersionError("+", "Local version label cannot be empty")
            for segment in self.local:
                if isinstance(segment, int):
                    if segment < 0:
                        raise InvalidVersionError(str(segment), "Local segments must be non-negative")
                elif not segment or not set(segment) <= _LOCAL_ALPHABET:
                    raise InvalidVersionError(
                        str(segment), "Local segments must be lowercase alphanumeric"
                    )

    @classmethod
    def parse(cls, version_string: str) -> Version:
        """Parse a version string. See :func:`parse_version`."""
        return parse_version(version_string)

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = self.public
        if self.local is not None:
            version += f"+{format_local(self.local)}"
        return version

    def __hash__(self) -> int:
        return hash(self._key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key != other._key

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key >= other._key

    def public_equals(self, other: Version) -> bool:
        """Return True if both versions are equal ignoring their local labels.

        This is the relation ``==`` specifiers use; it is coarser than ``==``
        on versions themselves.
        """
        return self._key[:-1] == other._key[:-1]

    @property
    def sort_key(self) -> tuple:
        return self._key

    @property
    def public(self) -> str:
        """Return the canonical text without the local label."""
        version = self.base_version
        if self.pre is not None:
            version += str(self.pre)
        if self.post is not None:
            version += f".post{self.post}"
        if self.dev is not None:
            version += f".dev{self.dev}"
        return version

    @property
    def base_version(self) -> str:
        """Return the epoch and release only, e.g. ``1!2.0``."""
        release = ".".join(str(segment) for segment in self.release)
        if self.epoch:
            return f"{self.epoch}!{release}"
        return release

    @property
    def major(self) -> int:
        return self.release[0]

    @property
    def minor(self) -> int:
        return self.release[1] if len(self.release) > 1 else 0

    @property
    def micro(self) -> int:
        return self.release[2] if len(self.release) > 2 else 0

    @property
    def is_prerelease(self) -> bool:
        """Return True for pre-releases and dev-releases."""
        return self.pre is not None or self.dev is not None

    @property
    def is_devrelease(self) -> bool:
        return self.dev is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post is not None

    @property
    def is_local(self) -> bool:
        return self.local is not None

    @property
    def is_stable(self) -> bool:
        return not self.is_prerelease

    def without_local(self) -> Version:
        if self.local is None:
            return self
        return Version(self.epoch, self.release, self.pre, self.post, self.dev)

    def only_release(self) -> Version:
        """Return the version reduced to its epoch and release segments."""
        return Version(self.epoch, self.release)

    def with_release(self, release: Iterable[int]) -> Version:
        return Version(self.epoch, tuple(release), self.pre, self.post, self.dev, self.local)


def _cmpkey(version: Version) -> tuple:
    # Trailing zeros never affect ordering: 1.0 == 1.0.0
    release = version.release
    end = len(release)
    while end > 1 and release[end - 1] == 0:
        end -= 1
    release = release[:end]

    # A dev-only release sorts before every pre-release of the same base
    if version.pre is None and version.post is None and version.dev is not None:
        pre: tuple = (0,)
    elif version.pre is None:
        pre = (2,)
    else:
        pre = (1, *version.pre.sort_key())

    post: tuple = (0,) if version.post is None else (1, version.post)
    dev: tuple = (1,) if version.dev is None else (0, version.dev)

    return (version.epoch, release, pre, post, dev, local_sort_key(version.local))


class _VersionParser:
    """Single left-to-right pass over a version string."""

    def __init__(self, original: str):
        self.original = original
        self.offset = len(original) - len(original.lstrip())
        self.text = original.strip()
        self.pos = 0

    def error(self, reason: str, start: int | None = None, end: int | None = None) -> InvalidVersionError:
        start = self.pos if start is None else start
        end = len(self.text) if end is None else end
        return InvalidVersionError(
            self.original, reason, self.offset + start, self.text[start:end]
        )

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.text[index] if index < len(self.text) else ""

    def take_while(self, alphabet: frozenset) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in alphabet:
            self.pos += 1
        return self.text[start : self.pos]

    def take_number(self) -> int:
        start = self.pos
        digits = self.take_while(_DIGITS)
        if not digits:
            raise self.error("Expected a number", start, start + 1)
        return int(digits)

    def take_counter(self) -> int:
        """Read the optional counter after a tag, e.g. the ``1`` in ``rc-1``."""
        if self.peek() in _SEPARATORS and self.peek() and self.peek(1) in _DIGITS and self.peek(1):
            self.pos += 1
        if self.peek() and self.peek() in _DIGITS:
            return self.take_number()
        return 0

    def take_tag(self, spellings: Iterable[str]) -> str | None:
        """Consume ``[._-]?word`` if word is one of ``spellings``."""
        start = self.pos
        if self.peek() and self.peek() in _SEPARATORS:
            self.pos += 1
        word = self.take_while(_LETTERS).lower()
        if word and word in spellings:
            return word
        self.pos = start
        return None

    def parse(self) -> Version:
        if not self.text:
            raise self.error("Version string cannot be empty", 0, 0)
        for index, char in enumerate(self.text):
            if char.isspace():
                raise self.error("Version must not contain whitespace", index, index + 1)

        if self.peek() in ("v", "V"):
            self.pos += 1

        epoch = 0
        release = self.parse_release()
        if self.peek() == "!":
            if len(release) != 1:
                raise self.error("Malformed epoch: expected a single integer before `!`", 0, self.pos + 1)
            epoch = release[0]
            self.pos += 1
            if not self.peek() or self.peek() not in _DIGITS:
                raise self.error("Malformed epoch: expected a release number after `!`")
            release = self.parse_release()
            if self.peek() == "!":
                raise self.error("Malformed epoch: only one `!` is allowed", self.pos, self.pos + 1)

        pre = self.parse_pre()
        post = self.parse_post()
        dev = None
        if self.take_tag(DEV_RELEASE_SPELLINGS) is not None:
            dev = self.take_counter()
        local = self.parse_local()

        if self.pos < len(self.text):
            raise self.trailing_error(suffixes=(pre, post, dev) != (None, None, None))

        return Version(epoch=epoch, release=release, pre=pre, post=post, dev=dev, local=local)

    def parse_release(self) -> tuple[int, ...]:
        start = self.pos
        if not self.peek() or self.peek() not in _DIGITS:
            if self.peek() == "!":
                raise self.error("Malformed epoch: expected an integer before `!`", start, start + 1)
            if self.peek() == ".":
                raise self.error("Empty release segment", start, start + 1)
            word = self.take_while(_ALNUM)
            raise self.error("Release segment must be numeric", start, start + max(len(word), 1))

        release = [self.take_number()]
        while self.peek() == ".":
            following = self.peek(1)
            if following and following in _DIGITS:
                self.pos += 1
                release.append(self.take_number())
            elif following in ("", ".", "!", "+"):
                raise self.error("Empty release segment", self.pos, self.pos + 2)
            else:
                break
        return tuple(release)

    def parse_pre(self) -> PreRelease | None:
        spelling = self.take_tag(PRE_RELEASE_SPELLINGS)
        if spelling is None:
            return None
        return PreRelease(PreReleaseKind.from_spelling(spelling), self.take_counter())

    def parse_post(self) -> int | None:
        # Legacy implicit post-release: 1.0-1
        if self.peek() == "-" and self.peek(1) and self.peek(1) in _DIGITS:
            self.pos += 1
            return self.take_number()
        if self.take_tag(POST_RELEASE_SPELLINGS) is not None:
            return self.take_counter()
        return None

    def parse_local(self) -> tuple[LocalSegment, ...] | None:
        if self.peek() != "+":
            return None
        self.pos += 1
        segments: list[LocalSegment] = []
        while True:
            start = self.pos
            token = self.take_while(_ALNUM)
            if not token:
                if self.pos >= len(self.text) or self.peek() in _SEPARATORS:
                    raise self.error("Local version segment cannot be empty", start - 1, start + 1)
                raise self.error("Invalid character in local version", start, start + 1)
            segments.append(local_segment(token))
            if self.pos >= len(self.text):
                break
            if self.peek() not in _SEPARATORS:
                raise self.error(
                    "Invalid local version separator; use `.`, `-` or `_`", self.pos, self.pos + 1
                )
            self.pos += 1
        return tuple(segments)

    def trailing_error(self, suffixes: bool) -> InvalidVersionError:
        start = self.pos
        if self.peek() == "!":
            return self.error("Malformed epoch", start, start + 1)
        separator = self.peek() if self.peek() in _SEPARATORS else ""
        self.pos += len(separator)
        word = self.take_while(_LETTERS).lower()
        if not word:
            return self.error("Unexpected trailing characters", start)
        known = set(PRE_RELEASE_SPELLINGS) | set(POST_RELEASE_SPELLINGS) | set(DEV_RELEASE_SPELLINGS)
        if word in known:
            return self.error(
                f"Unexpected `{word}` segment; segments must appear in the order pre, post, dev, local",
                start,
                self.pos,
            )
        if separator == "." and not suffixes:
            return self.error("Release segment must be numeric", start + 1, self.pos)
        return self.error(
            f"Invalid pre-release, post-release or dev-release tag `{word}`", start, self.pos
        )


def parse_version(version_string: str) -> Version:
    """Parse a PEP 440 version string into a Version object.

    Args:
        version_string: Version text such as ``1.0``, ``2!1.0rc1.post2.dev3+ubuntu.1``

    Returns:
        A Version object with normalized components

    Raises:
        InvalidVersionError: If the string is not a valid PEP 440 version

    Examples:
        >>> str(parse_version("1.0-1"))
        '1.0.post1'
        >>> str(parse_version("1.0.0-ALPHA.2"))
        '1.0.0a2'
        >>> parse_version("1!0.1") > parse_version("0.9")
        True
    """
    if not isinstance(version_string, str):
        raise InvalidVersionError(
            str(version_string), f"Version must be a string, got {type(version_string).__name__}"
        )
    return _VersionParser(version_string).parse()


def is_valid_version(version_string: str) -> bool:
    """Check if a string is a valid PEP 440 version.

    Examples:
        >>> is_valid_version("1.0.post1")
        True
        >>> is_valid_version("1.0..1")
        False
    """
    try:
        parse_version(version_string)
    except InvalidVersionError:
        return False
    return True


VersionLike = Union[str, Version]


def coerce_version(version: VersionLike) -> Version:
    return parse_version(version) if isinstance(version, str) else version
