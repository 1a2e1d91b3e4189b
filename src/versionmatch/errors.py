# SPDX-License-Identifier: MIT
"""Exceptions raised while parsing versions, specifiers and configuration."""

from __future__ import annotations


class ParseError(ValueError):
    """Raised when version or specifier text is malformed.

    Attributes:
        text: The full input that failed to parse
        position: Zero-based offset of the offending slice within ``text``
        fragment: The offending slice itself
        reason: Human-readable explanation of the failure
    """

    def __init__(self, text: str, reason: str, position: int = 0, fragment: str | None = None):
        self.text = text
        self.reason = reason
        self.position = position
        self.fragment = text[position:] if fragment is None else fragment
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """Return the diagnostic line shown to users."""
        if self.fragment:
            return f"{self.reason}: `{self.text}` at position {self.position} (`{self.fragment}`)"
        return f"{self.reason}: `{self.text}` at position {self.position}"

    def shifted(self, text: str, offset: int) -> ParseError:
        """Return a copy of this error re-anchored within a larger input."""
        return type(self)(text, self.reason, self.position + offset, self.fragment)


class InvalidVersionError(ParseError):
    """Raised when a version string does not follow PEP 440."""


class InvalidSpecifierError(ParseError):
    """Raised when a version specifier or specifier set is malformed."""


class ConfigError(Exception):
    """Raised when ``[tool.versionmatch]`` configuration is invalid."""

    pass
