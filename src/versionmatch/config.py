# SPDX-License-Identifier: MIT
"""Matching configuration read from ``pyproject.toml``.

Example table::

    [tool.versionmatch]
    prerelease = "if-necessary-or-explicit"
    warn-ambiguous-compatible-release = true

A loaded config is passed straight to :meth:`SpecifierSet.filter` and
:meth:`SpecifierSet.best_match`, which apply its ``prerelease`` policy::

    config = MatchConfig.from_pyproject("pyproject.toml")
    SpecifierSet.parse(">=1.0").best_match(["1.0", "2.0b1"], config)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError


class PrereleaseMode(str, Enum):
    """How a resolver decides whether pre-release candidates are visible."""

    DISALLOW = "disallow"
    ALLOW = "allow"
    IF_NECESSARY = "if-necessary"
    EXPLICIT = "explicit"
    IF_NECESSARY_OR_EXPLICIT = "if-necessary-or-explicit"


DEFAULT_PRERELEASE_MODE = PrereleaseMode.IF_NECESSARY_OR_EXPLICIT

_KNOWN_KEYS = {"prerelease", "warn-ambiguous-compatible-release"}


@dataclass(frozen=True)
class MatchConfig:
    """Policy passed explicitly to specifier-set evaluation.

    Attributes:
        prerelease: Pre-release visibility policy
        warn_ambiguous_compatible_release: Warn about ``~=X.Y`` in requires-python
        requires_python: Raw ``[project].requires-python`` value, if any
    """

    prerelease: PrereleaseMode = DEFAULT_PRERELEASE_MODE
    warn_ambiguous_compatible_release: bool = True
    requires_python: str = ""

    @classmethod
    def from_pyproject(cls, pyproject_path: str | Path) -> "MatchConfig":
        """Create a MatchConfig from a pyproject.toml file.

        Raises:
            ConfigError: If the file is not valid TOML or the table is invalid
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(pyproject_path)
        if not path.exists():
            raise FileNotFoundError(f"pyproject.toml not found: {path}")

        try:
            with open(path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject)

    @classmethod
    def from_pyproject_dict(cls, pyproject: dict[str, Any]) -> "MatchConfig":
        """Create a MatchConfig from a parsed pyproject.toml dictionary.

        Raises:
            ConfigError: If ``[tool.versionmatch]`` has unknown keys or bad values
        """
        project = pyproject.get("project", {})
        table = pyproject.get("tool", {}).get("versionmatch", {})
        if not isinstance(table, dict):
            raise ConfigError("[tool.versionmatch] must be a table")

        unknown = sorted(set(table) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown keys in [tool.versionmatch]: {', '.join(unknown)}")

        mode = table.get("prerelease", DEFAULT_PRERELEASE_MODE.value)
        try:
            prerelease = PrereleaseMode(mode)
        except ValueError as e:
            choices = ", ".join(m.value for m in PrereleaseMode)
            raise ConfigError(f"Invalid prerelease mode {mode!r}; expected one of: {choices}") from e

        warn = table.get("warn-ambiguous-compatible-release", True)
        if not isinstance(warn, bool):
            raise ConfigError("warn-ambiguous-compatible-release must be a boolean")

        requires_python = project.get("requires-python", "")
        if not isinstance(requires_python, str):
            raise ConfigError("[project].requires-python must be a string")

        return cls(
            prerelease=prerelease,
            warn_ambiguous_compatible_release=warn,
            requires_python=requires_python,
        )
