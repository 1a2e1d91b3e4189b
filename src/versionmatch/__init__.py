# SPDX-License-Identifier: MIT
"""PEP 440 version and specifier matching.

This package parses version strings and version specifiers, orders versions
following PEP 440 precedence, and matches versions against specifier sets
under an explicit pre-release visibility policy.

Example:
    >>> from versionmatch import parse_version, SpecifierSet
    >>>
    >>> version = parse_version("1.0a1.dev1")
    >>> version < parse_version("1.0a1")
    True
    >>>
    >>> SpecifierSet.parse(">=1.0").matches("2.0b1")
    False
    >>> SpecifierSet.parse(">=1.0").matches("2.0b1", allow_prereleases=True)
    True
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    InvalidSpecifierError,
    InvalidVersionError,
    ParseError,
)
from .segments import (
    LocalSegment,
    PreRelease,
    PreReleaseKind,
)
from .version import (
    Version,
    is_valid_version,
    parse_version,
)
from .compare import (
    compare_versions,
    max_version,
    sort_versions,
    version_key,
)
from .config import (
    MatchConfig,
    PrereleaseMode,
)
from .specifiers import (
    Operator,
    Specifier,
    SpecifierSet,
    VersionPattern,
    parse_specifier,
    parse_specifier_set,
)
from .requires_python import (
    ambiguous_compatible_release_warnings,
    check_requires_python,
    python_satisfies,
)

__all__ = [
    # Errors
    "ParseError",
    "InvalidVersionError",
    "InvalidSpecifierError",
    "ConfigError",
    # Segment model
    "LocalSegment",
    "PreRelease",
    "PreReleaseKind",
    # Version parsing
    "Version",
    "parse_version",
    "is_valid_version",
    # Version comparison
    "compare_versions",
    "version_key",
    "sort_versions",
    "max_version",
    # Configuration
    "MatchConfig",
    "PrereleaseMode",
    # Specifiers
    "Operator",
    "Specifier",
    "SpecifierSet",
    "VersionPattern",
    "parse_specifier",
    "parse_specifier_set",
    # requires-python
    "ambiguous_compatible_release_warnings",
    "check_requires_python",
    "python_satisfies",
]
