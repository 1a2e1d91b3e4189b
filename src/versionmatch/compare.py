# SPDX-License-Identifier: MIT
"""Version comparison following PEP 440 ordering semantics.

Precedence for versions sharing epoch and release, low to high:
``X.devN < XaM.devN < XaM < X < X.postK.devN < X.postK``.
Local labels only break ties; a version with one sorts after the same
version without.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .version import Version, VersionLike, coerce_version


def compare_versions(version1: VersionLike, version2: VersionLike) -> int:
    """Compare two PEP 440 versions.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        InvalidVersionError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0", "1.0.0")
        0
        >>> compare_versions("1.0a1.dev1", "1.0a1")
        -1
        >>> compare_versions("1.0+local", "1.0")
        1
    """
    key1 = version_key(version1)
    key2 = version_key(version2)
    if key1 == key2:
        return 0
    return -1 if key1 < key2 else 1


def version_key(version: VersionLike) -> tuple:
    """Return a sort key for a version, suitable for sorting.

    Examples:
        >>> sorted(["1.0", "1.0.dev0", "1.0a1", "1.0.post1"], key=version_key)
        ['1.0.dev0', '1.0a1', '1.0', '1.0.post1']
    """
    return coerce_version(version).sort_key


def sort_versions(versions: Iterable[VersionLike], descending: bool = False) -> list[Version]:
    """Parse and sort versions; ``descending=True`` puts the best candidate first."""
    return sorted((coerce_version(v) for v in versions), reverse=descending)


def max_version(versions: Iterable[VersionLike]) -> Optional[Version]:
    """Return the greatest version, or None for an empty iterable."""
    return max((coerce_version(v) for v in versions), default=None)
