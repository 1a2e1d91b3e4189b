# SPDX-License-Identifier: MIT
"""Checks for a project's ``requires-python`` constraint.

Interpreter versions are matched by release only, so a ``3.13.0rc2``
interpreter satisfies ``>=3.13``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .config import MatchConfig
from .specifiers import Operator, Specifier, SpecifierSet
from .version import VersionLike, coerce_version

logger = logging.getLogger(__name__)


def ambiguous_compatible_release_warnings(
    requires_python: Union[SpecifierSet, str],
    source: str = "pyproject.toml",
) -> list[str]:
    """Return warnings for ``~=X.Y`` constraints lacking a patch version.

    ``~=3.10`` means ``>=3.10, <4``, which is rarely what a project wants for
    its Python bound. Only a constraint made of that single specifier is
    reported.

    Args:
        requires_python: The parsed or raw ``requires-python`` value
        source: Where the value came from, used in the message

    Returns:
        Warning messages, empty if the constraint is unambiguous
    """
    if isinstance(requires_python, str):
        requires_python = SpecifierSet.parse(requires_python)
    if len(requires_python) != 1:
        return []

    (spec,) = requires_python
    if spec.operator is not Operator.COMPATIBLE or len(spec.version.release) > 2:
        return []

    lower, upper = spec.bounding_specifiers()
    patched = Specifier(
        Operator.COMPATIBLE, version=spec.version.with_release((*spec.version.release, 0))
    )
    lower_0, upper_0 = patched.bounding_specifiers()
    return [
        f"The `requires-python` specifier (`{spec}`) in `{source}` uses the tilde specifier "
        f"(`~=`) without a patch version. This will be interpreted as `{lower}, {upper}`. "
        f"Did you mean `{patched}` to constrain the version as `{lower_0}, {upper_0}`? "
        "We recommend only using the tilde specifier with a patch version to avoid ambiguity."
    ]


def check_requires_python(
    config: MatchConfig,
    source: str = "pyproject.toml",
) -> Optional[SpecifierSet]:
    """Parse the configured ``requires-python`` and log ambiguity warnings.

    Returns:
        The parsed specifier set, or None if the project declares none

    Raises:
        InvalidSpecifierError: If the value is malformed
    """
    if not config.requires_python.strip():
        return None
    requires_python = SpecifierSet.parse(config.requires_python)
    if config.warn_ambiguous_compatible_release:
        for message in ambiguous_compatible_release_warnings(requires_python, source):
            logger.warning(message)
    return requires_python


def python_satisfies(requires_python: Union[SpecifierSet, str], python_version: VersionLike) -> bool:
    """Return True if an interpreter version satisfies ``requires-python``.

    Only the release is compared; a pre-release interpreter counts as its
    final release.
    """
    if isinstance(requires_python, str):
        requires_python = SpecifierSet.parse(requires_python)
    release = coerce_version(python_version).only_release()
    return requires_python.matches(release, allow_prereleases=True)
