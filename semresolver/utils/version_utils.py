"""
Semantic version helpers for semresolver.

Thin wrappers around the ``semantic_version`` distribution that give the
resolver the three primitives it needs: precedence ordering, range
satisfaction, and "max satisfying" over an ordered candidate list.

Ranges use npm syntax (``^0.1.0``, ``~1.2``, ``<0.1.1``,
``>=1.0.0 <2.0.0``, ``1.x``, ``*``) through :class:`semantic_version.NpmSpec`.
Parsed objects are memoized because the resolver evaluates the same few
strings many times per run.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, List, Optional, Sequence

from semantic_version import NpmSpec, Version

from semresolver.exceptions import InvalidRangeError, InvalidVersionError

__all__ = [
    "parse_version",
    "parse_range",
    "sort_versions",
    "satisfies",
    "max_satisfying",
    "is_lower",
]


@lru_cache(maxsize=4096)
def parse_version(value: str) -> Version:
    """Parse a strict semantic version string.

    Raises:
        InvalidVersionError: If ``value`` is not valid semver.
    """
    try:
        return Version(value)
    except ValueError as exc:
        raise InvalidVersionError(value) from exc


@lru_cache(maxsize=4096)
def parse_range(expression: str) -> NpmSpec:
    """Parse an npm-style range expression.

    Raises:
        InvalidRangeError: If ``expression`` cannot be parsed.
    """
    try:
        return NpmSpec(expression)
    except ValueError as exc:
        raise InvalidRangeError(expression) from exc


def sort_versions(versions: Iterable[str], *, descending: bool = True) -> List[str]:
    """Sort version strings by semver precedence (highest first by default).

    Examples:
        >>> sort_versions(["0.9.0", "0.10.0", "0.2.0"])
        ['0.10.0', '0.9.0', '0.2.0']
    """
    return sorted(set(versions), key=parse_version, reverse=descending)


def satisfies(version: str, expression: str) -> bool:
    """Return True if ``version`` matches the range ``expression``."""
    return parse_range(expression).match(parse_version(version))


def max_satisfying(versions: Sequence[str], expression: str) -> Optional[str]:
    """Return the greatest version matching ``expression``.

    Args:
        versions: Candidates sorted in descending precedence, as produced
            by :func:`sort_versions`.
        expression: Range to match.

    Returns:
        The first (and therefore greatest) matching version, or ``None``.
    """
    spec = parse_range(expression)
    for version in versions:
        if spec.match(parse_version(version)):
            return version
    return None


def is_lower(left: str, right: str) -> bool:
    """Return True if ``left`` has lower precedence than ``right``.

    Examples:
        >>> is_lower("0.9.0", "0.10.0")
        True
    """
    return parse_version(left) < parse_version(right)
