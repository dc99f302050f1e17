"""
Core functionality exports for semresolver.

Importing from here keeps user-facing imports clean and stable:

    from semresolver.core import SemverResolver, InMemoryRepository
"""

from __future__ import annotations

from semresolver.core.resolver import SemverResolver, resolve
from semresolver.core.repository import (
    DependencyRepository,
    InMemoryRepository,
    VersionRepository,
)

__all__ = [
    "SemverResolver",
    "resolve",
    "VersionRepository",
    "DependencyRepository",
    "InMemoryRepository",
]
