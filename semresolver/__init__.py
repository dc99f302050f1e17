"""
semresolver: semantic-version dependency resolution.

semresolver picks one concrete version per library from a pool of
candidate versions, so that every semver range imposed by the root
requirements and by each selected version is satisfied. Conflicts are
repaired by backtracking: the offending subtree is invalidated and
re-derived under a tighter range.

Example:
    >>> from semresolver import InMemoryRepository, SemverResolver
    >>> repo = InMemoryRepository({"a": {"1.0.0": {}, "1.1.0": {}}})
    >>> SemverResolver({"a": "^1.0.0"}, repo, repo).resolve()
    {'a': '1.1.0'}
"""

from __future__ import annotations

from semresolver.__version__ import __version__
from semresolver.core import (
    DependencyRepository,
    InMemoryRepository,
    SemverResolver,
    VersionRepository,
    resolve,
)
from semresolver.exceptions import (
    DependencyError,
    LibraryNotFoundError,
    ResolutionLimitError,
    RootUnsatisfiableError,
    SemResolverError,
    UnsatisfiableBacktrackedConstraintError,
    UnsatisfiableConstraintError,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "semresolver Contributors"
__license__ = "Apache-2.0"
__description__ = "Semantic-version dependency resolution with backtracking."

__all__ = [
    "__version__",
    "SemverResolver",
    "resolve",
    "VersionRepository",
    "DependencyRepository",
    "InMemoryRepository",
    "SemResolverError",
    "DependencyError",
    "LibraryNotFoundError",
    "UnsatisfiableConstraintError",
    "UnsatisfiableBacktrackedConstraintError",
    "RootUnsatisfiableError",
    "ResolutionLimitError",
]
