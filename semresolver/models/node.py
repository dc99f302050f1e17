"""
Resolution graph data models for semresolver.

The resolver's state is a mapping from node key to :class:`LibraryNode`.
Keys are library names plus one synthetic root, represented by the
:data:`ROOT` sentinel. The sentinel is an object rather than a string, so
no library name coming from a caller or a repository can collide with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union


class _RootSentinel:
    """Marker type for the synthetic root of the resolution graph."""

    __slots__ = ()
    _instance: Optional["_RootSentinel"] = None

    def __new__(cls) -> "_RootSentinel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<root>"

    def __str__(self) -> str:
        return "root"

    def __reduce__(self) -> str:
        return "ROOT"


#: Key of the root node in resolution state.
ROOT = _RootSentinel()

#: A key into resolution state.
NodeKey = Union[str, _RootSentinel]


@dataclass
class DependencyEdge:
    """A range constraint from a parent node onto one child library.

    Attributes:
        range: Semver range expression the child must satisfy.
        max_satisfying: Memoized greatest cached version of the child that
            satisfies ``range``. Cleared whenever the child is dropped.
        backtracked_due_to: Set when the edge was written by backtracking;
            names the library whose conflicting demand caused it.
    """

    range: str
    max_satisfying: Optional[str] = None
    backtracked_due_to: Optional[str] = None

    @property
    def is_backtracked(self) -> bool:
        return self.backtracked_due_to is not None


@dataclass
class LibraryNode:
    """A node of the resolution graph.

    The root node never carries a version. A library node with empty
    ``dependencies`` has not had its own constraints applied yet.

    Attributes:
        version: Committed version, or ``None`` for the root.
        dependencies: Outgoing edges keyed by child library name.
    """

    version: Optional[str] = None
    dependencies: Dict[str, DependencyEdge] = field(default_factory=dict)

    @classmethod
    def from_ranges(
        cls,
        ranges: Mapping[str, str],
        *,
        version: Optional[str] = None,
    ) -> "LibraryNode":
        """Build a node with fresh edges for each ``child -> range`` pair."""
        return cls(
            version=version,
            dependencies={
                child: DependencyEdge(range=range_) for child, range_ in ranges.items()
            },
        )

    def describe(self, key: NodeKey) -> str:
        """Return ``"root"`` or ``"<name>@<version>"`` for error messages."""
        if key is ROOT or self.version is None:
            return "root"
        return f"{key}@{self.version}"
