"""Semantic-version dependency resolution for semresolver.

:class:`SemverResolver` turns a set of root demands (``name -> range``)
into one concrete version per library, such that every range imposed by
the root and by every selected version is satisfied.

The engine works by iterative constraint propagation. Each *pass* runs
four steps:

1. **Cache versions** for every library waiting in the calculation queue.
2. **Resolve versions**: for each waiting library, take the tightest
   max-satisfying version across all live edges onto it and check it
   against every other edge. A conflict *backtracks*: the constraining
   parent gains an edge ``<version`` onto the conflicting parent, and that
   parent's subtree is dropped and re-queued.
3. **Cache dependencies** for every newly committed version.
4. **Propagate constraints**: attach the fetched edges, drop stale
   children, re-queue them, and prune the queue to libraries something
   still depends on.

Passes repeat until the calculation queue is empty, or until
``max_iterations`` passes have run. A dependency cycle (``a`` needs ``b``,
``b`` needs ``a``) never empties the queue: each side's commit drops and
re-queues the other, so cycles always end in :class:`ResolutionLimitError`.

All iteration over resolution state follows insertion order (root first).
This makes tie-breaks and the choice between simultaneous conflicts
deterministic: the first parent in state order wins in both cases.

Typical usage::

    from semresolver.core import InMemoryRepository, SemverResolver

    repository = InMemoryRepository.from_file("repository.json")
    resolver = SemverResolver({"test2": "^0.1.0"}, repository, repository)
    print(resolver.resolve())   # {'test2': '0.1.1', 'test1': '0.1.1'}
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

from semresolver.utils.logger import get_logger
from semresolver.constants import DEFAULT_MAX_ITERATIONS
from semresolver.models.node import ROOT, DependencyEdge, LibraryNode, NodeKey
from semresolver.core.repository import DependencyRepository, VersionRepository
from semresolver.utils.version_utils import is_lower, max_satisfying, satisfies, sort_versions
from semresolver.exceptions import (
    ResolutionLimitError,
    ResolverStateError,
    RootUnsatisfiableError,
    UnsatisfiableBacktrackedConstraintError,
    UnsatisfiableConstraintError,
)

logger = get_logger("core.resolver")

__all__ = ["SemverResolver", "resolve"]


def _unique(items: List[str]) -> List[str]:
    """Deduplicate ``items`` keeping first-seen order."""
    return list(dict.fromkeys(items))


class SemverResolver:
    """Resolve semver range constraints into one version per library.

    An instance owns all of its state, queues and caches, so independent
    resolvers can run side by side. :meth:`resolve` may be called exactly
    once per instance.

    Args:
        dependencies: The root demands, ``{library: range}``.
        version_repository: Collaborator answering ``get_versions``.
        dependency_repository: Collaborator answering ``get_dependencies``.
        max_iterations: Maximum number of passes before giving up with
            :class:`ResolutionLimitError`. ``None`` disables the cap.

    Attributes:
        iterations: Passes executed by :meth:`resolve` so far.
        backtracks: Edges written by backtracking so far.

    Example::

        >>> resolver = SemverResolver({"test1": "^0.1.0"}, repo, repo)
        >>> resolver.resolve()
        {'test1': '0.1.1'}
    """

    def __init__(
        self,
        dependencies: Mapping[str, str],
        version_repository: VersionRepository,
        dependency_repository: DependencyRepository,
        *,
        max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        if max_iterations is not None and max_iterations < 1:
            raise ValueError("max_iterations must be a positive integer or None")

        self.version_repository = version_repository
        self.dependency_repository = dependency_repository
        self.max_iterations = max_iterations

        self._state: Dict[NodeKey, LibraryNode] = {
            ROOT: LibraryNode.from_ranges(dependencies),
        }
        self._calculation_queue: List[str] = list(dependencies)
        self._constraint_update_queue: List[str] = []
        self._version_cache: Dict[str, List[str]] = {}
        self._dependency_cache: Dict[Tuple[str, str], Dict[str, str]] = {}

        self._used = False
        self.iterations = 0
        self.backtracks = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self) -> Dict[str, str]:
        """Run the engine to completion.

        Returns:
            ``{library: version}`` for every library in the resolved graph.

        Raises:
            LibraryNotFoundError: A collaborator does not know a library.
            UnsatisfiableConstraintError: A range matches no known version.
            UnsatisfiableBacktrackedConstraintError: A range produced by
                backtracking matches no known version.
            RootUnsatisfiableError: A conflict would require changing one of
                the root demands.
            ResolutionLimitError: ``max_iterations`` passes were exceeded.
            ResolverStateError: The instance was already used.
        """
        if self._used:
            raise ResolverStateError()
        self._used = True

        logger.debug("Resolving %d root demand(s)", len(self._calculation_queue))

        while self._calculation_queue:
            if self.max_iterations is not None and self.iterations >= self.max_iterations:
                logger.warning(
                    "Resolution stopped after %d iteration(s) with %d library(ies) queued",
                    self.iterations,
                    len(self._calculation_queue),
                )
                raise ResolutionLimitError(self.max_iterations)

            self.iterations += 1
            logger.debug(
                "Pass %d: %d library(ies) queued for calculation",
                self.iterations,
                len(self._calculation_queue),
            )

            self._cache_versions()
            self._resolve_versions()
            self._cache_dependencies()
            self._refill_queues()

        resolved = {
            name: node.version
            for name, node in self._state.items()
            if name is not ROOT and node.version is not None
        }
        logger.info(
            "Resolved %d library(ies) in %d pass(es) with %d backtrack(s)",
            len(resolved),
            self.iterations,
            self.backtracks,
        )
        return resolved

    # ------------------------------------------------------------------
    # Step 1: versions
    # ------------------------------------------------------------------

    def _cache_versions(self) -> None:
        """Fetch and sort the version list of every newly queued library."""
        for library in _unique(self._calculation_queue):
            if library in self._version_cache:
                continue
            versions = self.version_repository.get_versions(library)
            self._version_cache[library] = sort_versions(versions)
            logger.debug(
                "Cached %d version(s) of %s",
                len(self._version_cache[library]),
                library,
            )

    # ------------------------------------------------------------------
    # Step 2: resolution
    # ------------------------------------------------------------------

    def _resolve_versions(self) -> None:
        """Compute and commit a version for each library in the batch."""
        batch = _unique(self._calculation_queue)
        self._calculation_queue = []

        for library in batch:
            # Re-queued by a backtrack earlier in this batch; the data
            # needed to calculate it is about to change.
            if library in self._calculation_queue:
                continue

            version = self._max_satisfying(library)
            if version is None:
                continue

            self._state[library] = LibraryNode(version=version)
            self._constraint_update_queue.append(library)
            logger.debug("Committed %s@%s", library, version)

        # Some of the committed libraries may have been dropped again by a
        # later backtrack in the same batch.
        self._constraint_update_queue = [
            library
            for library in self._constraint_update_queue
            if library in self._state
        ]

    def _collect_edges(self, library: str) -> List[Tuple[NodeKey, DependencyEdge]]:
        """Return every live edge onto ``library``, memoizing its maximum.

        Raises:
            UnsatisfiableConstraintError: An edge's range matches nothing.
            UnsatisfiableBacktrackedConstraintError: Same, for an edge that
                was written by backtracking.
        """
        versions = self._version_cache[library]
        edges: List[Tuple[NodeKey, DependencyEdge]] = []

        for parent, node in self._state.items():
            edge = node.dependencies.get(library)
            if edge is None:
                continue

            if edge.max_satisfying is None:
                edge.max_satisfying = max_satisfying(versions, edge.range)
                if edge.max_satisfying is None:
                    source = node.describe(parent)
                    if edge.backtracked_due_to is not None:
                        raise UnsatisfiableBacktrackedConstraintError(
                            library, edge.range, source, edge.backtracked_due_to
                        )
                    raise UnsatisfiableConstraintError(library, edge.range, source)

            edges.append((parent, edge))

        return edges

    def _max_satisfying(self, library: str) -> Optional[str]:
        """Return the version to commit for ``library``, or ``None``.

        ``None`` means either that nothing live depends on ``library`` any
        more, or that a conflict was found and a backtrack was queued.
        """
        edges = self._collect_edges(library)
        if not edges:
            logger.debug("Skipping %s: no live constraints", library)
            return None

        # Tightest bound; ties keep the first parent in state order
        constraining_parent, lowest = edges[0][0], edges[0][1].max_satisfying
        for parent, edge in edges[1:]:
            if is_lower(edge.max_satisfying, lowest):
                constraining_parent, lowest = parent, edge.max_satisfying

        for parent, edge in edges:
            if parent == constraining_parent or satisfies(lowest, edge.range):
                continue

            constraining_node = self._state[constraining_parent]
            parent_version = self._state[parent].version
            if parent_version is None:
                raise RootUnsatisfiableError(
                    library,
                    edge.range,
                    str(constraining_parent),
                    constraining_node.version,
                )

            self._backtrack(library, constraining_parent, parent, parent_version)
            return None

        return lowest

    def _backtrack(
        self,
        library: str,
        constraining_parent: NodeKey,
        conflicting_parent: str,
        conflicting_version: str,
    ) -> None:
        """Force ``conflicting_parent`` below its current version.

        The constraining parent gains an edge ``<conflicting_version`` onto
        the conflicting parent, which is then dropped and re-queued.

        When the root is the constraining parent, the new edge replaces the
        root's own demand on the conflicting parent, so the result may fall
        outside the range the caller asked for.
        """
        range_ = f"<{conflicting_version}"
        logger.info(
            "Backtracking %s below %s: its range on %s conflicts with %s",
            conflicting_parent,
            conflicting_version,
            library,
            self._state[constraining_parent].describe(constraining_parent),
        )

        self._state[constraining_parent].dependencies[conflicting_parent] = DependencyEdge(
            range=range_,
            backtracked_due_to=library,
        )
        self.backtracks += 1

        self.drop_library(conflicting_parent)
        self._calculation_queue.append(conflicting_parent)

    # ------------------------------------------------------------------
    # Step 3: dependencies
    # ------------------------------------------------------------------

    def _cache_dependencies(self) -> None:
        """Fetch the dependency ranges of every newly committed version."""
        for library in _unique(self._constraint_update_queue):
            key = (library, self._state[library].version)
            if key in self._dependency_cache:
                continue
            self._dependency_cache[key] = dict(
                self.dependency_repository.get_dependencies(*key)
            )

    # ------------------------------------------------------------------
    # Step 4: propagation
    # ------------------------------------------------------------------

    def _refill_queues(self) -> None:
        """Apply fetched constraints, then prune the calculation queue."""
        queued = _unique(self._constraint_update_queue)
        self._constraint_update_queue = []
        for library in queued:
            self._update_constraints(library)

        self._clean_calculation_queue()

    def _update_constraints(self, library: str) -> None:
        """Attach the cached dependency edges of ``library``'s version."""
        # Dropped by an earlier update in this pass; its constraints no
        # longer apply.
        node = self._state.get(library)
        if node is None:
            return

        ranges = self._dependency_cache[(library, node.version)]
        node.dependencies = LibraryNode.from_ranges(ranges).dependencies

        for child in ranges:
            self.drop_library(child)
            self._calculation_queue.append(child)

    def _clean_calculation_queue(self) -> None:
        """Keep only queued libraries that some live node depends on."""
        referenced = set()
        for node in self._state.values():
            referenced.update(node.dependencies)

        self._calculation_queue = [
            library for library in self._calculation_queue if library in referenced
        ]

    # ------------------------------------------------------------------
    # Cascading invalidation
    # ------------------------------------------------------------------

    def drop_library(self, library: str) -> None:
        """Remove ``library`` and, recursively, its former children.

        Every former child is re-queued for calculation. Memoized maxima on
        surviving edges onto a dropped library are cleared. Dropping an
        absent library (or the root) is a no-op.
        """
        if library is ROOT or library not in self._state:
            return

        node = self._state.pop(library)
        for other in self._state.values():
            edge = other.dependencies.get(library)
            if edge is not None:
                edge.max_satisfying = None

        for child in node.dependencies:
            self.drop_library(child)
            self._calculation_queue.append(child)


def resolve(
    dependencies: Mapping[str, str],
    repository: object,
    *,
    max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS,
) -> Dict[str, str]:
    """Resolve ``dependencies`` against one object serving both lookups.

    Convenience wrapper for the common case of a single repository, such
    as :class:`~semresolver.core.repository.InMemoryRepository`.

    Raises:
        TypeError: If ``repository`` does not implement both protocols.
    """
    if not isinstance(repository, VersionRepository) or not isinstance(
        repository, DependencyRepository
    ):
        raise TypeError(
            "repository must provide get_versions() and get_dependencies()"
        )

    return SemverResolver(
        dependencies,
        repository,
        repository,
        max_iterations=max_iterations,
    ).resolve()
