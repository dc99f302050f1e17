"""Version and dependency lookup collaborators for the resolver.

The resolver never talks to a registry directly. It asks two collaborators:

- a :class:`VersionRepository` for the versions that exist of a library;
- a :class:`DependencyRepository` for the ranges one version of a library
  places on other libraries.

Both are plain :class:`typing.Protocol` classes, so any object with the
right methods works. :class:`InMemoryRepository` implements both over a
nested mapping and can be loaded from a JSON document of the form::

    {
        "test1": {"0.1.0": {}, "0.1.1": {}},
        "test2": {"0.1.0": {"test1": "^0.1.0"}}
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Protocol,
    Union,
    runtime_checkable,
)

from semresolver.utils.logger import get_logger
from semresolver.utils.filesystem import safe_read_file
from semresolver.exceptions import LibraryNotFoundError, RepositoryFormatError

logger = get_logger("core.repository")

__all__ = [
    "VersionRepository",
    "DependencyRepository",
    "InMemoryRepository",
]

#: ``{library: {version: {child: range}}}``
RepositoryData = Mapping[str, Mapping[str, Mapping[str, str]]]


@runtime_checkable
class VersionRepository(Protocol):
    """Answers which versions of a library exist."""

    def get_versions(self, library: str) -> Iterable[str]:
        """Return every known version identifier of ``library``.

        Raises:
            LibraryNotFoundError: If ``library`` is unknown.
        """
        ...


@runtime_checkable
class DependencyRepository(Protocol):
    """Answers which ranges a library version places on other libraries."""

    def get_dependencies(self, library: str, version: str) -> Mapping[str, str]:
        """Return ``{child: range}`` for ``library`` at ``version``.

        Raises:
            LibraryNotFoundError: If the (library, version) pair is unknown.
        """
        ...


class InMemoryRepository:
    """Dictionary-backed implementation of both lookup protocols.

    Lookups return copies, so callers cannot mutate the repository.

    Args:
        data: ``{library: {version: {child: range}}}``.

    Example::

        >>> repo = InMemoryRepository({"a": {"1.0.0": {"b": "^2.0.0"}}})
        >>> repo.get_versions("a")
        ['1.0.0']
        >>> repo.get_dependencies("a", "1.0.0")
        {'b': '^2.0.0'}
    """

    def __init__(self, data: RepositoryData) -> None:
        self._data: Dict[str, Dict[str, Dict[str, str]]] = {
            library: {
                version: dict(dependencies)
                for version, dependencies in versions.items()
            }
            for library, versions in data.items()
        }

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Any, *, source: str = "<mapping>") -> "InMemoryRepository":
        """Validate an untrusted document and build a repository from it.

        Raises:
            RepositoryFormatError: If ``data`` is not a mapping of
                ``library -> version -> child -> range`` strings.
        """
        if not isinstance(data, Mapping):
            raise RepositoryFormatError(
                "Repository document must be an object of libraries",
                source=source,
            )

        for library, versions in data.items():
            if not isinstance(versions, Mapping):
                raise RepositoryFormatError(
                    f"Versions of {library!r} must be an object",
                    source=source,
                )
            for version, dependencies in versions.items():
                if not isinstance(dependencies, Mapping):
                    raise RepositoryFormatError(
                        f"Dependencies of {library}@{version} must be an object",
                        source=source,
                    )
                for child, range_ in dependencies.items():
                    if not isinstance(range_, str):
                        raise RepositoryFormatError(
                            f"Range of {child!r} in {library}@{version} must be a string",
                            source=source,
                        )

        return cls(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemoryRepository":
        """Load a repository from a JSON document on disk.

        Raises:
            FileOperationError: If the file cannot be read.
            RepositoryFormatError: If it is not valid JSON of the right shape.
        """
        text = safe_read_file(path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RepositoryFormatError(
                f"Invalid JSON in {Path(path).name}: {exc}",
                source=str(path),
            ) from exc

        repository = cls.from_mapping(data, source=str(path))
        logger.debug("Loaded %d librar(y/ies) from %s", len(repository), path)
        return repository

    # ------------------------------------------------------------------
    # Protocol implementation
    # ------------------------------------------------------------------

    def get_versions(self, library: str) -> List[str]:
        try:
            versions = self._data[library]
        except KeyError:
            raise LibraryNotFoundError(library) from None
        return list(versions)

    def get_dependencies(self, library: str, version: str) -> Dict[str, str]:
        try:
            dependencies = self._data[library][version]
        except KeyError:
            raise LibraryNotFoundError(library, version=version) from None
        return dict(dependencies)

    def __contains__(self, library: object) -> bool:
        return library in self._data

    def __len__(self) -> int:
        return len(self._data)
