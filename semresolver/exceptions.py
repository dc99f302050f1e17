"""
Custom exception hierarchy for semresolver.

This module defines structured exception types used across semresolver.
All exceptions inherit from :class:`SemResolverError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Resolution failures keep their human-readable wording in ``message``;
callers that need the exact text (tests, tooling) should read that
attribute rather than ``str(exc)``, which also renders ``details``.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class SemResolverError(Exception):
    """Base exception for all semresolver errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


# ---------------------------------------------------------------------------
# Collaborator failures
# ---------------------------------------------------------------------------


class LibraryNotFoundError(SemResolverError):
    """Raised when a repository does not know a library (or version).

    Args:
        library: Name of the library that was looked up.
        version: Version that was looked up, for dependency lookups.
    """

    __slots__ = ("library", "version")

    def __init__(self, library: str, *, version: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)

        super().__init__(f"No such library: {library}", details)

        self.library = library
        self.version = version


class RepositoryFormatError(SemResolverError):
    """Raised when a repository document has an unexpected shape.

    Args:
        message: Error description.
        source: File path (or other origin) of the document.
    """

    __slots__ = ("source",)

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "source", source)

        super().__init__(message, details)

        self.source = source


# ---------------------------------------------------------------------------
# Semantic version primitives
# ---------------------------------------------------------------------------


class InvalidVersionError(SemResolverError):
    """Raised when a version identifier is not valid semver."""

    __slots__ = ("version",)

    def __init__(self, version: str) -> None:
        super().__init__(f"Invalid version: {version}")
        self.version = version


class InvalidRangeError(SemResolverError):
    """Raised when a range expression cannot be parsed."""

    __slots__ = ("range",)

    def __init__(self, range_: str) -> None:
        super().__init__(f"Invalid version range: {range_}")
        self.range = range_


# ---------------------------------------------------------------------------
# Resolution failures
# ---------------------------------------------------------------------------


class DependencyError(SemResolverError):
    """Base class for failures of the resolution engine itself."""


class UnsatisfiableConstraintError(DependencyError):
    """Raised when no known version of a library satisfies a range.

    Args:
        library: Library being resolved.
        range_: The range that no candidate satisfies.
        constraint_source: ``"root"`` or ``"<parent>@<parentVersion>"``.
    """

    __slots__ = ("library", "range", "constraint_source")

    def __init__(self, library: str, range_: str, constraint_source: str) -> None:
        super().__init__(
            "Unable to satisfy version constraint: "
            f"{library}@{range_} from {constraint_source}"
        )
        self.library = library
        self.range = range_
        self.constraint_source = constraint_source


class UnsatisfiableBacktrackedConstraintError(UnsatisfiableConstraintError):
    """Raised when a range written by backtracking has no candidate.

    Args:
        library: Library being resolved.
        range_: The backtracked range.
        constraint_source: ``"root"`` or ``"<parent>@<parentVersion>"``.
        backtracked_due_to: Library whose shared constraint caused the
            backtrack that produced ``range_``.
    """

    __slots__ = ("backtracked_due_to",)

    def __init__(
        self,
        library: str,
        range_: str,
        constraint_source: str,
        backtracked_due_to: str,
    ) -> None:
        super().__init__(library, range_, constraint_source)
        self.message = (
            "Unable to satisfy backtracked version constraint: "
            f"{library}@{range_} from {constraint_source} "
            f"due to shared constraint on {backtracked_due_to}"
        )
        self.args = (self.message,)
        self.backtracked_due_to = backtracked_due_to


class RootUnsatisfiableError(DependencyError):
    """Raised when a conflicting demand comes from the root requirements.

    The root cannot be backtracked, so this failure is terminal.

    Args:
        library: Library being resolved.
        range_: The root's range on ``library``.
        constraining_parent: Parent imposing the tightest bound.
        constraining_version: Committed version of ``constraining_parent``.
    """

    __slots__ = ("library", "range", "constraining_parent", "constraining_version")

    def __init__(
        self,
        library: str,
        range_: str,
        constraining_parent: str,
        constraining_version: Optional[str],
    ) -> None:
        super().__init__(
            "Unable to satisfy version constraint: "
            f"{library}@{range_} from root due to shared constraint from "
            f"{constraining_parent}@{constraining_version}"
        )
        self.library = library
        self.range = range_
        self.constraining_parent = constraining_parent
        self.constraining_version = constraining_version


class ResolutionLimitError(DependencyError):
    """Raised when resolution exceeds its iteration cap."""

    __slots__ = ("max_iterations",)

    def __init__(self, max_iterations: int) -> None:
        super().__init__(
            f"Resolution did not converge within {max_iterations} iterations",
            {"max_iterations": max_iterations},
        )
        self.max_iterations = max_iterations


class ResolverStateError(SemResolverError):
    """Raised when a resolver instance is reused after ``resolve()``."""

    def __init__(self) -> None:
        super().__init__("Resolver has already been used; create a new instance")


# ---------------------------------------------------------------------------
# Ambient failures
# ---------------------------------------------------------------------------


class ConfigError(SemResolverError):
    """Raised when configuration cannot be loaded or is invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class FileOperationError(SemResolverError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
