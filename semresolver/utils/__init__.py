"""
Utility helpers for semresolver.

This package provides reusable utilities used across semresolver:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers
- Semantic version primitives

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from semresolver.utils.filesystem import safe_read_file

from semresolver.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)

from semresolver.utils.console import (
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

from semresolver.utils.version_utils import (
    is_lower,
    max_satisfying,
    parse_range,
    parse_version,
    satisfies,
    sort_versions,
)

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_for_verbosity",
    # Filesystem
    "safe_read_file",
    # Versions
    "is_lower",
    "max_satisfying",
    "parse_range",
    "parse_version",
    "satisfies",
    "sort_versions",
]
