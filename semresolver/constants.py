"""
Centralized constants for semresolver.

This module defines immutable configuration values used across semresolver,
including resolution limits, configuration file names, CLI defaults, and
logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Resolution limits
# ---------------------------------------------------------------------------

#: Default maximum number of resolution passes before giving up.
DEFAULT_MAX_ITERATIONS: Final[int] = 10_000

# ---------------------------------------------------------------------------
# Configuration files
# ---------------------------------------------------------------------------

#: Dedicated configuration file looked up in the working directory.
CONFIG_FILE_NAME: Final[str] = "semresolver.toml"

#: Environment variable holding an explicit configuration path.
CONFIG_ENV_VAR: Final[str] = "SEMRESOLVER_CONFIG"

# ---------------------------------------------------------------------------
# CLI output
# ---------------------------------------------------------------------------

#: Output formats understood by ``semresolver resolve``.
OUTPUT_FORMATS: Final[Sequence[str]] = ("table", "simple", "json")

#: Default output format.
DEFAULT_OUTPUT_FORMAT: Final[str] = "table"

#: Separator between a library name and its range on the command line.
REQUIREMENT_SEPARATOR: Final[str] = "@"

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading repository documents.
MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024  # 50 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
