"""Configuration file loader for semresolver.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``semresolver.toml``: settings under ``[semresolver]`` table
- ``pyproject.toml``: settings under ``[tool.semresolver]`` table

Discovery order:

1. Explicit path from ``--config`` or ``SEMRESOLVER_CONFIG``
2. ``semresolver.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.semresolver]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``semresolver.toml``)::

    [semresolver]
    max_iterations = 500
    output_format = "json"
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from semresolver.exceptions import ConfigError
from semresolver.utils.logger import get_logger
from semresolver.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FORMATS,
)

logger = get_logger("config")

_SECTION = "semresolver"


@dataclass
class SemResolverConfig:
    """Parsed and validated semresolver configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        max_iterations: Cap on resolution passes. ``0`` disables the cap.
        output_format: Default output format of ``semresolver resolve``.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    output_format: str = DEFAULT_OUTPUT_FORMAT

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    @property
    def iteration_limit(self) -> Optional[int]:
        """``max_iterations`` as the resolver expects it (``None`` = no cap)."""
        return self.max_iterations or None

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "max_iterations": self.max_iterations,
            "output_format": self.output_format,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    dedicated = cwd / CONFIG_FILE_NAME
    if dedicated.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, dedicated)
        return dedicated

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", _SECTION, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.semresolver] section.

    Parse errors count as "no section" so a broken unrelated pyproject
    does not block the CLI.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return _SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> SemResolverConfig:
    """Load and validate semresolver configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`SemResolverConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return SemResolverConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(_SECTION, {})
    else:
        section = raw.get(_SECTION, {})

    if not section:
        logger.debug("Config file found but no %s section, using defaults", _SECTION)
        return SemResolverConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is invalid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> SemResolverConfig:
    """Validate a ``[semresolver]`` table and build the config from it.

    Raises:
        ConfigError: Unknown keys, wrong types or out-of-range values.
    """
    config = SemResolverConfig()

    unknown = set(section.keys()) - {"max_iterations", "output_format"}
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    if "max_iterations" in section:
        val = section["max_iterations"]
        # bool is an int subclass; reject it explicitly
        if not isinstance(val, int) or isinstance(val, bool):
            raise ConfigError(
                f"max_iterations must be an integer, got {type(val).__name__}",
                config_path=config_path,
                option="max_iterations",
            )
        if val < 0:
            raise ConfigError(
                f"max_iterations must be zero or positive, got {val}",
                config_path=config_path,
                option="max_iterations",
            )
        config.max_iterations = val

    if "output_format" in section:
        val = section["output_format"]
        if not isinstance(val, str):
            raise ConfigError(
                f"output_format must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="output_format",
            )
        if val.lower() not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, got {val!r}",
                config_path=config_path,
                option="output_format",
            )
        config.output_format = val.lower()

    return config
