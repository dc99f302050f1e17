"""
Shared context object for semresolver CLI commands.

The group callback in :mod:`semresolver.cli` fills one instance per
invocation; subcommands receive it through :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from semresolver.config import SemResolverConfig


class SemResolverContext:
    """Global context object for semresolver CLI commands.

    Attributes:
        config_path: Path to the loaded configuration file, if any.
        config: Effective configuration (defaults when no file was found).
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
    """

    __slots__ = ("config_path", "config", "verbose", "color")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.config: SemResolverConfig = SemResolverConfig()
        self.verbose: int = 0
        self.color: bool = True


#: Click decorator for injecting :class:`SemResolverContext` into commands.
pass_context = click.make_pass_decorator(SemResolverContext, ensure=True)
