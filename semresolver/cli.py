"""
Command-line interface for semresolver.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from semresolver.config import load_config
from semresolver.__version__ import __version__
from semresolver.constants import CONFIG_ENV_VAR
from semresolver.context import SemResolverContext
from semresolver.commands.resolve import resolve
from semresolver.exceptions import ConfigError, SemResolverError
from semresolver.utils.logger import get_logger, level_for_verbosity, setup_logging
from semresolver.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar=CONFIG_ENV_VAR,
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="SEMRESOLVER_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="semresolver",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """semresolver: pick one consistent version per library.

    \b
    Available commands:
      semresolver resolve REPOSITORY NAME@RANGE...

    \b
    Examples:
      semresolver resolve repository.json test2@^0.1.0
      semresolver -v resolve repository.json -r requirements.json

    Use ``semresolver COMMAND --help`` for command-specific options.
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    semresolver_ctx = SemResolverContext()
    semresolver_ctx.config_path = loaded_config.source_path
    semresolver_ctx.config = loaded_config
    semresolver_ctx.color = color
    semresolver_ctx.verbose = verbose
    ctx.obj = semresolver_ctx

    logger.debug("semresolver v%s", __version__)
    logger.debug("Config path: %s", semresolver_ctx.config_path)
    logger.debug("Effective configuration: %s", loaded_config.to_log_dict())


cli.add_command(resolve)


def main() -> int:
    """Main entry point for the semresolver CLI.

    Returns:
        Exit code:
            0   Success
            1   Resolution or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except SemResolverError as exc:
        print_error(str(exc))
        logger.debug(
            "SemResolverError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
