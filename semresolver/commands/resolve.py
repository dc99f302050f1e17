"""Resolve command implementation for semresolver.

Loads a JSON repository document, collects the root requirements from the
command line and/or a requirements file, and runs :class:`SemverResolver`
over them.

Typical usage::

    # Positional requirements use ``name@range``
    $ semresolver resolve repository.json test2@^0.1.0 test3@0.1.0

    # Requirements from a JSON object {"name": "range"}
    $ semresolver resolve repository.json -r requirements.json

    # Machine-readable output
    $ semresolver resolve repository.json test2@^0.1.0 --format json
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path
from typing import Dict, Optional, Tuple

from semresolver.constants import OUTPUT_FORMATS, REQUIREMENT_SEPARATOR
from semresolver.context import pass_context, SemResolverContext
from semresolver.core import InMemoryRepository, SemverResolver
from semresolver.exceptions import SemResolverError
from semresolver.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    safe_read_file,
)

logger = get_logger("commands.resolve")


@click.command()
@click.argument(
    "repository",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("requirements", nargs=-1)
@click.option(
    "--requirements",
    "-r",
    "requirements_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object of root requirements ({\"name\": \"range\"}).",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output format (defaults to the configured output_format).",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum resolution passes; 0 disables the limit.",
)
@pass_context
def resolve(
    ctx: SemResolverContext,
    repository: Path,
    requirements: Tuple[str, ...],
    requirements_file: Optional[Path],
    format: Optional[str],
    max_iterations: Optional[int],
) -> None:
    """Resolve REQUIREMENTS (``name@range``) against a REPOSITORY document.

    Exits 0 when a consistent version set was found and 1 when resolution
    failed (unknown library, unsatisfiable or conflicting constraints).
    """
    output_format = (format or ctx.config.output_format).lower()
    if max_iterations is None:
        iteration_limit = ctx.config.iteration_limit
    else:
        iteration_limit = max_iterations or None

    demands = _collect_requirements(requirements, requirements_file)
    if not demands:
        print_warning("No requirements given; nothing to resolve")
        return

    try:
        repo = InMemoryRepository.from_file(repository)
        logger.info("Resolving %d requirement(s) against %s", len(demands), repository)

        resolver = SemverResolver(demands, repo, repo, max_iterations=iteration_limit)
        resolved = resolver.resolve()

    except SemResolverError as e:
        print_error(e.message)
        logger.debug("Resolution failed: %s", e, exc_info=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(resolved, indent=2, sort_keys=True))
    elif output_format == "simple":
        _display_simple(resolved)
    else:
        _display_table(resolved)
        print_success(
            f"Resolved {len(resolved)} library(ies) in {resolver.iterations} "
            f"pass(es), {resolver.backtracks} backtrack(s)"
        )


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------


def parse_requirement(value: str) -> Tuple[str, str]:
    """Split ``name@range`` at the last ``@``.

    Splitting at the last separator keeps scoped names intact.

    Examples:
        >>> parse_requirement("test2@^0.1.0")
        ('test2', '^0.1.0')
        >>> parse_requirement("@scope/pkg@~1.2.0")
        ('@scope/pkg', '~1.2.0')

    Raises:
        click.BadParameter: If either part is empty.
    """
    name, separator, range_ = value.rpartition(REQUIREMENT_SEPARATOR)
    name, range_ = name.strip(), range_.strip()
    if not separator or not name or not range_:
        raise click.BadParameter(
            f"expected name{REQUIREMENT_SEPARATOR}range, got {value!r}",
            param_hint="REQUIREMENTS",
        )
    return name, range_


def _collect_requirements(
    requirements: Tuple[str, ...],
    requirements_file: Optional[Path],
) -> Dict[str, str]:
    """Merge the requirements file with positional requirements.

    Positional requirements win over the file for the same library.
    """
    demands: Dict[str, str] = {}

    if requirements_file is not None:
        demands.update(_read_requirements_file(requirements_file))

    for value in requirements:
        name, range_ = parse_requirement(value)
        demands[name] = range_

    return demands


def _read_requirements_file(path: Path) -> Dict[str, str]:
    """Read a JSON ``{"name": "range"}`` object."""
    try:
        data = json.loads(safe_read_file(path))
    except SemResolverError as e:
        raise click.BadParameter(e.message, param_hint="--requirements") from e
    except json.JSONDecodeError as e:
        raise click.BadParameter(
            f"invalid JSON in {path.name}: {e}", param_hint="--requirements"
        ) from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise click.BadParameter(
            f"{path.name} must be a JSON object of name -> range strings",
            param_hint="--requirements",
        )
    return data


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _display_table(resolved: Dict[str, str]) -> None:
    """Render the resolution as a two-column Rich table sorted by name."""
    if not resolved:
        print_warning("Nothing was resolved")
        return

    rows = [
        {"Library": name, "Version": version}
        for name, version in sorted(resolved.items())
    ]
    print_table(
        rows,
        headers=["Library", "Version"],
        title="Resolved Versions",
        column_styles={"Library": "library", "Version": "version"},
    )


def _display_simple(resolved: Dict[str, str]) -> None:
    """Render one ``name@version`` line per library."""
    console = get_raw_console()
    for name, version in sorted(resolved.items()):
        console.print(f"{name}{REQUIREMENT_SEPARATOR}{version}", markup=False)
