"""
Executable module for semresolver.

Running:
    python -m semresolver

is equivalent to:
    semresolver
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be imported."""
    sys.stderr.write("semresolver CLI could not be loaded.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from semresolver.__version__ import __version__

        sys.stderr.write(f"semresolver version: {__version__}\n")
    except ImportError:
        sys.stderr.write("semresolver version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m semresolver``.

    Returns:
        Exit code returned by the CLI, or ``1`` if it cannot be imported.
    """
    try:
        # Import lazily so click and rich load only for CLI use
        from semresolver.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
