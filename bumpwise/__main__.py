"""
Executable module for bumpwise.

Running ``python -m bumpwise`` is equivalent to running ``bumpwise``.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure on stderr."""
    try:
        from bumpwise.__version__ import __version__

        version = __version__
    except Exception:
        version = "<unknown>"

    sys.stderr.write(f"bumpwise version: {version}\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m bumpwise``.

    Returns:
        Exit code returned by the CLI, or 1 if the CLI cannot be imported.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from bumpwise.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
