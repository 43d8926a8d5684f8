"""
Command-line interface for bumpwise.

The ``bumpwise`` group owns the options shared by every command (config
file, verbosity, color), builds the :class:`~bumpwise.context.BumpwiseContext`
and maps outcomes to process exit codes in :func:`main`.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from bumpwise.config import load_config
from bumpwise.__version__ import __version__
from bumpwise.commands.check import check
from bumpwise.context import BumpwiseContext
from bumpwise.exceptions import BumpwiseError, ConfigError
from bumpwise.utils.logger import get_logger, level_from_verbosity, setup_logging
from bumpwise.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")

EXIT_OK = 0
EXIT_UPGRADES_OR_ERROR = 1
EXIT_INTERRUPTED = 130


def _apply_color(color: bool) -> None:
    """Export the color choice as ``NO_COLOR`` and rebuild the console."""
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="BUMPWISE_CONFIG",
    help="bumpwise.toml or pyproject.toml to read defaults from.",
)
@click.option("--verbose", "-v", count=True, help="-v for progress, -vv for every decision.")
@click.option(
    "--color/--no-color",
    default=True,
    envvar="BUMPWISE_COLOR",
    help="Colorize output (NO_COLOR and CI also disable it).",
)
@click.version_option(__version__, prog_name="bumpwise", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int, color: bool) -> None:
    """bumpwise: decide which npm dependency upgrades to accept.

    \b
    Examples:
      bumpwise check -r registry.json
      bumpwise check -r registry.json --target minor
      bumpwise -vv check -r registry.json --target @next
    """
    _apply_color(color)

    level = level_from_verbosity(verbose)
    setup_logging(level=level)
    logger.debug("bumpwise %s, log level %s", __version__, logging.getLevelName(level))

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(EXIT_UPGRADES_OR_ERROR) from exc

    state = BumpwiseContext()
    state.config_path = config or settings.source_path
    state.verbose = verbose
    state.color = color
    state.config = settings
    ctx.obj = state
    logger.debug("Using configuration from %s", state.config_path or "<defaults>")


cli.add_command(check)


def main() -> int:
    """Run the CLI and return its exit code.

    0 means nothing to upgrade, 1 means upgrades are available or an error
    occurred, 2 is a usage error and 130 an interruption.
    """
    try:
        cli(standalone_mode=False)
    except SystemExit as exc:
        if exc.code is None:
            return EXIT_OK
        return exc.code if isinstance(exc.code, int) else EXIT_UPGRADES_OR_ERROR
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("\nOperation cancelled by user")
        return EXIT_INTERRUPTED
    except BumpwiseError as exc:
        print_error(str(exc))
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_UPGRADES_OR_ERROR
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return EXIT_UPGRADES_OR_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
