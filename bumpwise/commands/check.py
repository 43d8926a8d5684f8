"""Check command implementation for bumpwise.

Reads a ``package.json``-shaped manifest and an offline registry snapshot,
resolves every dependency against the chosen target and reports the
upgrades that would be accepted. Nothing is written back to the manifest.

Typical usage::

    # Upgrades within the current major version
    $ bumpwise check package.json --registry registry.json --target minor

    # Follow a dist-tag
    $ bumpwise check --registry registry.json --target @next

    # Machine-readable output: {"name": "new declaration"}
    $ bumpwise check --registry registry.json --format json
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from bumpwise.config import BumpwiseConfig
from bumpwise.context import BumpwiseContext, pass_context
from bumpwise.core import (
    Accepted,
    Resolution,
    UpgradeOptions,
    UpgradeResolver,
    load_manifest,
    load_registry_snapshot,
)
from bumpwise.exceptions import BumpwiseError
from bumpwise.utils import (
    colorize_update_type,
    get_logger,
    get_update_type,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default="package.json",
)
@click.option(
    "--registry",
    "-r",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Registry snapshot: JSON object of package name to registry document.",
)
@click.option(
    "--target",
    "-t",
    default=None,
    help="latest, newest, greatest, minor, patch, semver or @<dist-tag>.",
)
@click.option(
    "--pre/--no-pre",
    default=None,
    help="Include or exclude prerelease versions.",
)
@click.option(
    "--filter",
    "filter_",
    multiple=True,
    help="Only check matching packages (globs or /regex/; repeatable).",
)
@click.option(
    "--reject",
    multiple=True,
    help="Skip matching packages (globs or /regex/; repeatable).",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--outdated-only",
    is_flag=True,
    help="Show only packages with an accepted upgrade.",
)
@pass_context
def check(
    ctx: BumpwiseContext,
    file: Path,
    registry: Path,
    target: Optional[str],
    pre: Optional[bool],
    filter_: Tuple[str, ...],
    reject: Tuple[str, ...],
    format: str,
    outdated_only: bool,
) -> None:
    """Check a manifest for dependency upgrades.

    CLI flags override values from the configuration file.

    Exits:
        0 if nothing can be upgraded, 1 if upgrades are available or an
        error occurred.
    """
    try:
        options = _build_options(ctx.config, target, pre, filter_, reject)
        has_upgrades = _run_check(file, registry, options, format, outdated_only)
        sys.exit(1 if has_upgrades else 0)

    except BumpwiseError as e:
        print_error(f"{e}")
        sys.exit(1)


def _build_options(
    config: Optional[BumpwiseConfig],
    target: Optional[str],
    pre: Optional[bool],
    filter_: Tuple[str, ...],
    reject: Tuple[str, ...],
) -> UpgradeOptions:
    """Merge configuration-file values with CLI flags."""
    config = config or BumpwiseConfig()
    return UpgradeOptions(
        target=target if target is not None else config.target,
        pre=pre if pre is not None else config.pre,
        filter=list(filter_) if filter_ else config.filter,
        reject=list(reject) if reject else config.reject,
    )


def _run_check(
    file: Path,
    registry_path: Path,
    options: UpgradeOptions,
    format: str,
    outdated_only: bool,
) -> bool:
    """Resolve every dependency and display the results.

    Returns:
        ``True`` if any dependency has an accepted upgrade.
    """
    show_progress = format != "json"

    dependencies = load_manifest(file)
    if not dependencies:
        if show_progress:
            print_warning("No dependencies found in manifest")
        return False

    registry = load_registry_snapshot(registry_path)
    missing = sorted(set(dependencies) - set(registry))
    if missing:
        logger.warning("No registry data for: %s", ", ".join(missing))

    resolver = UpgradeResolver(options)
    resolutions = list(resolver.explain_all(dependencies, registry))
    upgrades = [r for r in resolutions if r.accepted]

    if format == "json":
        print_json({r.name: r.upgraded for r in upgrades})
        return bool(upgrades)

    shown = upgrades if outdated_only else resolutions
    if format == "table":
        _display_table(shown, options)
    else:
        _display_simple(shown)

    if upgrades:
        print_warning(f"\n{len(upgrades)} package(s) can be upgraded")
    else:
        print_success("\nAll dependencies match the target")

    return bool(upgrades)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_table(resolutions: List[Resolution], options: UpgradeOptions) -> None:
    """Render resolutions as a Rich table."""
    data = [_create_table_row(r) for r in resolutions]

    column_styles: Dict[str, Dict[str, Any]] = {
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Current": {"justify": "center", "style": "dim"},
        "Upgrade": {"justify": "center", "style": "bold green"},
        "Update Type": {"justify": "center"},
    }

    print_table(
        data,
        headers=["Package", "Current", "Upgrade", "Update Type"],
        title=f"Dependency Upgrades (target: {options.target})",
        column_styles=column_styles,
    )


def _create_table_row(resolution: Resolution) -> Dict[str, str]:
    if not resolution.accepted:
        return {
            "Package": resolution.name,
            "Current": resolution.declared.raw or "-",
            "Upgrade": "-",
            "Update Type": "-",
        }

    version = (
        resolution.decision.version
        if isinstance(resolution.decision, Accepted)
        else None
    )
    update_type = get_update_type(resolution.declared.version, version)
    return {
        "Package": resolution.name,
        "Current": resolution.declared.raw or "-",
        "Upgrade": resolution.upgraded or "-",
        "Update Type": colorize_update_type(update_type),
    }


def _display_simple(resolutions: List[Resolution]) -> None:
    for resolution in resolutions:
        if resolution.accepted:
            click.echo(
                f"{resolution.name}: {resolution.declared.raw} -> {resolution.upgraded}"
            )
        else:
            click.echo(f"{resolution.name}: {resolution.declared.raw} (no upgrade)")
