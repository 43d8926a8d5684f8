"""
Rich console output for the bumpwise CLI.

Everything the ``check`` command shows a user goes through here; diagnostics
go through :mod:`bumpwise.utils.logger` instead. The console is created
lazily and dropped by :func:`reconfigure_console` whenever ``--color`` or
``NO_COLOR`` changes.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Mapping, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

BUMPWISE_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
    }
)

#: Markup color per :func:`~bumpwise.utils.version_utils.get_update_type` label.
UPDATE_TYPE_COLORS: Mapping[str, str] = {
    "major": "red",
    "minor": "yellow",
    "patch": "green",
    "prerelease": "magenta",
    "new": "cyan",
    "downgrade": "red",
}

_console: Optional[Console] = None


def _should_use_color() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    global _console

    if _console is None:
        use_color = _should_use_color()
        _console = Console(theme=BUMPWISE_THEME, no_color=not use_color, highlight=use_color)
    return _console


def reconfigure_console() -> None:
    """Forget the console so the next message re-reads the color settings."""
    global _console
    _console = None


def _status(style: str, prefix: str, message: str) -> None:
    _get_console().print(f"{prefix} {message}", style=style)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _status("success", prefix, message)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _status("error", prefix, message)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _status("warning", prefix, message)


def print_table(
    rows: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render upgrade rows as a Rich table.

    Args:
        rows: One mapping per dependency, keyed by column header.
        headers: Column order; defaults to the keys of the first row.
        title: Table title.
        column_styles: Per-column ``style``/``justify``/``no_wrap``.
    """
    if not rows:
        return

    headers = headers or list(rows[0])
    column_styles = column_styles or {}

    table = Table(title=title, header_style="bold")
    for header in headers:
        settings = column_styles.get(header, {})
        table.add_column(
            header,
            style=settings.get("style"),
            justify=settings.get("justify", "left"),
            no_wrap=settings.get("no_wrap", False),
        )
    for row in rows:
        table.add_row(*(str(row.get(header, "")) for header in headers))

    _get_console().print(table)


def print_json(data: Any) -> None:
    """Print ``{name: declaration}`` style data as pretty JSON."""
    _get_console().print_json(data=data)


def colorize_update_type(update_type: str) -> str:
    """Wrap an update-type label in Rich markup for its color."""
    color = UPDATE_TYPE_COLORS.get(update_type.lower())
    return f"[{color}]{update_type}[/{color}]" if color else update_type
