"""
Shared context object for bumpwise CLI commands.

One instance is created per invocation by the ``bumpwise`` group and handed
to subcommands through Click's context mechanism.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from bumpwise.config import BumpwiseConfig


class BumpwiseContext:
    """Global context object for bumpwise CLI commands.

    Attributes:
        config_path: Path to the configuration file in use, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration; ``None`` until the group callback runs.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[BumpwiseConfig] = None


#: Click decorator for injecting :class:`BumpwiseContext` into commands.
pass_context = click.make_pass_decorator(BumpwiseContext, ensure=True)
