"""
Utility helpers for bumpwise.

- Logging configuration and retrieval
- Console output helpers (Rich-based)
- Safe file reading
- Version change classification

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from bumpwise.utils.logger import (
    get_logger,
    level_from_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from bumpwise.utils.console import (
    colorize_update_type,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from bumpwise.utils.filesystem import read_json_file, safe_read_file

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from bumpwise.utils.version_utils import get_update_type

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "level_from_verbosity",
    # Console
    "print_error",
    "print_json",
    "print_table",
    "print_success",
    "print_warning",
    "reconfigure_console",
    "colorize_update_type",
    # Filesystem
    "safe_read_file",
    "read_json_file",
    # Version utilities
    "get_update_type",
]
