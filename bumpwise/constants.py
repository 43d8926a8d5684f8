"""
Centralized constants for bumpwise.

This module defines immutable values used across bumpwise, including
target keywords, manifest sections, file limits and logging formats.
All values are intended to be treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

#: Dist-tag every registry document is expected to carry.
LATEST_TAG: Final[str] = "latest"

#: Prefix marking a target as a dist-tag reference (``@next``).
TAG_PREFIX: Final[str] = "@"

#: Target used when neither the configuration nor the CLI names one.
DEFAULT_TARGET: Final[str] = "latest"

# ---------------------------------------------------------------------------
# Manifests and registry snapshots
# ---------------------------------------------------------------------------

#: ``package.json`` sections that hold dependency declarations, in read order.
DEPENDENCY_SECTIONS: Final[Sequence[str]] = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "peerDependencies",
)

#: Registry document key for dist-tags.
DIST_TAGS_KEY: Final[str] = "dist-tags"

#: Registry document key for per-version publish timestamps.
TIME_KEY: Final[str] = "time"

#: Keys of the registry ``time`` object that are not versions.
TIME_RESERVED_KEYS: Final[Sequence[str]] = ("created", "modified")

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading manifests or snapshots.
MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024  # 50 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
