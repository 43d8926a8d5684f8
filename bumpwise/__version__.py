"""
bumpwise version information.

Single source of truth for the package version, following Semantic
Versioning (https://semver.org/).
"""

from __future__ import annotations

__version__ = "0.1.0"

VERSION_STRING = f"bumpwise {__version__}"
