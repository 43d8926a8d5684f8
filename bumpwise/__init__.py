"""
bumpwise: upgrade decisions for npm-style dependency declarations.

Given the ranges a ``package.json`` declares and a snapshot of registry
metadata, bumpwise decides for each dependency which version it should move
to under a chosen *target* (``latest``, ``newest``, ``greatest``,
``minor``, ``patch``, ``semver``, a dist-tag or a custom function), and
whether that move is an acceptable upgrade.

Example:
    >>> from bumpwise import PackageMetadata, upgrade_dependencies
    >>> registry = {"chalk": PackageMetadata.create(
    ...     "chalk", ["2.4.1", "2.4.2", "3.0.0"], tags={"latest": "3.0.0"})}
    >>> upgrade_dependencies({"chalk": "2.4.1"}, registry, target="patch")
    {'chalk': '2.4.2'}
"""

from __future__ import annotations

from bumpwise.__version__ import __version__
from bumpwise.core import (
    Accepted,
    PinnedTarget,
    Rejected,
    Resolution,
    TagTarget,
    Target,
    UpgradeOptions,
    UpgradeResolver,
    load_manifest,
    load_registry_snapshot,
    upgrade_dependencies,
)
from bumpwise.exceptions import (
    BumpwiseError,
    ConfigError,
    FileOperationError,
    MetadataError,
    ParseError,
    PolicyHookError,
)
from bumpwise.models import (
    DeclaredRange,
    InvalidRange,
    PackageMetadata,
    RangeOperator,
    SemanticVersion,
    UnboundedRange,
    ValidRange,
    parse_range,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "bumpwise Contributors"
__license__ = "Apache-2.0"
__description__ = "Upgrade decisions for npm-style dependency declarations."

__all__ = [
    "__version__",
    # Resolution
    "UpgradeResolver",
    "UpgradeOptions",
    "Resolution",
    "upgrade_dependencies",
    "Target",
    "TagTarget",
    "PinnedTarget",
    "Accepted",
    "Rejected",
    # Models
    "SemanticVersion",
    "PackageMetadata",
    "DeclaredRange",
    "ValidRange",
    "UnboundedRange",
    "InvalidRange",
    "RangeOperator",
    "parse_range",
    # Loading
    "load_manifest",
    "load_registry_snapshot",
    # Errors
    "BumpwiseError",
    "ParseError",
    "MetadataError",
    "ConfigError",
    "PolicyHookError",
    "FileOperationError",
]
