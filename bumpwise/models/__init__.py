"""
Unified data model exports for bumpwise.

Example:
    >>> from bumpwise.models import SemanticVersion, parse_range, PackageMetadata
"""

from __future__ import annotations

from bumpwise.models.version import (
    SemanticVersion,
    compare,
    is_prerelease,
    same_triple,
)
from bumpwise.models.range import (
    DeclaredRange,
    InvalidRange,
    RangeOperator,
    UnboundedKind,
    UnboundedRange,
    ValidRange,
    parse_range,
)
from bumpwise.models.metadata import PackageMetadata

__all__ = [
    "SemanticVersion",
    "compare",
    "same_triple",
    "is_prerelease",
    "DeclaredRange",
    "ValidRange",
    "UnboundedRange",
    "InvalidRange",
    "RangeOperator",
    "UnboundedKind",
    "parse_range",
    "PackageMetadata",
]
