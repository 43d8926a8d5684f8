"""
Core decision pipeline exports for bumpwise.

    from bumpwise.core import UpgradeResolver, UpgradeOptions
"""

from __future__ import annotations

from bumpwise.core.target import (
    Instruction,
    PinnedTarget,
    TagTarget,
    Target,
    coerce_target,
    interpret_target_value,
    resolve_instruction,
)
from bumpwise.core.selector import prerelease_allowed, select_candidate
from bumpwise.core.policy import Accepted, Rejected, UpgradeDecision, decide_upgrade
from bumpwise.core.filters import FilterGate, NameMatcher
from bumpwise.core.formatter import format_upgrade
from bumpwise.core.resolver import (
    Resolution,
    UpgradeOptions,
    UpgradeResolver,
    upgrade_dependencies,
)
from bumpwise.core.sources import (
    dependencies_from_manifest,
    load_manifest,
    load_registry_snapshot,
)

__all__ = [
    "Target",
    "TagTarget",
    "PinnedTarget",
    "Instruction",
    "coerce_target",
    "interpret_target_value",
    "resolve_instruction",
    "select_candidate",
    "prerelease_allowed",
    "Accepted",
    "Rejected",
    "UpgradeDecision",
    "decide_upgrade",
    "FilterGate",
    "NameMatcher",
    "format_upgrade",
    "Resolution",
    "UpgradeOptions",
    "UpgradeResolver",
    "upgrade_dependencies",
    "dependencies_from_manifest",
    "load_manifest",
    "load_registry_snapshot",
]
