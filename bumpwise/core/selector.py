"""Candidate selection for bumpwise.

Given an instruction and a package's registry metadata, pick the one
version the dependency would move to. Selection does not judge whether the
move is an upgrade; that is :mod:`bumpwise.core.policy`'s job.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Tuple

from bumpwise.core.target import Instruction, PinnedTarget, TagTarget, Target
from bumpwise.models.metadata import PackageMetadata
from bumpwise.models.range import DeclaredRange, ValidRange
from bumpwise.models.version import SemanticVersion
from bumpwise.utils.logger import get_logger

logger = get_logger("core.selector")

_UNKNOWN_TIME = datetime.min.replace(tzinfo=timezone.utc)


def prerelease_allowed(
    instruction: Instruction,
    declared: DeclaredRange,
    include_prerelease: Optional[bool],
) -> bool:
    """Resolve the effective prerelease flag for an instruction.

    An explicit ``True``/``False`` is honoured as given. When unset,
    prereleases are allowed for ``newest``/``greatest`` and, for
    ``minor``/``patch``/``semver``, only when the current version is itself
    a prerelease.
    """
    if include_prerelease is not None:
        return include_prerelease
    if instruction in (Target.MINOR, Target.PATCH, Target.SEMVER):
        return declared.version is not None and declared.version.is_prerelease
    return True


def _highest(
    versions: Iterable[SemanticVersion],
    predicate: Callable[[SemanticVersion], bool],
) -> Optional[SemanticVersion]:
    return max((v for v in versions if predicate(v)), default=None)


def _newest(
    metadata: PackageMetadata,
    allow_pre: bool,
) -> Optional[SemanticVersion]:
    def key(version: SemanticVersion) -> Tuple[bool, datetime, SemanticVersion]:
        published = metadata.published_at(version)
        return (published is not None, published or _UNKNOWN_TIME, version)

    candidates = [v for v in metadata.versions if allow_pre or not v.is_prerelease]
    return max(candidates, key=key, default=None)


def select_candidate(
    instruction: Instruction,
    metadata: PackageMetadata,
    declared: DeclaredRange,
    include_prerelease: Optional[bool] = None,
) -> Optional[SemanticVersion]:
    """Pick the candidate version for one dependency.

    Args:
        instruction: Resolved target instruction.
        metadata: The package's registry snapshot.
        declared: Current declared range (any variant).
        include_prerelease: Whether prerelease versions may be picked by
            ``newest``/``greatest``/``minor``/``patch``/``semver``; see
            :func:`prerelease_allowed` for the default.

    Returns:
        The candidate, or ``None`` when nothing fits. ``minor``, ``patch``
        and ``semver`` always give ``None`` for unbounded or invalid ranges.

    Example:
        >>> select_candidate(Target.PATCH, chalk, parse_range("2.4.1"))
        SemanticVersion(major=2, minor=4, patch=2, prerelease=())
    """
    if isinstance(instruction, PinnedTarget):
        return instruction.version

    if isinstance(instruction, TagTarget):
        candidate = metadata.tag(instruction.name)
        if candidate is None:
            logger.debug("%s has no dist-tag '%s'", metadata.name, instruction.name)
        return candidate

    if instruction is Target.LATEST:
        return metadata.latest

    allow_pre = prerelease_allowed(instruction, declared, include_prerelease)

    def stable_or_allowed(version: SemanticVersion) -> bool:
        return allow_pre or not version.is_prerelease

    if instruction is Target.NEWEST:
        return _newest(metadata, allow_pre)

    if instruction is Target.GREATEST:
        return _highest(metadata.versions, stable_or_allowed)

    current = declared.version
    if current is None:
        logger.debug(
            "No bound for %s from %r; %s cannot select",
            metadata.name,
            declared.raw,
            instruction.value,
        )
        return None

    if instruction is Target.MINOR:
        return _highest(
            metadata.versions,
            lambda v: v.major == current.major and stable_or_allowed(v),
        )

    if instruction is Target.PATCH:
        return _highest(
            metadata.versions,
            lambda v: (v.major, v.minor) == (current.major, current.minor)
            and stable_or_allowed(v),
        )

    if instruction is Target.SEMVER and isinstance(declared, ValidRange):
        return _highest(
            metadata.versions,
            lambda v: declared.satisfied_by(v) and stable_or_allowed(v),
        )

    return None
