"""
Version change classification for bumpwise reports.

Used by the CLI to label each upgrade (major/minor/patch/...) for display.
"""

from __future__ import annotations

from typing import Optional

from bumpwise.models.version import SemanticVersion


def get_update_type(
    current: Optional[SemanticVersion],
    target: Optional[SemanticVersion],
) -> str:
    """Classify the change from ``current`` to ``target``.

    Args:
        current: Current version, or ``None`` when the declaration had none
            (wildcards, non-semver declarations).
        target: Version being moved to.

    Returns:
        One of:
            - ``"new"``        : No current version exists
            - ``"same"``       : Versions are identical
            - ``"downgrade"``  : Target ranks below current
            - ``"major"``      : Major version change
            - ``"minor"``      : Minor version change
            - ``"patch"``      : Patch-level change
            - ``"prerelease"`` : Only the prerelease identifiers changed
            - ``"unknown"``    : No target

    Examples:
        >>> get_update_type(SemanticVersion(1, 0, 0), SemanticVersion(2, 0, 0))
        'major'
        >>> get_update_type(None, SemanticVersion(1, 0, 0))
        'new'
    """
    if target is None:
        return "unknown"

    if current is None:
        return "new"

    order = target.compare(current)
    if order == 0:
        return "same"

    if order < 0:
        return "downgrade"

    if current.major != target.major:
        return "major"

    if current.minor != target.minor:
        return "minor"

    if current.patch != target.patch:
        return "patch"

    return "prerelease"
