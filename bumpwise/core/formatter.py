"""Result formatting for bumpwise.

Rebuilds a dependency declaration around an accepted version, keeping the
shape of the *original* declaration rather than anything implied by the
target: ``^8.3.2`` upgraded to ``8.4.0`` stays a caret range (``^8.4.0``)
even when the version came from a dist-tag.
"""

from __future__ import annotations

from typing import Optional

from bumpwise.models.range import DeclaredRange, RangeOperator, ValidRange
from bumpwise.models.version import SemanticVersion
from bumpwise.utils.logger import get_logger

logger = get_logger("core.formatter")


def _render(declared: ValidRange, version: SemanticVersion) -> str:
    """Render ``version`` with the precision and wildcards of ``declared``."""
    if version.is_prerelease or declared.precision >= 3:
        return str(version)

    parts = [str(n) for n in version.triple[: declared.precision]]
    if declared.wildcard is not None:
        parts.extend([declared.wildcard] * (declared.width - declared.precision))
    return ".".join(parts)


def format_upgrade(
    declared: DeclaredRange,
    version: SemanticVersion,
) -> Optional[str]:
    """Build the new declaration string for an accepted upgrade.

    Args:
        declared: The original declared range.
        version: The accepted version.

    Returns:
        The new declaration, or ``None`` when the original cannot be
        rewritten faithfully (compound ranges and ``<``, ``<=``, ``>``
        bounds) or would come out unchanged (``^1.2`` already covers
        ``1.2.5``).

    Example:
        >>> format_upgrade(parse_range("^8.3.2"), SemanticVersion.parse("8.4.0"))
        '^8.4.0'
        >>> format_upgrade(parse_range("1.x"), SemanticVersion.parse("2.3.0"))
        '2.x'
    """
    if not isinstance(declared, ValidRange):
        # Nothing to preserve from "*", "" or a non-semver declaration
        return str(version)

    if declared.operator is RangeOperator.OTHER:
        # A compound range or a bare bound would not admit the version
        logger.debug("Cannot rewrite %r around %s", declared.raw, version)
        return None

    formatted = f"{declared.prefix}{_render(declared, version)}"
    if formatted == f"{declared.prefix}{_render(declared, declared.version)}":
        logger.debug("%r already covers %s", declared.raw, version)
        return None
    return formatted
