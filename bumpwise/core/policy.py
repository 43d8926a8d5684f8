"""Upgrade acceptance policy for bumpwise.

Decides whether a selected candidate is an acceptable upgrade for the
current declared range. The rules, in order:

1. No candidate, or a bound-requiring instruction (``minor``, ``patch``,
   ``semver``) on an unbounded/invalid range: rejected.
2. Unbounded/invalid range with any other instruction: accepted, since
   there is no baseline a downgrade could violate.
3. ``latest``: the candidate must be strictly greater than the current
   version, prerelease included. Never downgrade.
4. Any other dist-tag: a stable current version still needs a strictly
   greater candidate. A prerelease current version accepts any different
   candidate, in either direction. Versions on different dist-tags can
   branch independently from the same baseline, so their relative
   precedence says nothing about what the user asked for by naming a tag.
5. Everything else: strictly greater.

A candidate equal to the current version is never an upgrade.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from bumpwise.constants import LATEST_TAG
from bumpwise.core.target import Instruction, TagTarget, Target
from bumpwise.models.range import DeclaredRange
from bumpwise.models.version import SemanticVersion, compare


@dataclass(frozen=True)
class Accepted:
    """The candidate is an acceptable upgrade."""

    version: SemanticVersion

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """No upgrade; ``reason`` is for logging only."""

    reason: str

    @property
    def accepted(self) -> bool:
        return False


UpgradeDecision = Union[Accepted, Rejected]


def requires_bound(instruction: Instruction) -> bool:
    """True when the instruction needs a current version to work from."""
    return isinstance(instruction, Target) and instruction.requires_bound


def _is_named_tag(instruction: Instruction) -> bool:
    """True for dist-tags other than ``latest``."""
    return isinstance(instruction, TagTarget) and instruction.name != LATEST_TAG


def decide_upgrade(
    declared: DeclaredRange,
    candidate: Optional[SemanticVersion],
    instruction: Instruction,
) -> UpgradeDecision:
    """Accept or reject ``candidate`` as an upgrade of ``declared``.

    Args:
        declared: Current declared range (any variant).
        candidate: Version chosen by the selector, or ``None``.
        instruction: Instruction the candidate was selected with.

    Returns:
        :class:`Accepted` or :class:`Rejected`.
    """
    if candidate is None:
        return Rejected("no candidate")

    current = declared.version
    if current is None:
        if requires_bound(instruction):
            return Rejected(f"'{declared.raw}' has no bound for {instruction}")
        return Accepted(candidate)

    order = compare(candidate, current)
    if order == 0:
        return Rejected("already at candidate")

    if _is_named_tag(instruction) and current.is_prerelease:
        # Same triple or not, switching tags from a prerelease is intentional
        return Accepted(candidate)

    if order > 0:
        return Accepted(candidate)
    return Rejected(f"{candidate} is not greater than {current}")
