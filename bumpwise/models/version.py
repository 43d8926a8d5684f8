"""
Semantic version value type for bumpwise.

:class:`SemanticVersion` is the immutable version representation used by the
whole decision core. Parsing and precedence are delegated to the ``semver``
package; this module only adapts its :class:`semver.Version` to a frozen,
hashable value with npm-flavoured leniency (a leading ``v`` or ``=`` and
missing minor/patch components are accepted, build metadata is dropped).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from semver import Version

PrereleaseIdentifier = Union[int, str]


def _split_prerelease(prerelease: Optional[str]) -> Tuple[PrereleaseIdentifier, ...]:
    """Split a prerelease string into numeric and alphanumeric identifiers."""
    if not prerelease:
        return ()
    return tuple(
        int(part) if part.isdigit() else part for part in prerelease.split(".")
    )


@functools.total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """
    A parsed ``major.minor.patch[-prerelease]`` version.

    Instances are totally ordered by semantic-version precedence and are
    hashable, so they can key registry mappings.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        prerelease: Prerelease identifiers; numeric ones are ``int``.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: Tuple[PrereleaseIdentifier, ...] = ()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """
        Parse a version string.

        Args:
            text: Version text such as ``"1.2.3"``, ``"v1.2.3-beta.0"`` or
                ``"1.2"``.

        Returns:
            The parsed version.

        Raises:
            ValueError: If ``text`` is not a semantic version.
        """
        cleaned = text.strip()
        if cleaned[:1] == "=":
            cleaned = cleaned[1:].strip()
        if cleaned[:1] in ("v", "V"):
            cleaned = cleaned[1:]
        if not cleaned.isascii():
            # semver's \d would accept other scripts' digits
            raise ValueError(f"{text!r} is not a valid semantic version")

        parsed = Version.parse(cleaned, optional_minor_and_patch=True)
        return cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=_split_prerelease(parsed.prerelease),
        )

    @classmethod
    def try_parse(cls, text: object) -> Optional["SemanticVersion"]:
        """Parse ``text`` or return ``None`` when it is not a semantic version."""
        if not isinstance(text, str) or not text.strip():
            return None
        try:
            return cls.parse(text)
        except (ValueError, TypeError):
            return None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def triple(self) -> Tuple[int, int, int]:
        """The ``(major, minor, patch)`` part, without prerelease."""
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def to_semver(self) -> Version:
        """Return the equivalent :class:`semver.Version`."""
        prerelease = ".".join(str(part) for part in self.prerelease) or None
        return Version(self.major, self.minor, self.patch, prerelease=prerelease)

    def compare(self, other: "SemanticVersion") -> int:
        """Return -1, 0 or 1 as ``self`` ranks below, equal to or above ``other``."""
        return self.to_semver().compare(other.to_semver())

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return base + "-" + ".".join(str(part) for part in self.prerelease)
        return base


def compare(a: SemanticVersion, b: SemanticVersion) -> int:
    """Compare two versions by semantic-version precedence.

    Returns:
        ``-1`` if ``a < b``, ``0`` if equal, ``1`` if ``a > b``.

    Example:
        >>> compare(SemanticVersion.parse("1.0.0-1"), SemanticVersion.parse("1.0.0-beta"))
        -1
    """
    return a.compare(b)


def same_triple(a: SemanticVersion, b: SemanticVersion) -> bool:
    """Return True when ``a`` and ``b`` share major.minor.patch."""
    return a.triple == b.triple


def is_prerelease(version: SemanticVersion) -> bool:
    """Return True when ``version`` carries prerelease identifiers."""
    return version.is_prerelease
