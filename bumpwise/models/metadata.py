"""
Registry metadata model for bumpwise.

:class:`PackageMetadata` is the read-only snapshot of one package as the
registry collaborator supplies it: every published version (with its
publish time, when known) and the dist-tags. bumpwise never fetches or
caches it; callers build it from whatever registry client they use, or
from an npm-registry-shaped JSON document via
:meth:`PackageMetadata.from_registry`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from bumpwise.constants import (
    DIST_TAGS_KEY,
    LATEST_TAG,
    TIME_KEY,
    TIME_RESERVED_KEYS,
)
from bumpwise.exceptions import MetadataError
from bumpwise.models.version import SemanticVersion
from bumpwise.utils.logger import get_logger

logger = get_logger("models.metadata")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 publish time; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class PackageMetadata:
    """
    Published versions and dist-tags of one package.

    Attributes:
        name: Package name.
        versions: Mapping of every published version to its publish time
            (``None`` when the registry did not report one).
        tags: Mapping of dist-tag name to the version it points at. Always
            contains ``"latest"``.
    """

    name: str
    versions: Mapping[SemanticVersion, Optional[datetime]] = field(
        default_factory=dict
    )
    tags: Mapping[str, SemanticVersion] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if LATEST_TAG not in self.tags:
            raise MetadataError(
                f"Registry data for '{self.name}' has no '{LATEST_TAG}' dist-tag",
                package_name=self.name,
            )
        # Freeze the mappings so the snapshot stays read-only
        object.__setattr__(self, "versions", MappingProxyType(dict(self.versions)))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        name: str,
        versions: Iterable[str] = (),
        tags: Optional[Mapping[str, str]] = None,
        times: Optional[Mapping[str, Any]] = None,
    ) -> "PackageMetadata":
        """Build metadata from plain version strings.

        Unparsable versions and tags pointing at unparsable versions are
        skipped. A tagged version missing from ``versions`` is added.

        Example:
            >>> meta = PackageMetadata.create(
            ...     "chalk", ["2.4.1", "2.4.2"], tags={"latest": "2.4.2"}
            ... )
            >>> str(meta.latest)
            '2.4.2'
        """
        times = times or {}
        parsed_versions: Dict[SemanticVersion, Optional[datetime]] = {}

        for text in versions:
            version = SemanticVersion.try_parse(text)
            if version is None:
                logger.debug("Skipping unparsable version %r of %s", text, name)
                continue
            parsed_versions[version] = _parse_timestamp(times.get(text))

        parsed_tags: Dict[str, SemanticVersion] = {}
        for tag, text in (tags or {}).items():
            version = SemanticVersion.try_parse(text)
            if version is None:
                logger.debug("Skipping dist-tag %s=%r of %s", tag, text, name)
                continue
            parsed_tags[tag] = version
            parsed_versions.setdefault(version, _parse_timestamp(times.get(text)))

        return cls(name=name, versions=parsed_versions, tags=parsed_tags)

    @classmethod
    def from_registry(cls, name: str, document: Mapping[str, Any]) -> "PackageMetadata":
        """Build metadata from an npm-registry-shaped document.

        The document holds ``dist-tags`` (tag to version), ``versions``
        (a list of version strings, or a mapping keyed by version as the
        npm registry returns it) and optionally ``time`` (version to
        ISO-8601 publish time).

        Raises:
            MetadataError: The document is not a mapping, its sections have
                the wrong shape, or it has no usable ``latest`` tag.
        """
        if not isinstance(document, Mapping):
            raise MetadataError(
                f"Registry document for '{name}' must be an object",
                package_name=name,
            )

        tags = document.get(DIST_TAGS_KEY) or {}
        versions = document.get("versions") or []
        times = document.get(TIME_KEY) or {}

        if not isinstance(tags, Mapping) or not isinstance(times, Mapping):
            raise MetadataError(
                f"Registry document for '{name}' has malformed '{DIST_TAGS_KEY}' "
                f"or '{TIME_KEY}'",
                package_name=name,
            )
        if isinstance(versions, (str, bytes)) or not isinstance(
            versions, (Mapping, list, tuple)
        ):
            raise MetadataError(
                f"Registry document for '{name}' has malformed 'versions'",
                package_name=name,
            )

        version_texts = list(versions.keys() if isinstance(versions, Mapping) else versions)
        times = {k: v for k, v in times.items() if k not in TIME_RESERVED_KEYS}

        return cls.create(name, version_texts, tags=tags, times=times)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def latest(self) -> SemanticVersion:
        """The version the ``latest`` dist-tag points at."""
        return self.tags[LATEST_TAG]

    def tag(self, name: str) -> Optional[SemanticVersion]:
        """Return the version a dist-tag points at, or ``None``."""
        return self.tags.get(name)

    def published_at(self, version: SemanticVersion) -> Optional[datetime]:
        return self.versions.get(version)
