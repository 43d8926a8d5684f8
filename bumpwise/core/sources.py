"""Manifest and registry snapshot loading for bumpwise.

These are thin, offline stand-ins for the collaborators around the
decision core:

- :func:`load_manifest` reads the dependency sections of a
  ``package.json``-shaped file. Nothing is ever written back.
- :func:`load_registry_snapshot` reads a JSON object mapping package names
  to npm-registry-shaped documents (``dist-tags``, ``versions``, ``time``)
  and builds :class:`~bumpwise.models.metadata.PackageMetadata` for each.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

from bumpwise.constants import DEPENDENCY_SECTIONS
from bumpwise.exceptions import MetadataError, ParseError
from bumpwise.models.metadata import PackageMetadata
from bumpwise.utils.filesystem import read_json_file
from bumpwise.utils.logger import get_logger

logger = get_logger("core.sources")

PathLike = Union[str, Path]


def dependencies_from_manifest(
    manifest: Mapping[str, Any],
    *,
    source: str = "<manifest>",
) -> Dict[str, str]:
    """Collect declared dependencies from a parsed manifest.

    Sections are read in :data:`~bumpwise.constants.DEPENDENCY_SECTIONS`
    order; when a name appears in several sections the first declaration
    wins.

    Raises:
        ParseError: A section is not an object of strings.
    """
    dependencies: Dict[str, str] = {}

    for section in DEPENDENCY_SECTIONS:
        entries = manifest.get(section)
        if entries is None:
            continue
        if not isinstance(entries, Mapping):
            raise ParseError(f"'{section}' must be an object", file_path=source)

        for name, declared in entries.items():
            if not isinstance(declared, str):
                raise ParseError(
                    f"Declaration of '{name}' in '{section}' must be a string",
                    file_path=source,
                    content=repr(declared),
                )
            if name in dependencies:
                logger.debug("%s declared again in %s; keeping first", name, section)
                continue
            dependencies[name] = declared

    return dependencies


def load_manifest(path: PathLike) -> Dict[str, str]:
    """Read dependency declarations from a ``package.json``-shaped file.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The file is not a JSON object with valid sections.
    """
    data = read_json_file(path)
    if not isinstance(data, Mapping):
        raise ParseError("Manifest must be a JSON object", file_path=str(path))

    dependencies = dependencies_from_manifest(data, source=str(path))
    logger.debug("Loaded %d dependencies from %s", len(dependencies), path)
    return dependencies


def load_registry_snapshot(path: PathLike) -> Dict[str, PackageMetadata]:
    """Read an offline registry snapshot.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The snapshot is not a JSON object.
        MetadataError: A package document is unusable.
    """
    data = read_json_file(path)
    if not isinstance(data, Mapping):
        raise ParseError("Registry snapshot must be a JSON object", file_path=str(path))

    registry: Dict[str, PackageMetadata] = {}
    for name, document in data.items():
        try:
            registry[name] = PackageMetadata.from_registry(name, document)
        except MetadataError as exc:
            exc.details.setdefault("file", str(path))
            raise

    logger.debug("Loaded registry data for %d packages from %s", len(registry), path)
    return registry
