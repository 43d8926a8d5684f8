"""
Filesystem utilities for bumpwise.

Safe helpers for reading the manifest and registry snapshot files the CLI
works from. All filesystem errors are normalized to
:class:`~bumpwise.exceptions.FileOperationError`; malformed JSON becomes a
:class:`~bumpwise.exceptions.ParseError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from bumpwise.utils.logger import get_logger
from bumpwise.constants import MAX_FILE_SIZE
from bumpwise.exceptions import FileOperationError, ParseError


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Ensure ``path`` is an existing regular file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with an optional size limit.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: Missing, not a file, too large or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_json_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
) -> Any:
    """Read and decode a JSON file.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The content is not valid JSON.
    """
    content = safe_read_file(file_path, max_size=max_size)
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}",
            file_path=str(file_path),
        ) from exc

