"""
Custom exception hierarchy for bumpwise.

All exceptions inherit from :class:`BumpwiseError` and carry optional
structured metadata via the ``details`` attribute for diagnostics and
logging.

The upgrade decision core itself never raises for malformed input: an
unparsable range, a missing dist-tag or an unusable custom target simply
leaves the dependency out of the result. These exceptions cover the
plumbing around it (configuration, registry snapshots, manifests) and
misbehaving caller hooks.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class BumpwiseError(Exception):
    """Base exception for all bumpwise errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(BumpwiseError):
    """Raised when a manifest or registry snapshot cannot be parsed.

    Args:
        message: Error description.
        file_path: Path to the file being parsed.
        content: Offending content, truncated for safety.
    """

    __slots__ = ("file_path", "content")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        content: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        if content is not None:
            details["content"] = _truncate(content)

        super().__init__(message, details)

        self.file_path = file_path
        self.content = content


class MetadataError(BumpwiseError):
    """Raised when a registry document cannot be turned into package metadata.

    Args:
        message: Error description.
        package_name: Name of the package whose document is unusable.
    """

    __slots__ = ("package_name",)

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "package", package_name)

        super().__init__(message, details)

        self.package_name = package_name


class ConfigError(BumpwiseError):
    """Raised for invalid configuration files or option values.

    Args:
        message: Error description.
        config_path: Path of the configuration file, if any.
        option: Name of the offending option.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class PolicyHookError(BumpwiseError):
    """Raised when a caller-supplied target or filter hook misbehaves.

    Args:
        message: Error description.
        dependency: Dependency being resolved when the hook failed.
        hook: Which hook failed (``"target"`` or ``"filter"``).
        original_error: Exception raised by the hook, if any.
    """

    __slots__ = ("dependency", "hook", "original_error")

    def __init__(
        self,
        message: str,
        *,
        dependency: Optional[str] = None,
        hook: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "dependency", dependency)
        _add_if(details, "hook", hook)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.dependency = dependency
        self.hook = hook
        self.original_error = original_error


class FileOperationError(BumpwiseError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
