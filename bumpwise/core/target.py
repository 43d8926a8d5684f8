"""Target level resolution for bumpwise.

A *target* says what kind of upgrade the caller wants. It arrives as a
preset keyword (``"minor"``), a dist-tag reference (``"@next"``) or a
custom function deciding per dependency. This module turns it into a
concrete *instruction* for one dependency:

- :class:`Target`: one of the six presets
- :class:`TagTarget`: a named dist-tag
- :class:`PinnedTarget`: a literal version returned by a custom function,
  which bypasses candidate selection

Custom functions receive the dependency name and a one-element list
holding its :class:`~bumpwise.models.range.DeclaredRange`::

    def target(name, ranges):
        operator = ranges[0].operator
        if operator is RangeOperator.CARET:
            return "minor"
        if operator is RangeOperator.TILDE:
            return "patch"
        return "latest"
"""

from __future__ import annotations

import inspect
from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from bumpwise.constants import LATEST_TAG, TAG_PREFIX
from bumpwise.exceptions import ConfigError, PolicyHookError
from bumpwise.models.range import DeclaredRange
from bumpwise.models.version import SemanticVersion
from bumpwise.utils.logger import get_logger

logger = get_logger("core.target")


class Target(str, Enum):
    """Preset upgrade targets."""

    #: Whatever the ``latest`` dist-tag points at.
    LATEST = "latest"
    #: The most recently published version.
    NEWEST = "newest"
    #: The highest version by precedence.
    GREATEST = "greatest"
    #: The highest version with the same major.
    MINOR = "minor"
    #: The highest version with the same major.minor.
    PATCH = "patch"
    #: The highest version satisfying the declared range.
    SEMVER = "semver"

    def __str__(self) -> str:
        return self.value

    @property
    def requires_bound(self) -> bool:
        """True for presets that need a current version to anchor on."""
        return self in (Target.MINOR, Target.PATCH, Target.SEMVER)

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["Target"]:
        try:
            return cls(keyword.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class TagTarget:
    """Upgrade to whatever a dist-tag points at."""

    name: str

    def __str__(self) -> str:
        return f"{TAG_PREFIX}{self.name}"


@dataclass(frozen=True)
class PinnedTarget:
    """Upgrade to one literal version chosen by a custom target function."""

    version: SemanticVersion

    def __str__(self) -> str:
        return str(self.version)


Instruction = Union[Target, TagTarget, PinnedTarget]
TargetFunction = Callable[[str, Sequence[DeclaredRange]], Any]
TargetSpec = Union[Target, TagTarget, str, TargetFunction]


def _parse_keyword(text: str) -> Optional[Union[Target, TagTarget]]:
    """Interpret a preset keyword or ``@tag`` string."""
    text = text.strip()
    if text.startswith(TAG_PREFIX):
        tag = text[len(TAG_PREFIX):].strip()
        if not tag:
            return None
        # "@latest" carries exactly the semantics of the latest preset
        return Target.LATEST if tag == LATEST_TAG else TagTarget(tag)
    return Target.from_keyword(text)


def coerce_target(spec: Any) -> Union[Target, TagTarget, TargetFunction]:
    """Validate a target given by configuration or a caller.

    Args:
        spec: A :class:`Target`, :class:`TagTarget`, preset keyword,
            ``@tag`` string or custom function.

    Returns:
        The normalised target.

    Raises:
        ConfigError: ``spec`` is none of the accepted forms.
    """
    if isinstance(spec, (Target, TagTarget)):
        return spec
    if isinstance(spec, str):
        parsed = _parse_keyword(spec)
        if parsed is None:
            raise ConfigError(
                f"Unknown target {spec!r}; expected one of "
                f"{', '.join(t.value for t in Target)} or @<tag>",
                option="target",
            )
        return parsed
    if callable(spec):
        return spec
    raise ConfigError(
        f"target must be a string or a function, got {type(spec).__name__}",
        option="target",
    )


def interpret_target_value(value: Any) -> Optional[Instruction]:
    """Interpret what a custom target function returned.

    Preset keywords and ``@tag`` strings become the matching instruction;
    any other string is pinned if it parses as a semantic version. Anything
    else yields ``None``, which rejects the dependency.
    """
    if isinstance(value, (Target, TagTarget, PinnedTarget)):
        return value
    if isinstance(value, SemanticVersion):
        return PinnedTarget(value)
    if not isinstance(value, str):
        return None

    parsed = _parse_keyword(value)
    if parsed is not None:
        return parsed

    version = SemanticVersion.try_parse(value)
    return PinnedTarget(version) if version is not None else None


def call_target_function(
    function: TargetFunction,
    name: str,
    declared: DeclaredRange,
) -> Any:
    """Invoke a custom target function once, wrapping its failures."""
    try:
        return function(name, [declared])
    except Exception as exc:
        raise PolicyHookError(
            f"Target function failed for '{name}': {exc}",
            dependency=name,
            hook="target",
            original_error=exc,
        ) from exc


def resolve_instruction(
    target: TargetSpec,
    name: str,
    declared: DeclaredRange,
) -> Optional[Instruction]:
    """Turn a target into the instruction for one dependency.

    Synchronous: a custom function returning an awaitable is an error here;
    use :meth:`~bumpwise.core.resolver.UpgradeResolver.resolve_async`.

    Args:
        target: Target as accepted by :func:`coerce_target`.
        name: Dependency name.
        declared: The dependency's parsed range (any variant).

    Returns:
        The instruction, or ``None`` when a custom function returned
        something unusable.

    Raises:
        PolicyHookError: The custom function raised or returned an
            awaitable.
    """
    spec = coerce_target(target)
    if isinstance(spec, (Target, TagTarget)):
        return spec

    value = call_target_function(spec, name, declared)
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise PolicyHookError(
            f"Target function for '{name}' returned an awaitable; "
            "use the async API",
            dependency=name,
            hook="target",
        )
    return interpret_custom_result(name, value)


def interpret_custom_result(name: str, value: Any) -> Optional[Instruction]:
    """:func:`interpret_target_value` with a debug log for unusable values."""
    instruction = interpret_target_value(value)
    if instruction is None:
        logger.debug("Target function returned unusable value %r for %s", value, name)
    return instruction
