"""Filter gate for bumpwise.

Runs before any target resolution for a dependency and may veto it
outright. Two complementary specs are supported:

- ``filter`` keeps only matching dependencies
- ``reject`` drops matching dependencies

Each spec is either a predicate ``(name, [DeclaredRange]) -> bool`` or a
name pattern: a string of comma/space-separated globs (``"eslint-*,mocha"``),
a ``/regex/`` string, a compiled regex, or a list of these.
"""

from __future__ import annotations

import re
import inspect
import fnmatch
from typing import Any, Awaitable, Callable, List, Optional, Pattern, Sequence, Union

from bumpwise.exceptions import ConfigError, PolicyHookError
from bumpwise.models.range import DeclaredRange
from bumpwise.utils.logger import get_logger

logger = get_logger("core.filters")

FilterFunction = Callable[[str, Sequence[DeclaredRange]], Any]
FilterSpec = Union[FilterFunction, str, Pattern[str], Sequence[Union[str, Pattern[str]]]]

_SEPARATORS = re.compile(r"[,\s]+")


class NameMatcher:
    """Matches dependency names against globs and regular expressions."""

    __slots__ = ("globs", "regexes")

    def __init__(self, patterns: Sequence[Union[str, Pattern[str]]]) -> None:
        self.globs: List[str] = []
        self.regexes: List[Pattern[str]] = []

        for pattern in patterns:
            if isinstance(pattern, re.Pattern):
                self.regexes.append(pattern)
                continue
            if not isinstance(pattern, str):
                raise ConfigError(
                    f"Filter patterns must be strings, got {type(pattern).__name__}",
                    option="filter",
                )
            text = pattern.strip()
            if len(text) > 2 and text.startswith("/") and text.endswith("/"):
                try:
                    self.regexes.append(re.compile(text[1:-1]))
                except re.error as exc:
                    raise ConfigError(
                        f"Invalid filter regex {text!r}: {exc}", option="filter"
                    ) from exc
            else:
                self.globs.extend(p for p in _SEPARATORS.split(text) if p)

    def __call__(self, name: str, ranges: Sequence[DeclaredRange]) -> bool:
        return any(fnmatch.fnmatchcase(name, glob) for glob in self.globs) or any(
            regex.search(name) for regex in self.regexes
        )

    def __repr__(self) -> str:
        return f"NameMatcher(globs={self.globs!r}, regexes={self.regexes!r})"


def as_predicate(spec: Optional[FilterSpec]) -> Optional[FilterFunction]:
    """Normalise a filter/reject spec into a predicate (or ``None``).

    Raises:
        ConfigError: ``spec`` has an unsupported shape.
    """
    if spec is None:
        return None
    if isinstance(spec, (str, re.Pattern)):
        return NameMatcher([spec])
    if callable(spec):
        return spec
    if isinstance(spec, (list, tuple)):
        return NameMatcher(list(spec))
    raise ConfigError(
        f"Unsupported filter of type {type(spec).__name__}",
        option="filter",
    )


class FilterGate:
    """Decides whether a dependency takes part in resolution at all.

    Args:
        filter: Keep-spec; when set, only matching dependencies proceed.
        reject: Drop-spec; matching dependencies never proceed.
    """

    __slots__ = ("_filter", "_reject")

    def __init__(
        self,
        filter: Optional[FilterSpec] = None,
        reject: Optional[FilterSpec] = None,
    ) -> None:
        self._filter = as_predicate(filter)
        self._reject = as_predicate(reject)

    def allows(self, name: str, declared: DeclaredRange) -> bool:
        """Return True when ``name`` may proceed to target resolution.

        Raises:
            PolicyHookError: A predicate raised or returned an awaitable.
        """
        if self._filter is not None:
            if not _sync_result(self._call(self._filter, "filter", name, declared), name):
                logger.debug("Filtered out %s", name)
                return False

        if self._reject is not None:
            if _sync_result(self._call(self._reject, "reject", name, declared), name):
                logger.debug("Rejected %s", name)
                return False

        return True

    async def allows_async(self, name: str, declared: DeclaredRange) -> bool:
        """Async variant of :meth:`allows`; awaitable predicate results are awaited."""
        if self._filter is not None:
            keep = self._call(self._filter, "filter", name, declared)
            if inspect.isawaitable(keep):
                keep = await _await_hook(keep, "filter", name)
            if not keep:
                logger.debug("Filtered out %s", name)
                return False

        if self._reject is not None:
            drop = self._call(self._reject, "reject", name, declared)
            if inspect.isawaitable(drop):
                drop = await _await_hook(drop, "reject", name)
            if drop:
                logger.debug("Rejected %s", name)
                return False

        return True

    @staticmethod
    def _call(
        predicate: FilterFunction,
        hook: str,
        name: str,
        declared: DeclaredRange,
    ) -> Any:
        try:
            return predicate(name, [declared])
        except Exception as exc:
            raise PolicyHookError(
                f"{hook.capitalize()} function failed for '{name}': {exc}",
                dependency=name,
                hook=hook,
                original_error=exc,
            ) from exc


def _sync_result(value: Any, name: str) -> bool:
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise PolicyHookError(
            f"Filter function for '{name}' returned an awaitable; use the async API",
            dependency=name,
            hook="filter",
        )
    return bool(value)


async def _await_hook(value: Awaitable[Any], hook: str, name: str) -> bool:
    try:
        return bool(await value)
    except Exception as exc:
        raise PolicyHookError(
            f"{hook.capitalize()} function failed for '{name}': {exc}",
            dependency=name,
            hook=hook,
            original_error=exc,
        ) from exc
