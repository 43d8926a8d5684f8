"""Upgrade resolution for bumpwise.

This module wires the decision pipeline together for each dependency:

1. **Parse** the declared range (never raises).
2. **Filter gate**: a caller filter/reject may veto the dependency before
   anything else runs.
3. **Target resolution**: turn the target (preset, ``@tag`` or custom
   function) into an instruction.
4. **Candidate selection**: pick one version from the registry metadata.
5. **Acceptance**: decide whether the candidate is a safe upgrade.
6. **Formatting**: reapply the original range's operator.

Each dependency is resolved independently from immutable inputs. The
result maps a dependency name to its new declaration only when an upgrade
was accepted; everything else is simply absent.

Typical usage::

    from bumpwise import UpgradeOptions, UpgradeResolver, PackageMetadata

    registry = {"chalk": PackageMetadata.create(
        "chalk", ["2.3.0", "2.4.2", "3.0.0"], tags={"latest": "3.0.0"},
    )}
    resolver = UpgradeResolver(UpgradeOptions(target="minor"))
    resolver.upgrade({"chalk": "^2.3.0"}, registry)
    # {'chalk': '^2.4.2'}
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from bumpwise.constants import DEFAULT_TARGET
from bumpwise.core.filters import FilterGate, FilterSpec
from bumpwise.core.formatter import format_upgrade
from bumpwise.core.policy import Rejected, UpgradeDecision, decide_upgrade
from bumpwise.core.selector import select_candidate
from bumpwise.core.target import (
    Instruction,
    TargetSpec,
    call_target_function,
    coerce_target,
    interpret_custom_result,
    resolve_instruction,
)
from bumpwise.exceptions import PolicyHookError
from bumpwise.models.metadata import PackageMetadata
from bumpwise.models.range import DeclaredRange, parse_range
from bumpwise.utils.logger import get_logger

logger = get_logger("core.resolver")


@dataclass(frozen=True)
class UpgradeOptions:
    """Configuration bag for a resolution run.

    Attributes:
        target: Preset keyword, ``@tag``, :class:`~bumpwise.core.target.Target`
            or custom function ``(name, [DeclaredRange]) -> value``.
        filter: Keep-spec for the filter gate (predicate or name patterns).
        reject: Drop-spec for the filter gate.
        pre: Include prerelease candidates. ``None`` uses the per-target
            default (see :func:`~bumpwise.core.selector.prerelease_allowed`).

    Raises:
        ConfigError: ``target``, ``filter`` or ``reject`` has an
            unsupported value.
    """

    target: TargetSpec = DEFAULT_TARGET
    filter: Optional[FilterSpec] = None
    reject: Optional[FilterSpec] = None
    pre: Optional[bool] = None
    gate: FilterGate = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", coerce_target(self.target))
        object.__setattr__(self, "gate", FilterGate(self.filter, self.reject))


@dataclass(frozen=True)
class Resolution:
    """Full outcome of resolving one dependency, for reporting.

    Attributes:
        name: Dependency name.
        declared: Parsed current declaration.
        instruction: Instruction used, ``None`` if filtered out or unusable.
        decision: Acceptance decision.
        upgraded: New declaration string, present only when accepted.
    """

    name: str
    declared: DeclaredRange
    instruction: Optional[Instruction]
    decision: UpgradeDecision
    upgraded: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.upgraded is not None


class UpgradeResolver:
    """Resolves upgrade targets for dependencies against registry metadata.

    Stateless apart from its options, so one resolver can serve any number
    of dependencies, sequentially or concurrently.

    Args:
        options: Resolution options; defaults to ``target="latest"``.
    """

    def __init__(self, options: Optional[UpgradeOptions] = None) -> None:
        self.options: UpgradeOptions = options or UpgradeOptions()

    # ------------------------------------------------------------------
    # Single dependency
    # ------------------------------------------------------------------

    def resolve(
        self,
        name: str,
        raw: Any,
        metadata: PackageMetadata,
    ) -> Optional[str]:
        """Return the new declaration for one dependency, or ``None``.

        Raises:
            PolicyHookError: A caller hook raised or returned an awaitable.
        """
        return self.explain(name, raw, metadata).upgraded

    def explain(
        self,
        name: str,
        raw: Any,
        metadata: PackageMetadata,
    ) -> Resolution:
        """Like :meth:`resolve` but return the full :class:`Resolution`."""
        declared = parse_range(raw)

        if not self.options.gate.allows(name, declared):
            return Resolution(name, declared, None, Rejected("filtered"))

        instruction = resolve_instruction(self.options.target, name, declared)
        return self._finish(name, declared, instruction, metadata)

    async def resolve_async(
        self,
        name: str,
        raw: Any,
        metadata: PackageMetadata,
    ) -> Optional[str]:
        """Async :meth:`resolve`; awaitable hook results are awaited once."""
        return (await self.explain_async(name, raw, metadata)).upgraded

    async def explain_async(
        self,
        name: str,
        raw: Any,
        metadata: PackageMetadata,
    ) -> Resolution:
        declared = parse_range(raw)

        if not await self.options.gate.allows_async(name, declared):
            return Resolution(name, declared, None, Rejected("filtered"))

        target = self.options.target
        if callable(target):
            value = call_target_function(target, name, declared)
            if inspect.isawaitable(value):
                try:
                    value = await value
                except Exception as exc:
                    raise PolicyHookError(
                        f"Target function failed for '{name}': {exc}",
                        dependency=name,
                        hook="target",
                        original_error=exc,
                    ) from exc
            instruction = interpret_custom_result(name, value)
        else:
            instruction = resolve_instruction(target, name, declared)

        return self._finish(name, declared, instruction, metadata)

    def _finish(
        self,
        name: str,
        declared: DeclaredRange,
        instruction: Optional[Instruction],
        metadata: PackageMetadata,
    ) -> Resolution:
        """Run selection, acceptance and formatting for one dependency."""
        if instruction is None:
            decision: UpgradeDecision = Rejected("unusable target")
            logger.debug("%s: %s", name, decision.reason)
            return Resolution(name, declared, None, decision)

        candidate = select_candidate(
            instruction, metadata, declared, self.options.pre
        )
        decision = decide_upgrade(declared, candidate, instruction)
        if isinstance(decision, Rejected):
            logger.debug("%s: %s (%s)", name, decision.reason, instruction)
            return Resolution(name, declared, instruction, decision)

        upgraded = format_upgrade(declared, decision.version)
        if upgraded is None:
            decision = Rejected(f"cannot rewrite {declared.raw!r}")
            return Resolution(name, declared, instruction, decision)

        logger.info("%s: %s -> %s (%s)", name, declared.raw, upgraded, instruction)
        return Resolution(name, declared, instruction, decision, upgraded)

    # ------------------------------------------------------------------
    # Many dependencies
    # ------------------------------------------------------------------

    def upgrade(
        self,
        dependencies: Mapping[str, Any],
        registry: Mapping[str, PackageMetadata],
    ) -> Dict[str, str]:
        """Resolve every dependency and return the accepted upgrades.

        Args:
            dependencies: Dependency name to raw declared range.
            registry: Dependency name to registry metadata. Dependencies
                without metadata are skipped.

        Returns:
            Dependency name to new declaration, for accepted upgrades only.
        """
        results: Dict[str, str] = {}
        for name, raw in dependencies.items():
            metadata = self._metadata_for(name, registry)
            if metadata is None:
                continue
            upgraded = self.resolve(name, raw, metadata)
            if upgraded is not None:
                results[name] = upgraded
        return results

    async def upgrade_async(
        self,
        dependencies: Mapping[str, Any],
        registry: Mapping[str, PackageMetadata],
    ) -> Dict[str, str]:
        """Concurrent :meth:`upgrade` supporting async hooks."""
        jobs = []
        for name, raw in dependencies.items():
            metadata = self._metadata_for(name, registry)
            if metadata is not None:
                jobs.append((name, raw, metadata))

        upgraded = await asyncio.gather(
            *(self.resolve_async(name, raw, metadata) for name, raw, metadata in jobs)
        )
        return {
            name: value
            for (name, _, _), value in zip(jobs, upgraded)
            if value is not None
        }

    def explain_all(
        self,
        dependencies: Mapping[str, Any],
        registry: Mapping[str, PackageMetadata],
    ) -> Tuple[Resolution, ...]:
        """Resolutions for every dependency that has registry metadata."""
        resolutions = []
        for name, raw in dependencies.items():
            metadata = self._metadata_for(name, registry)
            if metadata is not None:
                resolutions.append(self.explain(name, raw, metadata))
        return tuple(resolutions)

    @staticmethod
    def _metadata_for(
        name: str,
        registry: Mapping[str, PackageMetadata],
    ) -> Optional[PackageMetadata]:
        metadata = registry.get(name)
        if metadata is None:
            logger.debug("No registry metadata for %s; skipping", name)
        return metadata


def upgrade_dependencies(
    dependencies: Mapping[str, Any],
    registry: Mapping[str, PackageMetadata],
    **options: Any,
) -> Dict[str, str]:
    """Convenience wrapper: ``UpgradeResolver(UpgradeOptions(**options)).upgrade(...)``.

    Example:
        >>> upgrade_dependencies({"chalk": "2.4.1"}, registry, target="patch")
        {'chalk': '2.4.2'}
    """
    return UpgradeResolver(UpgradeOptions(**options)).upgrade(dependencies, registry)
