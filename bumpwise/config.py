"""Configuration file loader for bumpwise.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``bumpwise.toml``: settings under a ``[bumpwise]`` table
- ``pyproject.toml``: settings under a ``[tool.bumpwise]`` table

Discovery order:

1. Explicit path from ``--config`` or ``BUMPWISE_CONFIG``
2. ``bumpwise.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.bumpwise]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``bumpwise.toml``)::

    [bumpwise]
    target = "minor"
    pre = false
    reject = ["eslint-*", "/^@types\\//"]
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field

from bumpwise.core.filters import as_predicate
from bumpwise.core.target import coerce_target
from bumpwise.exceptions import ConfigError
from bumpwise.utils.logger import get_logger
from bumpwise.constants import DEFAULT_TARGET

logger = get_logger("config")

PatternOption = Optional[Union[str, List[str]]]


@dataclass
class BumpwiseConfig:
    """Parsed and validated bumpwise configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        target: Preset keyword or ``@tag``.
        pre: Include prerelease candidates; ``None`` keeps the per-target
            default.
        filter: Name patterns to keep.
        reject: Name patterns to drop.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    target: str = DEFAULT_TARGET
    pre: Optional[bool] = None
    filter: PatternOption = None
    reject: PatternOption = None

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration options as a dictionary for debug logging."""
        return {
            "target": self.target,
            "pre": self.pre,
            "filter": self.filter,
            "reject": self.reject,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    bumpwise_toml = cwd / "bumpwise.toml"
    if bumpwise_toml.is_file():
        logger.debug("Found bumpwise.toml: %s", bumpwise_toml)
        return bumpwise_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_bumpwise_section(pyproject_toml):
        logger.debug("Found [tool.bumpwise] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_bumpwise_section(path: Path) -> bool:
    """Check whether pyproject.toml has a ``[tool.bumpwise]`` section.

    An unreadable pyproject.toml is treated as having none.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return "bumpwise" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> BumpwiseConfig:
    """Load and validate bumpwise configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`BumpwiseConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return BumpwiseConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("bumpwise", {})
    else:
        section = raw.get("bumpwise", {})

    if not section:
        logger.debug("Config file found but no bumpwise section, using defaults")
        return BumpwiseConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_patterns(value: Any, *, option: str, config_path: str) -> PatternOption:
    """Validate a ``filter``/``reject`` value: a string or list of strings."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        patterns: PatternOption = list(value)
    elif isinstance(value, str):
        patterns = value
    else:
        raise ConfigError(
            f"{option} must be a string or a list of strings, "
            f"got {type(value).__name__}",
            config_path=config_path,
            option=option,
        )

    try:
        as_predicate(patterns)
    except ConfigError as exc:
        raise ConfigError(exc.message, config_path=config_path, option=option) from exc
    return patterns


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> BumpwiseConfig:
    """Parse and validate a ``[bumpwise]`` / ``[tool.bumpwise]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = BumpwiseConfig()

    known_top = {"target", "pre", "filter", "reject"}
    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "target" in section:
        val = section["target"]
        if not isinstance(val, str):
            raise ConfigError(
                f"target must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="target",
            )
        try:
            coerce_target(val)
        except ConfigError as exc:
            raise ConfigError(
                exc.message, config_path=config_path, option="target"
            ) from exc
        config.target = val

    if "pre" in section:
        val = section["pre"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"pre must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="pre",
            )
        config.pre = val

    for option in ("filter", "reject"):
        if option in section:
            setattr(
                config,
                option,
                _parse_patterns(section[option], option=option, config_path=config_path),
            )

    return config
