"""
Declared dependency ranges for bumpwise.

A declared range is the raw string a manifest holds for a dependency
(``"^8.3.2"``, ``"~36.1.0"``, ``"*"``, ``"github:a/b"`` ...). Parsing
classifies it into a closed set of variants:

- :class:`ValidRange`: recognised npm range syntax with a base version
- :class:`UnboundedRange`: ``"*"``, ``"x.x"`` or ``""``; matches everything
- :class:`InvalidRange`: anything else (VCS locators, URLs, free text)

:func:`parse_range` never raises. Every variant exposes ``raw``,
``operator`` and ``version`` (the latter two ``None`` unless valid), so
caller hooks can inspect a range without checking its type first.

Classification (operator, precision, wildcard) is done here because the
formatter needs the declaration's shape. Matching is delegated to
:class:`semantic_version.NpmSpec`, fed a canonical spelling of the range.
"""

from __future__ import annotations

import re
import functools
from enum import Enum
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import semantic_version

from bumpwise.models.version import SemanticVersion


class RangeOperator(str, Enum):
    """Operator of a :class:`ValidRange`."""

    EXACT = "="
    CARET = "^"
    TILDE = "~"
    GTE = ">="
    OTHER = "other"
    NONE = ""


class UnboundedKind(str, Enum):
    """Which unbounded spelling a range used."""

    WILDCARD = "*"
    EMPTY = ""


_WILDCARDS = ("x", "X", "*")

_ALL_WILDCARDS = re.compile(r"^[xX*](?:\.[xX*]){0,2}$")

_SIMPLE_RANGE = re.compile(
    r"""
    ^(?P<op>\^|~>?|>=|<=|>|<|=)?
    \s*[vV]?
    (?P<major>[0-9]+|[xX*])
    (?:\.(?P<minor>[0-9]+|[xX*]))?
    (?:\.(?P<patch>[0-9]+|[xX*]))?
    (?:-(?P<pre>[0-9A-Za-z.-]+))?
    (?:\+[0-9A-Za-z.-]+)?$
    """,
    re.VERBOSE,
)

_OP_SPACE = re.compile(r"(\^|~>?|>=|<=|>|<|=)\s+")
_HYPHEN = re.compile(r"^(\S+)\s+-\s+(\S+)$")

_OPERATORS = {
    "^": RangeOperator.CARET,
    "~": RangeOperator.TILDE,
    "~>": RangeOperator.TILDE,
    ">=": RangeOperator.GTE,
    "=": RangeOperator.EXACT,
    "": RangeOperator.NONE,
    "<": RangeOperator.OTHER,
    "<=": RangeOperator.OTHER,
    ">": RangeOperator.OTHER,
}


@functools.lru_cache(maxsize=1024)
def _npm_spec(expression: str) -> semantic_version.NpmSpec:
    return semantic_version.NpmSpec(expression)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class DeclaredRange:
    """Base of the declared-range variants. Not instantiated directly."""

    __slots__ = ()

    raw: str
    operator: Optional[RangeOperator]
    version: Optional[SemanticVersion]

    @property
    def major(self) -> Optional[int]:
        return self.version.major if self.version is not None else None

    @property
    def minor(self) -> Optional[int]:
        return self.version.minor if self.version is not None else None

    @property
    def patch(self) -> Optional[int]:
        return self.version.patch if self.version is not None else None

    @property
    def is_valid(self) -> bool:
        return isinstance(self, ValidRange)


@dataclass(frozen=True)
class ValidRange(DeclaredRange):
    """
    A recognised range with a base version.

    Attributes:
        raw: Original text.
        operator: Range operator; ``NONE`` for a bare version.
        version: Base version (for compound ranges, that of the first
            comparator).
        prefix: Operator text as written (``"~>"``, ``"<="`` ...).
        precision: Number of numeric components written (1-3).
        width: Number of components written, wildcards included.
        wildcard: Wildcard character used for omitted components, if any.
        expression: Canonical npm spelling of the range, used for matching.
        compound: True when the range has several comparators or
            alternatives and therefore no single operator.
    """

    raw: str
    operator: RangeOperator
    version: SemanticVersion
    prefix: str = ""
    precision: int = 3
    width: int = 3
    wildcard: Optional[str] = None
    expression: str = ""
    compound: bool = False

    def satisfied_by(self, candidate: SemanticVersion) -> bool:
        """Return True when ``candidate`` falls inside this range.

        Follows npm semantics, including its prerelease rule: a prerelease
        candidate only matches a comparator set that itself names a
        prerelease on the same major.minor.patch.
        """
        spec = _npm_spec(self.expression)
        return spec.match(semantic_version.Version(str(candidate)))


@dataclass(frozen=True)
class UnboundedRange(DeclaredRange):
    """``"*"`` (or ``x``, ``x.x`` ...) or the empty string."""

    raw: str

    @property
    def operator(self) -> None:
        return None

    @property
    def version(self) -> None:
        return None

    @property
    def kind(self) -> UnboundedKind:
        return UnboundedKind.EMPTY if not self.raw.strip() else UnboundedKind.WILDCARD


@dataclass(frozen=True)
class InvalidRange(DeclaredRange):
    """A declaration that is not a semantic-version range."""

    raw: str

    @property
    def operator(self) -> None:
        return None

    @property
    def version(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_range(raw: object) -> DeclaredRange:
    """
    Classify a declared range string.

    Never raises: anything that is not range syntax comes back as an
    :class:`InvalidRange` carrying the original text.

    Args:
        raw: Declared range, normally a string; ``None`` counts as empty.

    Returns:
        A :class:`ValidRange`, :class:`UnboundedRange` or
        :class:`InvalidRange`.

    Example:
        >>> parse_range("^8.3.2").operator
        <RangeOperator.CARET: '^'>
        >>> parse_range("github:a/b").is_valid
        False
    """
    text = "" if raw is None else str(raw)
    stripped = text.strip()

    if not stripped or _ALL_WILDCARDS.match(stripped):
        return UnboundedRange(text)

    simple = _parse_simple(stripped)
    if simple is not None:
        declared: DeclaredRange = ValidRange(
            raw=text,
            operator=simple.operator,
            version=simple.version,
            prefix=simple.prefix,
            precision=simple.precision,
            width=simple.width,
            wildcard=simple.wildcard,
            expression=simple.expression,
        )
    else:
        declared = _parse_compound(text, stripped)

    if isinstance(declared, ValidRange):
        try:
            _npm_spec(declared.expression)
        except ValueError:
            return InvalidRange(text)
    return declared


class _Token(NamedTuple):
    operator: RangeOperator
    prefix: str
    version: SemanticVersion
    precision: int
    width: int
    wildcard: Optional[str]
    expression: str


def _parse_simple(token: str) -> Optional[_Token]:
    """Parse a single ``<op><version>`` token, or return ``None``."""
    match = _SIMPLE_RANGE.match(token)
    if match is None:
        return None

    prefix = match.group("op") or ""
    parts = [match.group("major"), match.group("minor"), match.group("patch")]
    pre = match.group("pre")

    numeric: List[int] = []
    written: List[str] = []
    wildcard: Optional[str] = None
    for part in parts:
        if part is None:
            break
        written.append(part)
        if part in _WILDCARDS:
            wildcard = wildcard or part
            continue
        if wildcard is not None:
            # "1.x.3" has a number after a wildcard
            return None
        numeric.append(int(part))
        written[-1] = str(numeric[-1])

    if not numeric:
        return None
    precision = len(numeric)
    if pre is not None and precision < 3:
        return None

    text = ".".join(str(n) for n in numeric + [0] * (3 - precision))
    if pre is not None:
        text = f"{text}-{pre}"
    version = SemanticVersion.try_parse(text)
    if version is None:
        return None

    # NpmSpec knows "~" but not Ruby's "~>", and wants no "v" or build
    expression = ("~" if prefix == "~>" else prefix) + ".".join(written)
    if pre is not None:
        expression = f"{expression}-{pre}"

    return _Token(
        _OPERATORS[prefix], prefix, version, precision, len(written), wildcard, expression
    )


def _parse_compound(text: str, stripped: str) -> DeclaredRange:
    """Parse ``||`` alternatives, hyphen ranges and comparator lists."""
    groups: List[str] = []
    first: Optional[SemanticVersion] = None

    for alternative in stripped.split("||"):
        alternative = _OP_SPACE.sub(r"\1", alternative.strip())
        if not alternative:
            return InvalidRange(text)

        hyphen = _HYPHEN.match(alternative)
        tokens = [hyphen.group(1), hyphen.group(2)] if hyphen else alternative.split()

        rendered: List[str] = []
        for token in tokens:
            if _ALL_WILDCARDS.match(token):
                rendered.append("*")
                continue
            parsed = _parse_simple(token)
            if parsed is None or (hyphen and parsed.prefix):
                return InvalidRange(text)
            if first is None:
                first = parsed.version
            rendered.append(parsed.expression)
        groups.append(" - ".join(rendered) if hyphen else " ".join(rendered))

    if first is None:
        # Only wildcards, e.g. "* || x"
        return UnboundedRange(text)

    return ValidRange(
        raw=text,
        operator=RangeOperator.OTHER,
        version=first,
        prefix="",
        expression=" || ".join(groups),
        compound=True,
    )
