"""Configuration for the unless evaluator.

Options arrive in loose shapes (a bare callable, a dict with scalar or list
values, bare strings or compiled patterns as path entries) and are
normalized once, at construction time, into an immutable UnlessConfig:

  callable | dict | UnlessConfig → UnlessConfig.from_options() → UnlessConfig
  YAML file → load_unless_config() → parse_unless_config() → UnlessConfig

Entries of an unsupported shape are dropped during normalization, so they
never match. This mirrors how an ill-typed matcher simply fails to match
rather than raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

import yaml

from unless._predicate import CustomPredicate, SinglePredicate, or_predicate
from unless._string_matchers import (
    CompiledRegexMatcher,
    ExactMatcher,
    RegexMatcher,
    SuffixMatcher,
)
from unless.http._inputs import MethodInput, PathInput

if TYPE_CHECKING:
    from unless._predicate import Predicate
    from unless._types import CustomFn
    from unless.http._request import RequestView

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Path matchers (tagged variant: PathLiteral | PathPattern)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PathLiteral:
    """Exact, case-sensitive match against the path component."""

    value: str

    def to_matcher(self) -> ExactMatcher:
        return ExactMatcher(self.value)


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Regex searched anywhere within the path component.

    Anchor with ``^`` / ``$`` to match the whole path. A string is compiled
    eagerly under RE2, so a bad pattern fails at configuration time, not on
    the first request. An already-compiled pattern object (``re`` or ``re2``)
    is used as is, with its own flags and engine.

    Raises:
        MatcherError: If a string pattern is not valid RE2 syntax.
    """

    regex: str | Any
    _matcher: RegexMatcher | CompiledRegexMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.regex, str):
            matcher = RegexMatcher(self.regex)
        else:
            matcher = CompiledRegexMatcher(self.regex)
        object.__setattr__(self, "_matcher", matcher)

    def to_matcher(self) -> RegexMatcher | CompiledRegexMatcher:
        return self._matcher


PathMatcher: TypeAlias = PathLiteral | PathPattern


# ═══════════════════════════════════════════════════════════════════════════════
# Normalization helpers
# ═══════════════════════════════════════════════════════════════════════════════


def as_tuple(value: Any) -> tuple[Any, ...]:
    """Absent → (), list/tuple → tuple, anything else → single-element tuple."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _coerce_path(entry: Any) -> PathMatcher | None:
    match entry:
        case PathLiteral() | PathPattern():
            return entry
        case str():
            return PathLiteral(entry)
        case {"regex": str(regex)}:
            return PathPattern(regex)
        case {"exact": str(value)}:
            return PathLiteral(value)
    if callable(getattr(entry, "search", None)):
        return PathPattern(entry)
    return None


def _strings(name: str, entries: tuple[Any, ...]) -> tuple[str, ...]:
    kept = tuple(e for e in entries if isinstance(e, str))
    if len(kept) != len(entries):
        logger.debug("ignoring %d non-string %s entries", len(entries) - len(kept), name)
    return kept


def _paths(entries: tuple[Any, ...]) -> tuple[PathMatcher, ...]:
    kept: list[PathMatcher] = []
    for entry in entries:
        matcher = _coerce_path(entry)
        if matcher is None:
            logger.debug("ignoring unsupported path entry %r", entry)
            continue
        kept.append(matcher)
    return tuple(kept)


# ═══════════════════════════════════════════════════════════════════════════════
# UnlessConfig
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UnlessConfig:
    """Rules under which the wrapped handler is skipped.

    Every field is optional and an empty field never matches. Scalars are
    accepted for ``path``, ``ext`` and ``method`` and normalized to tuples
    at construction time, so ``UnlessConfig(method="GET")`` is the same as
    ``UnlessConfig(method=("GET",))``.

    Checks run in a fixed order (custom, path, ext, method) and the first
    match wins.
    """

    custom: CustomFn | None = None
    path: tuple[PathMatcher, ...] = ()
    ext: tuple[str, ...] = ()
    method: tuple[str, ...] = ()
    use_original_url: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _paths(as_tuple(self.path)))
        object.__setattr__(self, "ext", _strings("ext", as_tuple(self.ext)))
        object.__setattr__(self, "method", _strings("method", as_tuple(self.method)))
        object.__setattr__(self, "use_original_url", bool(self.use_original_url))
        if self.custom is not None and not callable(self.custom):
            logger.debug("ignoring non-callable custom predicate %r", self.custom)
            object.__setattr__(self, "custom", None)

    @classmethod
    def from_options(cls, options: Any = None, /) -> UnlessConfig:
        """Normalize any accepted options shape into an UnlessConfig.

        - None → empty config (never skips)
        - UnlessConfig → returned as is
        - callable → ``UnlessConfig(custom=options)``
        - mapping → parse_unless_config()
        """
        if options is None:
            return cls()
        if isinstance(options, UnlessConfig):
            return options
        if callable(options):
            return cls(custom=options)
        return parse_unless_config(options)

    @property
    def is_empty(self) -> bool:
        """True when no rule is configured, so nothing is ever skipped."""
        return self.custom is None and not (self.path or self.ext or self.method)

    def to_predicate(self) -> Predicate[RequestView]:
        """Convert this config into a predicate tree over RequestView."""
        checks: list[Predicate[RequestView]] = []

        if self.custom is not None:
            checks.append(CustomPredicate(self.custom))

        if self.path:
            checks.append(
                or_predicate([SinglePredicate(PathInput(), p.to_matcher()) for p in self.path])
            )

        if self.ext:
            checks.append(
                or_predicate([SinglePredicate(PathInput(), SuffixMatcher(e)) for e in self.ext])
            )

        if self.method:
            checks.append(
                or_predicate([SinglePredicate(MethodInput(), ExactMatcher(m)) for m in self.method])
            )

        return or_predicate(checks)


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict / YAML → UnlessConfig)
# ═══════════════════════════════════════════════════════════════════════════════

_KNOWN_KEYS = frozenset({"custom", "path", "ext", "method", "useOriginalUrl", "use_original_url"})


class ConfigParseError(Exception):
    """Error parsing a config document into an UnlessConfig."""


def parse_unless_config(data: Mapping[str, Any]) -> UnlessConfig:
    """Parse a mapping into an UnlessConfig.

    Accepts ``useOriginalUrl`` as well as ``use_original_url``. Path
    entries may be strings, ``{"regex": "..."}`` / ``{"exact": "..."}``
    mappings, PathLiteral / PathPattern values or compiled patterns.

    Raises:
        ConfigParseError: If ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        msg = f"expected mapping or callable, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        logger.debug("ignoring unknown unless options: %s", ", ".join(sorted(map(str, unknown))))

    use_original_url = data.get("useOriginalUrl", data.get("use_original_url", False))
    return UnlessConfig(
        custom=data.get("custom"),
        path=data.get("path"),
        ext=data.get("ext"),
        method=data.get("method"),
        use_original_url=use_original_url,
    )


def load_unless_config(path: str | Path) -> UnlessConfig:
    """Load the declarative part of a config from a YAML file.

    An empty document yields an empty config. ``custom`` cannot be
    expressed in YAML and is ignored if present.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a mapping.
    """
    source = Path(path)
    try:
        with source.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {source}: {e}"
        raise ConfigParseError(msg) from e

    if data is None:
        return UnlessConfig()
    if not isinstance(data, Mapping):
        msg = f"{source}: expected a mapping at top level, got {type(data).__name__}"
        raise ConfigParseError(msg)
    return parse_unless_config({k: v for k, v in data.items() if k != "custom"})
