"""Concrete string matchers implementing the InputMatcher protocol.

Each matcher is a frozen dataclass, immutable after construction.
All matchers return False for non-string or None input values.

Pattern strings are compiled with ``google-re2`` for guaranteed linear-time
matching. RE2 does not support backreferences or lookahead/lookbehind
because they require backtracking; patterns using them are rejected at
compile time. CompiledRegexMatcher wraps a caller-compiled object as is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import re2

if TYPE_CHECKING:
    from unless._types import MatchingData


class MatcherError(Exception):
    """Errors from matcher construction."""


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """Exact, case-sensitive string equality.

    Used for literal paths and for HTTP method names.
    """

    value: str

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str):
            return False
        return value == self.value


@dataclass(frozen=True, slots=True)
class SuffixMatcher:
    """Trailing-substring match, used for file extensions.

    No segment or dot boundary is enforced: ``SuffixMatcher("son")``
    matches ``/data.json``. An empty suffix never matches.
    """

    suffix: str

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str) or not self.suffix:
            return False
        return value.endswith(self.suffix)


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Regular expression match.

    The pattern is compiled at construction time via ``google-re2``. Uses
    search (not fullmatch), so an unanchored pattern matches anywhere in
    the path.

    Raises:
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str):
            return False
        return self._compiled.search(value) is not None


@dataclass(frozen=True, slots=True)
class CompiledRegexMatcher:
    """Match with a pattern object the caller already compiled.

    The object's own ``search`` is used, so its engine and flags are kept:
    a ``re.Pattern`` built with ``re.IGNORECASE`` or lookaround behaves
    exactly as compiled. Linear-time matching is only guaranteed when the
    object comes from ``re2``.
    """

    compiled: Any

    def matches(self, value: MatchingData, /) -> bool:
        if not isinstance(value, str):
            return False
        return self.compiled.search(value) is not None
