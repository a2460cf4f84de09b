"""Core protocols and type aliases for unless.

- MatchingData is the value an input extracts from a request view
- DataInput is the request-side extraction port
- InputMatcher is the value-side matching port
- RequestContext describes what a pipeline framework hands us per request
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias, TypeVar, runtime_checkable

# None means "data not available" and triggers the None -> false invariant.
MatchingData = str | None

Ctx = TypeVar("Ctx", contravariant=True)

# Zero-argument continuation supplied by the pipeline.
Next: TypeAlias = Callable[[], Any]

# Any (context, next) callable: the wrapped middleware and the decision function.
Handler: TypeAlias = Callable[[Any, Next], Any]

# Custom skip predicate, called with the request context as its only argument.
CustomFn: TypeAlias = Callable[[Any], Any]


@runtime_checkable
class DataInput(Protocol[Ctx]):
    """Extract a value from a request view.

    Returning None signals "data not available" and causes the predicate
    to evaluate to False (the None -> false invariant).
    """

    def get(self, ctx: Ctx, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against an extracted value.

    Matchers know nothing about requests, so the same ExactMatcher serves
    both path literals and method names.
    """

    def matches(self, value: MatchingData, /) -> bool: ...


class RequestContext(Protocol):
    """The per-request descriptor a pipeline framework supplies.

    Only ``url`` is required. Contexts that lack ``original_url`` or
    ``method`` simply never match the predicates that read them. Plain
    mappings carrying the same keys are accepted too (see ContextLike).
    """

    url: str


# What the decision function accepts as a request context.
ContextLike: TypeAlias = RequestContext | Mapping[str, Any]
