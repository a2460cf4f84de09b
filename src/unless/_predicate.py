"""Predicate composition over a request view.

SinglePredicate combines a DataInput (extract) with an InputMatcher (match).
CustomPredicate defers to a user callable that sees the raw request context.
Or composes predicates with short-circuit evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

if TYPE_CHECKING:
    from unless._types import CustomFn, DataInput, InputMatcher
    from unless.http._request import RequestView

Ctx = TypeVar("Ctx")


@dataclass(frozen=True, slots=True)
class SinglePredicate(Generic[Ctx]):
    """A single predicate: extract data, then match.

    Enforces the None -> false invariant: if the DataInput returns None,
    the predicate evaluates to False without consulting the matcher.
    """

    input: DataInput[Ctx]
    matcher: InputMatcher

    def evaluate(self, ctx: Any) -> bool:
        value = self.input.get(ctx)
        if value is None:
            return False
        return self.matcher.matches(value)


@dataclass(frozen=True, slots=True)
class CustomPredicate:
    """Calls a user predicate with the original request context.

    Any truthy return value counts as a match. Exceptions raised by the
    callable propagate to the caller.
    """

    fn: CustomFn

    def evaluate(self, ctx: RequestView) -> bool:
        return bool(self.fn(ctx.context))


@dataclass(frozen=True, slots=True)
class Or(Generic[Ctx]):
    """Any predicate must match (logical OR).

    Short-circuits on the first True. Empty Or returns False.
    """

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Any) -> bool:
        return any(p.evaluate(ctx) for p in self.predicates)


Predicate: TypeAlias = SinglePredicate[Ctx] | CustomPredicate | Or[Ctx]


def or_predicate(predicates: list[Predicate[Ctx]]) -> Predicate[Ctx]:
    """Compose predicates with OR semantics, optimizing for common cases.

    - Empty -> Or(()) (no conditions = never matches)
    - Single -> unwrapped (no wrapping overhead)
    - Multiple -> Or(predicates)
    """
    if len(predicates) == 1:
        return predicates[0]
    return Or(tuple(predicates))
