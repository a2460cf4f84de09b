"""DataInput implementations for RequestView.

Each input extracts one field from the normalized request view and
returns it as MatchingData for predicate evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unless._types import MatchingData
    from unless.http._request import RequestView


@dataclass(frozen=True, slots=True)
class PathInput:
    """Extracts the request path (without query string)."""

    def get(self, ctx: RequestView, /) -> MatchingData:
        return ctx.path


@dataclass(frozen=True, slots=True)
class MethodInput:
    """Extracts the HTTP method (case-sensitive)."""

    def get(self, ctx: RequestView, /) -> MatchingData:
        return ctx.method
