"""Test utilities for unless.

Provides call-recording stand-ins for a wrapped handler and for the
pipeline's ``next`` continuation, so tests and examples can see which of
the two a decision function invoked.

>>> from unless import attach
>>> from unless.http import HttpRequest
>>> from unless.testing import RecordingHandler, recording_next
>>> handler, nxt = RecordingHandler(), recording_next()
>>> attach(handler, path="/health")(HttpRequest(url="/health"), nxt)
'next'
>>> handler.calls, nxt.calls
(0, 1)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RecordingHandler:
    """A ``(context, next)`` handler that records each call.

    Returns ``result`` without calling ``next``.
    """

    result: Any = "handler"
    seen: list[tuple[Any, Any]] = field(default_factory=list)

    def __call__(self, context: Any, next: Any) -> Any:  # noqa: A002
        self.seen.append((context, next))
        return self.result

    @property
    def calls(self) -> int:
        return len(self.seen)


@dataclass(slots=True)
class RecordingNext:
    """A zero-argument continuation that counts its calls."""

    result: Any = "next"
    calls: int = 0

    def __call__(self) -> Any:
        self.calls += 1
        return self.result


def recording_next(result: Any = "next") -> RecordingNext:
    """Create a RecordingNext returning ``result``."""
    return RecordingNext(result=result)
