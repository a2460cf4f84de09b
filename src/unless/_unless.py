"""Unless — wrap a middleware so it is skipped for matching requests.

The decision function keeps the ``(context, next)`` shape of the handler it
wraps. Per request it builds a RequestView, evaluates the configured rules
(custom → path → ext → method, first match wins) and then calls exactly one
of ``next()`` or ``handler(context, next)``, returning that call's result
unchanged. Awaitables are passed through unawaited, so the same wrapper
serves synchronous and asynchronous pipelines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from unless._config import UnlessConfig
from unless.http._request import RequestView

if TYPE_CHECKING:
    from collections.abc import Callable

    from unless._predicate import Predicate
    from unless._types import ContextLike, Handler, Next

logger = logging.getLogger(__name__)


class Unless:
    """Decision function guarding one wrapped handler.

    Immutable after construction and holds no per-request state, so one
    instance can serve any number of concurrent requests.
    """

    __slots__ = ("__wrapped__", "config", "handler", "predicate")

    def __init__(self, handler: Handler, config: UnlessConfig) -> None:
        self.handler = handler
        self.config = config
        self.predicate: Predicate[RequestView] = config.to_predicate()
        self.__wrapped__ = handler
        if config.is_empty:
            logger.debug("no unless rules configured for %r; it will always run", handler)

    def __repr__(self) -> str:
        return f"Unless({self.handler!r}, {self.config!r})"

    def matches(self, context: ContextLike) -> bool:
        """True if the wrapped handler would be skipped for this context."""
        view = RequestView.from_context(context, use_original_url=self.config.use_original_url)
        return self.predicate.evaluate(view)

    def __call__(self, context: ContextLike, next: Next) -> Any:  # noqa: A002
        if self.matches(context):
            logger.debug("skipping %r for %r", self.handler, context)
            return next()
        return self.handler(context, next)


def attach(handler: Handler, options: Any = None, /, **fields: Any) -> Unless:
    """Wrap ``handler`` so it is skipped when any configured rule matches.

    ``options`` is a predicate callable (taken as ``custom``), a mapping
    with the keys ``custom``, ``path``, ``ext``, ``method`` and
    ``useOriginalUrl``, or an UnlessConfig. Keyword arguments build the
    same mapping::

        api_auth = attach(auth, path=["/login", PathPattern(r"^/public/")])
        static = attach(auth, ext=[".css", ".js"], method="OPTIONS")

    Raises:
        MatcherError: If a path pattern is not valid RE2 syntax.
        ConfigParseError: If ``options`` is neither callable nor a mapping.
    """
    if fields:
        if options is not None:
            msg = "pass options either positionally or as keywords, not both"
            raise TypeError(msg)
        options = fields
    return Unless(handler, UnlessConfig.from_options(options))


def unless(options: Any = None, /, **fields: Any) -> Callable[[Handler], Unless]:
    """Decorator form of attach().

    ::

        @unless(path="/health")
        def auth(ctx, next):
            ...
    """
    if fields:
        if options is not None:
            msg = "pass options either positionally or as keywords, not both"
            raise TypeError(msg)
        options = fields
    config = UnlessConfig.from_options(options)

    def decorator(handler: Handler) -> Unless:
        return Unless(handler, config)

    return decorator
