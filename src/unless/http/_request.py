"""Request descriptors and the normalized per-request view.

HttpRequest is a simple descriptor for pipelines (and tests) that have no
context object of their own. RequestView is what predicates evaluate
against: the request path parsed once, the method, and the untouched
context for custom predicates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from unless._types import ContextLike


def context_field(ctx: Any, *names: str) -> Any:
    """Read the first present, truthy field from a context object or mapping."""
    for name in names:
        if isinstance(ctx, Mapping):
            value = ctx.get(name)
        else:
            value = getattr(ctx, name, None)
        if value:
            return value
    return None


def parse_path(url: str) -> str | None:
    """Return the path component of a URL, without query or fragment.

    Origin-form URLs (``/a/b?x=1``) are split directly so that a leading
    ``//`` stays part of the path. Anything else goes through urlsplit; an
    absolute URL with no path (``http://host``) has the root path ``/``.
    Returns None when there is no path to match against.
    """
    if url.startswith("/"):
        path = url.split("#", 1)[0].split("?", 1)[0]
    else:
        parts = urlsplit(url)
        path = parts.path
        if not path and parts.scheme and parts.netloc:
            path = "/"
    return path or None


@dataclass(frozen=True, slots=True)
class RequestView:
    """Normalized view of one request, built once per decision."""

    context: ContextLike
    path: str | None
    method: str | None

    @classmethod
    def from_context(
        cls, context: ContextLike, *, use_original_url: bool = False
    ) -> RequestView:
        if use_original_url:
            url = context_field(context, "original_url", "originalUrl")
        else:
            url = context_field(context, "url")
        method = context_field(context, "method")
        return cls(
            context=context,
            path=parse_path(url if isinstance(url, str) else ""),
            method=method if isinstance(method, str) else None,
        )


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """HTTP request descriptor.

    ``url`` is the current (possibly rewritten) URL and ``original_url``
    the one received from the client; it defaults to ``url``.

    Headers are stored with lowercased keys for case-insensitive lookup.
    Matching itself reads only the URLs and method; ``header()`` and
    ``query_param()`` are there for custom predicates, e.g.
    ``attach(auth, lambda req: req.header("x-internal") == "1")``.
    """

    method: str = "GET"
    url: str = "/"
    original_url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    _query_params: dict[str, str] = field(init=False, repr=False)
    _lower_headers: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.original_url is None:
            object.__setattr__(self, "original_url", self.url)

        params: dict[str, str] = {}
        if "?" in self.url:
            query_string = self.url.split("?", 1)[1].split("#", 1)[0]
            for part in query_string.split("&"):
                if "=" in part:
                    k, v = part.split("=", 1)
                    params[k] = v
                elif part:
                    params[part] = ""
        object.__setattr__(self, "_query_params", params)

        object.__setattr__(
            self,
            "_lower_headers",
            {k.lower(): v for k, v in self.headers.items()},
        )

    @property
    def path(self) -> str | None:
        """Path of the current URL, without query string."""
        return parse_path(self.url)

    @property
    def query_params(self) -> dict[str, str]:
        """Parsed query parameters of the current URL."""
        return self._query_params

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self._lower_headers.get(name.lower())

    def query_param(self, name: str) -> str | None:
        """Get a query parameter by name."""
        return self._query_params.get(name)
