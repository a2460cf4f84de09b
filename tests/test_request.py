"""Tests for request descriptors and the normalized request view."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from unless.http import HttpRequest, RequestView, context_field, parse_path


class TestParsePath:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/a/b", "/a/b"),
            ("/a/b?x=1&y=2", "/a/b"),
            ("/a/b#frag", "/a/b"),
            ("/a/b?x=1#frag", "/a/b"),
            ("//double/slash", "//double/slash"),
            ("http://example.com/a/b?x=1", "/a/b"),
            ("/", "/"),
        ],
    )
    def test_path_component(self, url: str, expected: str) -> None:
        assert parse_path(url) == expected

    def test_empty_url_has_no_path(self) -> None:
        assert parse_path("") is None

    def test_query_only_has_no_path(self) -> None:
        assert parse_path("?x=1") is None

    def test_absolute_url_without_path_is_root(self) -> None:
        assert parse_path("http://example.com") == "/"
        assert parse_path("https://example.com?x=1") == "/"


class TestContextField:
    def test_attribute(self) -> None:
        assert context_field(SimpleNamespace(url="/a"), "url") == "/a"

    def test_mapping(self) -> None:
        assert context_field({"url": "/a"}, "url") == "/a"

    def test_first_present_name_wins(self) -> None:
        ctx = SimpleNamespace(originalUrl="/camel")
        assert context_field(ctx, "original_url", "originalUrl") == "/camel"

    def test_missing_is_none(self) -> None:
        assert context_field(object(), "url") is None

    def test_falsy_is_none(self) -> None:
        assert context_field({"url": ""}, "url") is None


class TestRequestView:
    def test_from_http_request(self) -> None:
        v = RequestView.from_context(HttpRequest(method="POST", url="/items?page=2"))
        assert v.path == "/items"
        assert v.method == "POST"

    def test_original_url_selected(self) -> None:
        request = HttpRequest(url="/rewritten", original_url="/original")
        assert RequestView.from_context(request).path == "/rewritten"
        assert RequestView.from_context(request, use_original_url=True).path == "/original"

    def test_missing_fields_degrade_to_none(self) -> None:
        v = RequestView.from_context(object())
        assert v.path is None
        assert v.method is None

    def test_missing_original_url(self) -> None:
        v = RequestView.from_context({"url": "/a"}, use_original_url=True)
        assert v.path is None

    def test_non_string_url_ignored(self) -> None:
        v = RequestView.from_context({"url": 42, "method": 1})
        assert v.path is None
        assert v.method is None

    def test_context_kept(self) -> None:
        ctx = {"url": "/a"}
        assert RequestView.from_context(ctx).context is ctx


class TestHttpRequest:
    def test_original_url_defaults_to_url(self) -> None:
        assert HttpRequest(url="/a").original_url == "/a"

    def test_path_strips_query(self) -> None:
        assert HttpRequest(url="/a?b=c").path == "/a"

    def test_query_params(self) -> None:
        request = HttpRequest(url="/search?q=cats&safe&lang=en#top")
        assert request.query_params == {"q": "cats", "safe": "", "lang": "en"}
        assert request.query_param("q") == "cats"
        assert request.query_param("missing") is None

    def test_header_lookup_case_insensitive(self) -> None:
        request = HttpRequest(headers={"X-Internal": "1"})
        assert request.header("x-internal") == "1"
        assert request.header("X-INTERNAL") == "1"
        assert request.header("missing") is None
