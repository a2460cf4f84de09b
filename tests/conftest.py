"""Fixture loader for unless conformance cases.

Loads YAML documents from tests/fixtures/ and converts them to
(config, request, expected decision) cases for parametrized testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from unless import UnlessConfig, parse_unless_config
from unless.http import HttpRequest
from unless.testing import RecordingHandler, RecordingNext, recording_next

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    config: UnlessConfig
    request: HttpRequest
    expect: str

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── YAML → unless type conversion ──────────────────────────────────────────


def parse_request(spec: dict[str, Any]) -> HttpRequest:
    """Parse a YAML request spec into an HttpRequest."""
    original_url = spec.get("original_url")
    return HttpRequest(
        method=str(spec.get("method", "GET")),
        url=str(spec.get("url", "/")),
        original_url=str(original_url) if original_url is not None else None,
        headers={str(k): str(v) for k, v in spec.get("headers", {}).items()},
    )


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_fixtures() -> list[FixtureCase]:
    """Load every fixture document under tests/fixtures/."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            config = parse_unless_config(doc["config"])
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        config=config,
                        request=parse_request(case["request"]),
                        expect=case["expect"],
                    )
                )
    return cases


# ─── Shared fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def nxt() -> RecordingNext:
    return recording_next()
