"""Tests for the FastAPI service mode."""

from __future__ import annotations

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from mdlink.config import parse_config
from mdlink.engine import Engine
from mdlink.service import create_app
from mdlink.service.app import config_engine_factory

CONFIG = """
[profiles.short.orgs.rust-lang]
unmatched-repo-prefix = "repo-only"
"""


@pytest.fixture
def client() -> TestClient:
    app = create_app(config_engine_factory(parse_config(CONFIG)))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_render_endpoint(client: TestClient) -> None:
    response = client.post(
        "/render",
        json={
            "urls": [
                "https://github.com/rust-lang/rust/issues/123",
                "definitely not a url",
                "https://example.com/",
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "lines": [
            "[`rust-lang/rust`#123](https://github.com/rust-lang/rust/issues/123)",
            "<https://example.com/>",
        ]
    }


def test_render_endpoint_with_profile(client: TestClient) -> None:
    response = client.post(
        "/render",
        json={"urls": ["https://github.com/rust-lang/rust/pull/1"], "profile": "short"},
    )

    assert response.status_code == 200
    assert response.json()["lines"] == ["[`rust`#1](https://github.com/rust-lang/rust/pull/1)"]


def test_render_endpoint_rejects_unknown_profile(client: TestClient) -> None:
    response = client.post("/render", json={"urls": [], "profile": "missing"})

    assert response.status_code == 400
    assert "missing" in response.json()["detail"]


def test_custom_engine_factory_receives_profile() -> None:
    seen: list[Optional[str]] = []

    def _factory(profile: Optional[str]) -> Engine:
        seen.append(profile)
        return Engine()

    client = TestClient(create_app(_factory))
    response = client.post("/render", json={"urls": ["https://bugzil.la/9"], "profile": None})

    assert response.status_code == 200
    assert response.json() == {"lines": ["[bug 9](https://bugzil.la/9)"]}
    assert seen == [None]
