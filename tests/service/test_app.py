"""Tests for the FastAPI service mode."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tokensmith.config import TokensmithConfig
from tokensmith.orchestrator import Orchestrator
from tokensmith.service import create_app


@pytest.fixture
def client(fixed_now: datetime) -> TestClient:
    app = create_app(lambda: Orchestrator(config=TokensmithConfig(root=Path.cwd()), clock=lambda: fixed_now))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_endpoint_returns_artifacts(client: TestClient, light, dark, values) -> None:
    response = client.post(
        "/generate",
        json={"light": light, "dark": dark, "values": values, "platforms": ["web"], "changelog": True},
    )

    assert response.status_code == 200
    payload = response.json()
    filenames = [artifact["filename"] for artifact in payload["artifacts"]]
    assert "Primitives.scss" in filenames
    assert {artifact["platform"] for artifact in payload["artifacts"]} == {"web"}
    assert payload["stats"]["primitive_colors"] == 8
    assert payload["stats"]["radius_tokens"] == 2
    assert payload["warnings"] == []
    assert payload["changelog"].startswith("## Tokensmith — Oct 18, 2026")


def test_generate_endpoint_diffs_references(client: TestClient, light, dark) -> None:
    response = client.post(
        "/generate",
        json={
            "light": light,
            "dark": dark,
            "platforms": ["web"],
            "best_practices": False,
            "references": {"Primitives.scss": "$grey-750: #404040;\n$old-grey: #999999;\n"},
        },
    )

    payload = response.json()
    assert [record["filename"] for record in payload["diffs"]] == ["Primitives.scss"]
    assert payload["diffs"][0]["removed_tokens"] == ["old-grey"]
    assert payload["changelog"] is None


def test_generate_endpoint_rejects_unknown_platforms(client: TestClient, light, dark) -> None:
    response = client.post("/generate", json={"light": light, "dark": dark, "platforms": ["desktop"]})

    assert response.status_code == 400
    assert "desktop" in response.json()["detail"]


def test_generate_endpoint_validates_payload(client: TestClient, light) -> None:
    response = client.post("/generate", json={"light": light})

    assert response.status_code == 422


def test_oversized_bodies_are_rejected(client: TestClient) -> None:
    response = client.post(
        "/generate",
        content=b" " * (11 * 1024 * 1024),
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 413


def test_chunked_bodies_over_the_limit_are_rejected(client: TestClient) -> None:
    chunks = (b" " * (1024 * 1024) for _ in range(11))

    response = client.post("/generate", content=chunks, headers={"content-type": "application/json"})

    assert response.status_code == 413
    assert response.json() == {"detail": "Request body exceeds 10 MB"}


def test_diff_endpoint(client: TestClient) -> None:
    response = client.post(
        "/diff",
        json={
            "reference": "$grey-750: #404040;\n$blue-600: #2563eb;\n",
            "generated": "$grey-750: #404040;\n$blue-600: #1d4ed8;\n",
            "filename": "Primitives.scss",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["record"]["modified_tokens"] == [
        {"name": "blue-600", "old_value": "#2563eb", "new_value": "#1d4ed8"}
    ]
    assert (payload["added"], payload["removed"], payload["unchanged"], payload["modified"]) == (1, 1, 1, 1)
    assert payload["unified"].startswith("--- reference/Primitives.scss\n+++ generated/Primitives.scss\n")
