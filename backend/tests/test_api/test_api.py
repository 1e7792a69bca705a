"""Tests for API endpoints (no LLM calls)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from thoughtlands.main import app
from tests.conftest import (
    CHAIN_EMBEDDINGS,
    CHAIN_SIMILARITIES,
    NOTE_TEXTS,
    TWO_GROUP_EMBEDDINGS,
    TWO_GROUP_SIMILARITIES,
    StubSummarizer,
)


client = TestClient(app)


def _items(embeddings, similarities):
    return [
        {
            "id": item_id,
            "embedding": vec,
            "concept_similarity": similarities[item_id],
            "text": NOTE_TEXTS.get(item_id, ""),
        }
        for item_id, vec in embeddings.items()
    ]


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["modes"] == ["walkabout", "hopscotch", "rolling_path", "regiment", "gaggle"]


def test_prompts():
    response = client.get("/api/prompts")
    assert response.status_code == 200
    assert "cluster_summary" in response.json()


def test_walkabout_layout():
    response = client.post("/api/layout", json={
        "mode": "walkabout",
        "concept_text": "What do I know?",
        "items": _items(TWO_GROUP_EMBEDDINGS, TWO_GROUP_SIMILARITIES),
        "clustering_percent": 100,
        "seed": 3,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "walkabout"
    assert len(data["positions"]) == 6
    assert data["positions"][0]["width"] == 280.0
    assert data["diagnostics"]["clustering_level"] == 4
    kinds = [c["kind"] for c in data["cards"]]
    assert kinds[0] == "concept"
    assert "cluster_summary" in kinds
    assert data["cards"][0]["text"] == "What do I know?"


def test_seeded_requests_repeat():
    body = {
        "mode": "gaggle",
        "items": _items(TWO_GROUP_EMBEDDINGS, TWO_GROUP_SIMILARITIES),
        "seed": 12,
    }
    first = client.post("/api/layout", json=body).json()
    second = client.post("/api/layout", json=body).json()
    assert first["positions"] == second["positions"]


def test_hopscotch_layout():
    response = client.post("/api/layout", json={
        "mode": "hopscotch",
        "items": _items(CHAIN_EMBEDDINGS, CHAIN_SIMILARITIES),
    })
    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data["positions"]] == ["A", "B", "C"]
    assert data["excluded"] == ["D"]


def test_path_cap_override():
    response = client.post("/api/layout", json={
        "mode": "rolling_path",
        "items": _items(CHAIN_EMBEDDINGS, CHAIN_SIMILARITIES),
        "path_length_cap": 1,
    })
    data = response.json()
    assert [p["id"] for p in data["positions"]] == ["A"]
    assert data["diagnostics"]["path_stop_reason"] == "cap"


def test_rolling_path_with_concept_of_other_dimension():
    response = client.post("/api/layout", json={
        "mode": "rolling_path",
        "items": _items(CHAIN_EMBEDDINGS, CHAIN_SIMILARITIES),
        "concept_embedding": [0.5, 0.5, 0.5, 0.5],
    })
    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data["positions"]] == ["A", "B", "C"]
    assert "concept_embedding" in data["warnings"]


def test_items_without_embeddings_fall_back_to_grid():
    response = client.post("/api/layout", json={
        "mode": "walkabout",
        "items": [{"id": "x"}, {"id": "y"}],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["fallback_mode"] == "regiment"
    assert len(data["positions"]) == 2


def test_empty_items_rejected():
    response = client.post("/api/layout", json={"mode": "regiment", "items": []})
    assert response.status_code == 422
    assert response.json()["detail"] == "No items to place"


def test_unknown_mode_rejected():
    response = client.post("/api/layout", json={"mode": "spiral", "items": [{"id": "x"}]})
    assert response.status_code == 422


def test_summarize_uses_summarizer(monkeypatch):
    stub = StubSummarizer(reply="Summary: A short path through the garden notes.")
    monkeypatch.setattr("thoughtlands.api.layout.LLMSummarizer", lambda task: stub)
    response = client.post("/api/layout", json={
        "mode": "hopscotch",
        "concept_text": "How do gardens grow?",
        "items": _items(CHAIN_EMBEDDINGS, CHAIN_SIMILARITIES),
        "summarize": True,
    })
    data = response.json()
    summary = [c for c in data["cards"] if c["kind"] == "path_summary"]
    assert summary[0]["text"] == "A short path through the garden notes."
    assert summary[0]["source_ids"] == ["A", "B", "C"]
    assert len(stub.calls) == 1


@pytest.mark.parametrize("level", [0, 5])
def test_clustering_level_validated(level):
    response = client.post("/api/layout", json={
        "mode": "walkabout",
        "items": _items(TWO_GROUP_EMBEDDINGS, TWO_GROUP_SIMILARITIES),
        "clustering_level": level,
    })
    assert response.status_code == 422
