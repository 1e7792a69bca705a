"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pytest

from thoughtlands.engine.context import LayoutContext, LayoutItem, Mode


# Two tight groups: A/B/C near the first axis, D/E/F near the second

TWO_GROUP_EMBEDDINGS = {
    "A": [1.0, 0.05, 0.0, 0.0],
    "B": [0.95, 0.1, 0.05, 0.0],
    "C": [0.9, 0.0, 0.1, 0.05],
    "D": [0.0, 1.0, 0.05, 0.0],
    "E": [0.05, 0.95, 0.0, 0.1],
    "F": [0.1, 0.9, 0.05, 0.0],
}

# Moderate concept similarity for all six
TWO_GROUP_SIMILARITIES = {
    "A": 0.62, "B": 0.58, "C": 0.55, "D": 0.52, "E": 0.48, "F": 0.45,
}

# A → B → C chain; D is far from everything
CHAIN_EMBEDDINGS = {
    "A": [1.0, 0.0, 0.0],
    "B": [0.9, 0.3, 0.0],
    "C": [0.7, 0.6, 0.1],
    "D": [0.0, 0.0, 1.0],
}

CHAIN_SIMILARITIES = {"A": 0.9, "B": 0.8, "C": 0.7, "D": 0.1}

NOTE_TEXTS = {
    "A": "Gardens need patience.\n\nSecond paragraph that should not be sent.",
    "B": "Compost feeds the soil.",
    "C": "Seasons set the rhythm of planting.",
    "D": "Tax forms are due in April.",
    "E": "Receipts belong in one folder.",
    "F": "Budgets fail without tracking.",
}


def make_items(
    embeddings: dict[str, list[float]],
    similarities: dict[str, float] | None = None,
    texts: dict[str, str] | None = None,
) -> list[LayoutItem]:
    return [
        LayoutItem(
            id=item_id,
            embedding=np.asarray(vec, dtype=np.float64),
            concept_similarity=(similarities or {}).get(item_id),
            text=(texts or {}).get(item_id, ""),
        )
        for item_id, vec in embeddings.items()
    ]


def make_context(mode: Mode, items: list[LayoutItem], seed: int = 7, **kwargs) -> LayoutContext:
    return LayoutContext(mode=mode, items=items, rng=np.random.default_rng(seed), **kwargs)


def plain_items(n: int) -> list[LayoutItem]:
    """Items with only a concept similarity, highest first."""
    return [
        LayoutItem(id=f"note-{i}", concept_similarity=1.0 - i / max(n, 1))
        for i in range(n)
    ]


class StubSummarizer:
    """Returns canned text and records every prompt it receives."""

    def __init__(self, reply: str | None = "Notes about gardens and soil.", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: list[tuple[str, list[str]]] = []

    async def summarize(self, prompt: str, source_texts: Sequence[str]) -> str | None:
        self.calls.append((prompt, list(source_texts)))
        if self.fail:
            raise RuntimeError("summarizer unavailable")
        return self.reply


class CountingEmbeddingSource:
    """Dict-backed source that counts lookups and can fail for chosen ids."""

    def __init__(self, embeddings: dict[str, list[float]], failing: set[str] | None = None):
        self.embeddings = embeddings
        self.failing = failing or set()
        self.calls: list[str] = []

    def fetch_embedding(self, item_id: str):
        self.calls.append(item_id)
        if item_id in self.failing:
            raise ConnectionError(f"lookup failed for {item_id}")
        vec = self.embeddings.get(item_id)
        return None if vec is None else np.asarray(vec, dtype=np.float64)


@pytest.fixture
def two_group_items() -> list[LayoutItem]:
    return make_items(TWO_GROUP_EMBEDDINGS, TWO_GROUP_SIMILARITIES, NOTE_TEXTS)


@pytest.fixture
def chain_items() -> list[LayoutItem]:
    return make_items(CHAIN_EMBEDDINGS, CHAIN_SIMILARITIES, NOTE_TEXTS)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)
