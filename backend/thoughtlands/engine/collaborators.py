"""Collaborator interfaces: the only way the layout engine reaches outside itself.

Both return ``None`` for "absent"; callers treat absence as a normal outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbeddingSource(Protocol):
    def fetch_embedding(self, item_id: str) -> NDArray[np.float64] | None: ...


@runtime_checkable
class Summarizer(Protocol):
    async def summarize(self, prompt: str, source_texts: Sequence[str]) -> str | None: ...


class InMemoryEmbeddingSource:
    """Dict-backed embeddings, e.g. the vectors sent along with an API request."""

    def __init__(self, embeddings: Mapping[str, ArrayLike] | None = None) -> None:
        self._embeddings: dict[str, NDArray[np.float64]] = {
            k: np.asarray(v, dtype=np.float64) for k, v in (embeddings or {}).items()
        }

    def add(self, item_id: str, embedding: ArrayLike) -> None:
        self._embeddings[item_id] = np.asarray(embedding, dtype=np.float64)

    def fetch_embedding(self, item_id: str) -> NDArray[np.float64] | None:
        return self._embeddings.get(item_id)


class CachingEmbeddingSource:
    """Memoises another source, misses included, so each id is fetched once."""

    def __init__(self, inner: EmbeddingSource) -> None:
        self._inner = inner
        self._cache: dict[str, NDArray[np.float64] | None] = {}

    def fetch_embedding(self, item_id: str) -> NDArray[np.float64] | None:
        if item_id not in self._cache:
            self._cache[item_id] = self._inner.fetch_embedding(item_id)
        return self._cache[item_id]

    @property
    def cached_count(self) -> int:
        return len(self._cache)
