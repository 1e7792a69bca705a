"""Similarity kernel: cosine similarity, centroid, pairwise similarity matrix.

Degenerate embeddings (empty, zero magnitude, mismatched dimension) are
expected now and then; they compare as 0.0 instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from sklearn.metrics.pairwise import cosine_similarity as _pairwise_cosine

logger = logging.getLogger(__name__)


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """Dot product over norms. 0.0 when either vector has no magnitude."""
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.size == 0 or vb.size == 0:
        return 0.0
    if va.shape != vb.shape:
        logger.debug("cosine_similarity: dimension mismatch %d vs %d", va.size, vb.size)
        return 0.0
    denominator = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denominator)


def centroid(vectors: Sequence[ArrayLike]) -> NDArray[np.float64]:
    """Elementwise mean. An empty result means "no valid centre"."""
    if len(vectors) == 0:
        return np.empty(0)
    return np.mean(np.vstack([np.asarray(v, dtype=np.float64) for v in vectors]), axis=0)


def similarity_matrix(embeddings: NDArray[np.float64]) -> NDArray[np.float64]:
    """N×N cosine similarity over rows; symmetric with a diagonal of exactly 1.0."""
    n = len(embeddings)
    if n == 0:
        return np.empty((0, 0))
    # sklearn normalises zero rows to zero, so they score 0.0 against everything
    sim = _pairwise_cosine(np.asarray(embeddings, dtype=np.float64))
    sim = (sim + sim.T) / 2.0
    np.fill_diagonal(sim, 1.0)
    return sim


def distance_matrix(similarities: NDArray[np.float64]) -> NDArray[np.float64]:
    """Similarity → distance (1 − similarity)."""
    return 1.0 - similarities


def similarities_to(reference: ArrayLike, embeddings: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cosine similarity of each embedding row to one reference vector."""
    return np.array([cosine_similarity(reference, row) for row in embeddings], dtype=np.float64)
