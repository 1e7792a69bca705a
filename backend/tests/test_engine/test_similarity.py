"""Tests for the similarity kernel."""

import numpy as np
import pytest

from thoughtlands.engine.similarity import (
    centroid,
    cosine_similarity,
    distance_matrix,
    similarities_to,
    similarity_matrix,
)
from tests.conftest import TWO_GROUP_EMBEDDINGS


def test_cosine_identical_and_orthogonal():
    assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)
    assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
    assert cosine_similarity([1, 0], [-1, 0]) == pytest.approx(-1.0)


def test_cosine_degenerate_inputs_return_zero():
    assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0.0
    assert cosine_similarity([], [1, 2]) == 0.0
    assert cosine_similarity([1, 2], [1, 2, 3]) == 0.0


def test_centroid_mean_and_empty():
    c = centroid([[0, 0], [2, 4]])
    np.testing.assert_allclose(c, [1, 2])
    assert centroid([]).size == 0


def test_similarity_matrix_symmetric_unit_diagonal():
    emb = np.array(list(TWO_GROUP_EMBEDDINGS.values()))
    sim = similarity_matrix(emb)
    assert sim.shape == (6, 6)
    np.testing.assert_allclose(sim, sim.T)
    np.testing.assert_array_equal(np.diag(sim), np.ones(6))
    # Within-group pairs are far more similar than cross-group pairs
    assert sim[0, 1] > 0.95
    assert sim[0, 3] < 0.2


def test_similarity_matrix_zero_row():
    sim = similarity_matrix(np.array([[1.0, 0.0], [0.0, 0.0]]))
    assert sim[0, 1] == 0.0
    assert sim[1, 1] == 1.0


def test_distance_matrix_and_similarities_to():
    sim = np.array([[1.0, 0.25], [0.25, 1.0]])
    np.testing.assert_allclose(distance_matrix(sim), [[0.0, 0.75], [0.75, 0.0]])
    sims = similarities_to([1, 0], np.array([[1, 0], [0, 1], [0, 0]]))
    np.testing.assert_allclose(sims, [1.0, 0.0, 0.0])
