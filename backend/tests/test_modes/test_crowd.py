"""Tests for the Regiment and Gaggle crowd layouts."""

import itertools
import math

import numpy as np
import pytest

from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import CardKind, Mode, Position2D
from thoughtlands.engine.modes.crowd import (
    gaggle_radius,
    grid_columns,
    grid_positions,
    scatter,
    scatter_phases,
)
from thoughtlands.engine.pipeline import create_pipeline
from tests.conftest import make_context, plain_items


@pytest.mark.parametrize("n,columns", [(1, 1), (3, 1), (4, 2), (10, 3), (16, 4), (17, 4)])
def test_grid_columns(n, columns):
    assert grid_columns(n) == columns


def test_grid_rows_and_pitch():
    cfg = LayoutConfig()
    pts = grid_positions(10, Position2D(0.0, 0.0), cfg)
    assert pts[0] == Position2D(0.0, 0.0)
    assert pts[2] == Position2D(2 * 330.0, 0.0)
    assert pts[3] == Position2D(0.0, 250.0)
    assert pts[9] == Position2D(0.0, 3 * 250.0)


def test_regiment_layout():
    result = create_pipeline().run(make_context(Mode.REGIMENT, plain_items(10)))
    assert result.order == [f"note-{i}" for i in range(10)]
    assert result.positions["note-0"] == Position2D(500.0, 600.0)
    assert result.positions["note-4"] == Position2D(830.0, 850.0)
    assert result.diagnostics["grid_columns"] == 3

    concept = [c for c in result.cards if c.kind == CardKind.CONCEPT]
    assert len(concept) == 1
    assert concept[0].anchor == Position2D(500.0, 350.0)


def test_regiment_is_deterministic():
    a = create_pipeline().run(make_context(Mode.REGIMENT, plain_items(7), seed=1))
    b = create_pipeline().run(make_context(Mode.REGIMENT, plain_items(7), seed=2))
    assert a.positions == b.positions


def test_gaggle_radius():
    cfg = LayoutConfig()
    assert cfg.gaggle_min_spacing == 300.0
    assert gaggle_radius(1, cfg) == 600.0
    expected = math.sqrt(40 * 300.0 ** 2 / math.pi) * 1.8
    assert gaggle_radius(40, cfg) == pytest.approx(expected)


def test_scatter_phases():
    cfg = LayoutConfig()
    strict, relaxed = scatter_phases(40, cfg)
    assert relaxed.radius == pytest.approx(strict.radius * 1.5)
    assert strict.bound == pytest.approx(strict.radius * 1.2)
    assert (strict.attempts, relaxed.attempts) == (2000, 500)
    assert strict.noise_std == pytest.approx(240.0)
    assert relaxed.noise_std == pytest.approx(300.0)


def _assert_spaced(points, fallback, spacing):
    for i, j in itertools.combinations(range(len(points)), 2):
        if fallback[i] or fallback[j]:
            continue
        d = math.hypot(points[i][0] - points[j][0], points[i][1] - points[j][1])
        assert d >= spacing - 1e-9


def test_scatter_keeps_spacing():
    cfg = LayoutConfig()
    placements = scatter(15, np.random.default_rng(3), cfg)
    assert len(placements) == 15
    points = [(p.x, p.y) for p in placements]
    _assert_spaced(points, [p.fallback for p in placements], cfg.gaggle_min_spacing)
    _, relaxed = scatter_phases(15, cfg)
    for p in placements:
        if not p.fallback:
            assert math.hypot(p.x, p.y) <= relaxed.bound


def test_scatter_flags_best_effort_placements():
    cfg = LayoutConfig(gaggle_attempts=1, gaggle_retry_attempts=1)
    placements = scatter(40, np.random.default_rng(5), cfg)
    assert len(placements) == 40
    assert any(p.fallback for p in placements)
    points = [(p.x, p.y) for p in placements]
    _assert_spaced(points, [p.fallback for p in placements], cfg.gaggle_min_spacing)


def test_gaggle_layout():
    ctx = make_context(Mode.GAGGLE, plain_items(12), seed=21)
    result = create_pipeline().run(ctx)
    assert len(result.positions) == 12
    assert "gaggle_fallback_ids" in result.diagnostics
    fallback = set(result.diagnostics["gaggle_fallback_ids"])
    if fallback:
        assert "gaggle" in result.warnings

    ids = list(result.positions)
    points = [result.positions[i].as_tuple() for i in ids]
    _assert_spaced(points, [i in fallback for i in ids], LayoutConfig().gaggle_min_spacing)


def test_gaggle_seed_reproducible():
    a = create_pipeline().run(make_context(Mode.GAGGLE, plain_items(8), seed=4))
    b = create_pipeline().run(make_context(Mode.GAGGLE, plain_items(8), seed=4))
    assert a.positions == b.positions
