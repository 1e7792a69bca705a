"""Crowd layouts: regiment (strict grid) and gaggle (organic scatter).

Both keep the concept-similarity order and place the concept card just above
the crowd. Gaggle placement is best-effort: a strict rejection-sampling phase,
a relaxed phase with a larger disk and noisier samples, then acceptance of the
best candidate seen even if it crowds a neighbour.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import Card, CardKind, LayoutContext, Mode, Position2D
from thoughtlands.engine.registry import layout_mode
from thoughtlands.utils.geometry import nearest_distance
from thoughtlands.utils.math_helpers import gaussian

logger = logging.getLogger(__name__)


def _concept_card(ctx: LayoutContext) -> Card:
    cfg = ctx.config
    return Card(
        kind=CardKind.CONCEPT,
        anchor=ctx.center.offset(0.0, -cfg.concept_card_raise),
        text=ctx.concept_text or None,
        width=cfg.concept_card_width,
        height=cfg.concept_card_height,
    )


# ── Regiment ──


def grid_columns(n: int) -> int:
    return max(1, math.floor(math.sqrt(n)))


def grid_positions(n: int, origin: Position2D, config: LayoutConfig) -> list[Position2D]:
    """Row-major grid, floor(√n) columns, fixed pitch."""
    columns = grid_columns(n)
    pitch_x = config.node_width + config.grid_gap
    pitch_y = config.node_height + config.grid_gap
    return [
        origin.offset((i % columns) * pitch_x, (i // columns) * pitch_y)
        for i in range(n)
    ]


@layout_mode(
    mode=Mode.REGIMENT,
    uses_embeddings=False,
    description="Deterministic grid in concept-similarity order",
)
def regiment(ctx: LayoutContext) -> None:
    cfg = ctx.config
    ctx.cards.append(_concept_card(ctx))
    origin = ctx.center.offset(0.0, cfg.crowd_offset_y)
    for item, pos in zip(ctx.items, grid_positions(ctx.num_items, origin, cfg)):
        ctx.place(item.id, pos)
    ctx.features["grid_columns"] = grid_columns(ctx.num_items)
    logger.info("Regiment placed %d items in %d columns", ctx.num_items,
                grid_columns(ctx.num_items))


# ── Gaggle ──


@dataclass
class ScatterPhase:
    radius: float
    attempts: int
    noise_std: float
    jitter: float
    bound: float


@dataclass
class Placement:
    x: float
    y: float
    # True when neither phase found a spot clear of every neighbour
    fallback: bool = False


def gaggle_radius(n: int, config: LayoutConfig) -> float:
    spacing = config.gaggle_min_spacing
    area = n * spacing * spacing
    return max(config.gaggle_min_radius, math.sqrt(area / math.pi) * config.gaggle_radius_scale)


def scatter_phases(n: int, config: LayoutConfig) -> tuple[ScatterPhase, ScatterPhase]:
    """Strict phase, then relaxed phase with a larger disk and heavier noise."""
    spacing = config.gaggle_min_spacing
    radius = gaggle_radius(n, config)
    expanded = radius * config.gaggle_retry_radius_scale
    strict = ScatterPhase(
        radius=radius,
        attempts=config.gaggle_attempts,
        noise_std=spacing * config.gaggle_noise_ratio,
        jitter=spacing * config.gaggle_jitter_ratio,
        bound=radius * config.gaggle_bound_ratio,
    )
    relaxed = ScatterPhase(
        radius=expanded,
        attempts=config.gaggle_retry_attempts,
        noise_std=spacing * config.gaggle_retry_noise_ratio,
        jitter=spacing * config.gaggle_retry_jitter_ratio,
        bound=expanded * config.gaggle_bound_ratio,
    )
    return strict, relaxed


def _sample(phase: ScatterPhase, rng: np.random.Generator) -> tuple[float, float]:
    """Uniform point in the disk, Gaussian noise, then a little uniform jitter."""
    angle = float(rng.random()) * 2.0 * math.pi
    r = math.sqrt(float(rng.random())) * phase.radius
    x = r * math.cos(angle)
    y = r * math.sin(angle)
    x += gaussian(rng, 0.0, phase.noise_std)
    y += gaussian(rng, 0.0, phase.noise_std)
    x += (float(rng.random()) - 0.5) * phase.jitter
    y += (float(rng.random()) - 0.5) * phase.jitter
    return x, y


def scatter(n: int, rng: np.random.Generator, config: LayoutConfig | None = None) -> list[Placement]:
    """Centre-relative gaggle offsets for ``n`` items, placed one after another."""
    cfg = config or LayoutConfig()
    spacing = cfg.gaggle_min_spacing
    strict, relaxed = scatter_phases(n, cfg)
    placed = np.empty((0, 2))
    placements: list[Placement] = []

    for _ in range(n):
        found: tuple[float, float] | None = None
        best: tuple[float, float] | None = None
        best_clearance = -1.0
        last: tuple[float, float] = (0.0, 0.0)

        for phase in (strict, relaxed):
            for _ in range(phase.attempts):
                x, y = _sample(phase, rng)
                last = (x, y)
                if math.hypot(x, y) > phase.bound:
                    continue
                clearance = nearest_distance(np.array([x, y]), placed)
                if clearance >= spacing:
                    found = (x, y)
                    break
                if clearance > best_clearance:
                    best_clearance = clearance
                    best = (x, y)
            if found is not None:
                break

        if found is not None:
            placements.append(Placement(*found))
        else:
            x, y = best if best is not None else last
            placements.append(Placement(x, y, fallback=True))
        placed = np.vstack([placed, [placements[-1].x, placements[-1].y]])

    return placements


@layout_mode(
    mode=Mode.GAGGLE,
    uses_embeddings=False,
    description="Loose non-overlapping scatter in a roughly circular crowd",
)
def gaggle(ctx: LayoutContext) -> None:
    cfg = ctx.config
    ctx.cards.append(_concept_card(ctx))
    origin = ctx.center.offset(0.0, cfg.crowd_offset_y)

    placements = scatter(ctx.num_items, ctx.rng, cfg)
    fallback_ids: list[str] = []
    for item, placement in zip(ctx.items, placements):
        ctx.place(item.id, origin.offset(placement.x, placement.y))
        if placement.fallback:
            fallback_ids.append(item.id)

    ctx.features["gaggle_radius"] = gaggle_radius(ctx.num_items, cfg)
    ctx.features["gaggle_fallback_ids"] = fallback_ids
    if fallback_ids:
        ctx.warnings["gaggle"] = (
            f"{len(fallback_ids)} item(s) placed without full spacing after both phases"
        )
    logger.info("Gaggle placed %d items (%d best-effort)", ctx.num_items, len(fallback_ids))
