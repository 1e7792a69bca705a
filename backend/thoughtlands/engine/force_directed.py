"""Force-directed embedding: 2D coordinates from an N×N distance matrix.

Pairwise relaxation against an ideal length (matrix distance × spring
constant): a pair longer than its ideal length is pushed further apart and a
shorter pair is drawn in. Iteration count is the only stop condition, so the
result is an approximation, not a minimum-energy layout.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine.config import LayoutConfig


def initial_layout(
    n: int, config: LayoutConfig, rng: np.random.Generator | None = None
) -> NDArray[np.float64]:
    """N points evenly spaced on a circle, optionally jittered."""
    angles = 2.0 * np.pi * np.arange(n) / max(n, 1)
    points = np.column_stack([np.cos(angles), np.sin(angles)]) * config.initial_radius
    if rng is not None and config.initial_jitter > 0.0 and n > 0:
        points = points + rng.uniform(-config.initial_jitter, config.initial_jitter, size=(n, 2))
    return points


def embed(
    distances: NDArray[np.float64],
    config: LayoutConfig | None = None,
    rng: np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """Relax the circle layout so pairwise distances approach ``distances × k``."""
    cfg = config or LayoutConfig()
    n = len(distances)
    layout = initial_layout(n, cfg, rng)
    if n < 2:
        return layout

    ideal = np.asarray(distances, dtype=np.float64) * cfg.spring_constant
    iu, ju = np.triu_indices(n, k=1)
    ideal_pairs = ideal[iu, ju]

    for _ in range(cfg.force_iterations):
        delta = layout[ju] - layout[iu]
        dist = np.sqrt(np.sum(delta ** 2, axis=1))
        dist = np.maximum(dist, cfg.min_distance)
        force = (dist - ideal_pairs) / dist
        # Positive force: pair is longer than its ideal length
        push = (delta / dist[:, None]) * force[:, None]

        forces = np.zeros_like(layout)
        np.add.at(forces, iu, -push)
        np.add.at(forces, ju, push)
        layout = layout + forces * cfg.damping

    return layout
