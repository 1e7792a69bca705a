"""Radius mapper: concept similarity → distance from the centre card.

Higher similarity sits closer to the centre. A mild convex curve pushes
mid-similarity notes outward so dense similarity bands get breathing room.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from thoughtlands.engine.config import LayoutConfig


def normalize_similarities(similarities: ArrayLike, epsilon: float = 1e-10) -> NDArray[np.float64]:
    """(s − min) / (max − min + ε). A flat range maps everything to 0."""
    s = np.asarray(similarities, dtype=np.float64)
    if s.size == 0:
        return s
    return (s - s.min()) / (s.max() - s.min() + epsilon)


def map_radii(similarities: ArrayLike, config: LayoutConfig | None = None) -> NDArray[np.float64]:
    """One radius per similarity, inside [r_min, r_max]."""
    cfg = config or LayoutConfig()
    normalized = normalize_similarities(similarities, cfg.similarity_epsilon)
    if normalized.size == 0:
        return normalized

    span = cfg.r_max - cfg.r_min
    linear = cfg.r_min + (1.0 - normalized) * span
    if span <= 0.0:
        return np.full_like(linear, cfg.r_min)

    unit = np.clip((linear - cfg.r_min) / span, 0.0, 1.0)
    expanded = cfg.r_min + unit ** cfg.radius_expansion_power * span
    return np.clip(expanded, cfg.r_min, cfg.r_max)
