"""Layout normalizer: centre, isotropic rescale, angular rebalancing.

The force-directed layout tends to leave points bunched on one side of the
origin ("swirl"). Normalizing removes translation and axis skew; balancing
then either spreads the angles evenly (when one gap dominates) or rotates the
whole set to minimise its largest empty sector.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine.config import LayoutConfig
from thoughtlands.utils.geometry import point_angles
from thoughtlands.utils.math_helpers import TWO_PI, max_wrapped_gap, wrap_angles, wrapped_gaps

logger = logging.getLogger(__name__)


@dataclass
class NormalizedLayout:
    # Centred, equal-spread 2D points (N×2)
    points: NDArray[np.float64]
    # atan2 angle of each normalized point
    raw_angles: NDArray[np.float64]
    # Angles after swirl handling / rotation balancing
    angles: NDArray[np.float64]
    swirled: bool = False
    rotation: float = 0.0


def normalize_points(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Subtract the mean, then scale both axes to the average of their std-devs."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) == 0:
        return np.empty((0, 2))
    centered = pts - pts.mean(axis=0)
    std_x = float(np.sqrt(np.mean(centered[:, 0] ** 2))) or 1.0
    std_y = float(np.sqrt(np.mean(centered[:, 1] ** 2))) or 1.0
    target = (std_x + std_y) / 2.0 or 1.0
    return np.column_stack([
        centered[:, 0] / std_x * target,
        centered[:, 1] / std_y * target,
    ])


def is_swirled(angles: NDArray[np.float64], config: LayoutConfig) -> bool:
    """One gap larger than ``swirl_gap_ratio`` × the mean gap."""
    gaps = wrapped_gaps(angles)
    if len(gaps) < 2:
        return False
    mean_gap = TWO_PI / len(gaps)
    return float(np.max(gaps)) > mean_gap * config.swirl_gap_ratio


def even_angles(angles: NDArray[np.float64]) -> NDArray[np.float64]:
    """2π·i/N assigned in the existing angular order."""
    n = len(angles)
    order = np.argsort(angles, kind="stable")
    spread = np.empty(n)
    spread[order] = TWO_PI * np.arange(n) / n
    return spread


def best_rotation(angles: NDArray[np.float64], config: LayoutConfig) -> float:
    """Global rotation (in ``rotation_step`` increments) minimising the largest gap.

    Rotation preserves every gap between neighbours, so the search is coarse by
    nature; the first minimum wins.
    """
    step = config.rotation_step
    steps = max(1, int(math.ceil(TWO_PI / step - 1e-9)))
    best_rot = 0.0
    best_gap = math.inf
    for i in range(steps):
        rot = i * step
        gap = max_wrapped_gap(wrap_angles(angles + rot))
        if gap < best_gap - 1e-12:
            best_gap = gap
            best_rot = rot
    return best_rot


def balance_angles(
    points: NDArray[np.float64], config: LayoutConfig | None = None
) -> NormalizedLayout:
    """Normalize ``points`` and derive one balanced angle per point."""
    cfg = config or LayoutConfig()
    normalized = normalize_points(points)
    raw = point_angles(normalized)
    n = len(raw)

    if n < 2:
        return NormalizedLayout(points=normalized, raw_angles=raw, angles=raw.copy())

    if is_swirled(raw, cfg):
        logger.debug("Swirl detected (max gap %.2f rad), spreading %d angles evenly",
                     max_wrapped_gap(raw), n)
        return NormalizedLayout(
            points=normalized, raw_angles=raw, angles=even_angles(raw), swirled=True
        )

    rot = best_rotation(raw, cfg)
    return NormalizedLayout(
        points=normalized,
        raw_angles=raw,
        angles=wrap_angles(raw + rot),
        rotation=rot,
    )
