"""Leaf-node 2D geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist


def polar_to_cartesian(
    cx: float, cy: float, radius: float, angle: float
) -> tuple[float, float]:
    """Point at ``radius`` along ``angle`` from (cx, cy)."""
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def point_angles(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """atan2 angle of each (x, y) row, in (-π, π]."""
    if len(points) == 0:
        return np.empty(0)
    return np.arctan2(points[:, 1], points[:, 0])


def circular_mean(angles: NDArray[np.float64]) -> float:
    """Mean direction of a set of angles. Avoids the -π/π wraparound bias of a plain mean."""
    if len(angles) == 0:
        return 0.0
    return float(math.atan2(float(np.sum(np.sin(angles))), float(np.sum(np.cos(angles)))))


def nearest_distance(point: NDArray[np.float64], others: NDArray[np.float64]) -> float:
    """Euclidean distance from ``point`` to the closest row of ``others`` (inf if none)."""
    if len(others) == 0:
        return float("inf")
    return float(cdist(point.reshape(1, -1), others).min())
