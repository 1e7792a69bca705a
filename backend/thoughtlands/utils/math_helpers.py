"""Math helpers: angle wrapping, easing, Box–Muller. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

TWO_PI = 2.0 * math.pi


def wrap_angles(theta: NDArray[np.float64]) -> NDArray[np.float64]:
    """Wrap angles into (-π, π]."""
    wrapped = np.mod(theta + np.pi, TWO_PI)
    wrapped = np.where(wrapped <= 0.0, wrapped + TWO_PI, wrapped)
    return wrapped - np.pi


def wrapped_gaps(angles: NDArray[np.float64]) -> NDArray[np.float64]:
    """Gaps between angularly-adjacent angles, including the wrap from last to first.

    The gaps of N angles always sum to 2π. A single angle has one gap of 2π.
    """
    if len(angles) == 0:
        return np.empty(0)
    ordered = np.sort(np.asarray(angles, dtype=np.float64))
    gaps = np.diff(ordered)
    wrap = TWO_PI - (ordered[-1] - ordered[0])
    return np.append(gaps, wrap)


def max_wrapped_gap(angles: NDArray[np.float64]) -> float:
    gaps = wrapped_gaps(angles)
    return float(np.max(gaps)) if len(gaps) else 0.0


def ease_in_out_quad(alpha: float) -> float:
    """Quadratic ease-in-out on [0, 1]. Endpoints map to themselves exactly."""
    if alpha < 0.5:
        return 2.0 * alpha * alpha
    return 1.0 - 2.0 * (1.0 - alpha) ** 2


def lerp(a: float, b: float, t: float) -> float:
    return (1.0 - t) * a + t * b


def gaussian(rng: np.random.Generator, mean: float = 0.0, std_dev: float = 1.0) -> float:
    """Box–Muller normal sample drawn from two uniforms of ``rng``."""
    u1 = max(float(rng.random()), 1e-10)  # log(0) guard
    u2 = float(rng.random())
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(TWO_PI * u2)
    return z0 * std_dev + mean


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
