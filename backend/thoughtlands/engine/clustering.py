"""Cluster assigner: k-means over the normalized 2D layout, circular-mean cluster angles."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine.config import LayoutConfig
from thoughtlands.utils.geometry import circular_mean, point_angles

logger = logging.getLogger(__name__)

ClusterAssignment = dict[int, list[int]]


def cluster_count(n: int, config: LayoutConfig | None = None) -> int:
    """k = min(8, max(3, ceil(n / 5)))."""
    cfg = config or LayoutConfig()
    return min(cfg.max_clusters, max(cfg.min_clusters, math.ceil(n / cfg.items_per_cluster)))


def assign(points: NDArray[np.float64], centroids: NDArray[np.float64]) -> NDArray[np.int64]:
    """Index of the nearest centroid per point. argmin keeps the first of tied minima."""
    dists = np.sqrt(((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2))
    return np.argmin(dists, axis=1)


def kmeans(
    points: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
    config: LayoutConfig | None = None,
) -> ClusterAssignment:
    """Lloyd's k-means seeded from randomly sampled points.

    Empty clusters keep their centroid and stay empty; they are never reseeded.
    Every point ends in exactly one cluster.
    """
    cfg = config or LayoutConfig()
    pts = np.asarray(points, dtype=np.float64)
    n = len(pts)
    if n == 0 or k <= 0:
        return {}

    centroids = pts[rng.integers(0, n, size=k)].copy()
    labels = assign(pts, centroids)

    for iteration in range(cfg.kmeans_max_iterations):
        labels = assign(pts, centroids)
        moved = False
        for j in range(k):
            members = pts[labels == j]
            if len(members) == 0:
                continue
            new_centroid = members.mean(axis=0)
            if np.any(np.abs(centroids[j] - new_centroid) > cfg.kmeans_tolerance):
                moved = True
            centroids[j] = new_centroid
        if not moved:
            logger.debug("k-means converged after %d iterations (k=%d)", iteration + 1, k)
            break

    return {j: [int(i) for i in np.flatnonzero(labels == j)] for j in range(k)}


def cluster_of(index: int, clusters: ClusterAssignment) -> int:
    """Cluster id holding ``index``; 0 if none does."""
    for cluster_id, members in clusters.items():
        if index in members:
            return cluster_id
    return 0


def cluster_angles(
    points: NDArray[np.float64], clusters: ClusterAssignment
) -> dict[int, float]:
    """Circular mean of each non-empty cluster's member angles."""
    angles = point_angles(np.asarray(points, dtype=np.float64))
    return {
        cluster_id: circular_mean(angles[members])
        for cluster_id, members in clusters.items()
        if members
    }
