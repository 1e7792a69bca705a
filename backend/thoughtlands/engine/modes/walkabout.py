"""Walkabout: radial layout. Distance from the centre encodes similarity to the
concept; angle encodes note-to-note similarity.

Two candidate arrangements are computed and blended by the clustering level:
  free:      angles from the balanced force-directed layout
  clustered: members fanned out around their k-means cluster's mean angle
Level 1 is pure free, level 4 pure clustered (plus cluster summary cards).
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine import clustering, force_directed
from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import Card, CardKind, LayoutContext, Mode, Position2D
from thoughtlands.engine.normalizer import NormalizedLayout, balance_angles
from thoughtlands.engine.radius import map_radii
from thoughtlands.engine.registry import layout_mode
from thoughtlands.engine.similarity import distance_matrix, similarity_matrix
from thoughtlands.utils.geometry import polar_to_cartesian
from thoughtlands.utils.math_helpers import clamp, ease_in_out_quad, lerp

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 4


def clustering_alpha(level: int) -> float:
    """Level 1..4 → 0..1."""
    level = int(clamp(level, MIN_LEVEL, MAX_LEVEL))
    return (level - MIN_LEVEL) / (MAX_LEVEL - MIN_LEVEL)


def clustering_level_from_percent(value: float) -> int:
    """Map the 25–100 clustering slider onto levels 1–4 (25→1, 50→2, 75→3, 100→4)."""
    return int(clamp(math.floor((value - 25) / 25) + 1, MIN_LEVEL, MAX_LEVEL))


def free_positions(
    center: Position2D, radii: NDArray[np.float64], angles: NDArray[np.float64]
) -> list[Position2D]:
    return [
        Position2D(*polar_to_cartesian(center.x, center.y, float(r), float(a)))
        for r, a in zip(radii, angles)
    ]


def clustered_positions(
    center: Position2D,
    radii: NDArray[np.float64],
    free_angles: NDArray[np.float64],
    clusters: clustering.ClusterAssignment,
    angles_by_cluster: dict[int, float],
    alpha: float,
    config: LayoutConfig,
) -> list[Position2D]:
    """Pull every item to its cluster's angle, fanning cluster-mates out evenly.

    Spread narrows as ``alpha`` grows. At mid levels the inward half of the fan
    is damped and floored so notes are not dragged towards the centre card.
    """
    max_radial = config.max_radial_spread * (1 - alpha * config.radial_spread_falloff)
    max_angular = config.max_angular_spread * (1 - alpha * config.angular_spread_falloff)
    mid_level = config.mid_level_low < alpha < config.mid_level_high
    mid_floor = config.r_min + (config.r_max - config.r_min) * config.mid_level_min_radius_fraction

    positions: list[Position2D] = []
    for i, radius in enumerate(radii):
        radius = float(radius)
        cluster_id = clustering.cluster_of(i, clusters)
        cluster_angle = angles_by_cluster.get(cluster_id, float(free_angles[i]))
        members = clusters.get(cluster_id) or [i]
        member_count = len(members)
        member_index = members.index(i) if i in members else 0

        radial_offset = 0.0
        angular_offset = 0.0
        if member_count > 1:
            radial_step = 2 * max_radial / (member_count - 1)
            radial_offset = -max_radial + member_index * radial_step
            angle_step = 2 * max_angular / (member_count - 1)
            angular_offset = -max_angular + member_index * angle_step

        adjusted = radius + radial_offset
        if mid_level:
            if radial_offset < 0:
                adjusted = max(
                    radius * config.mid_level_radius_keep,
                    radius + radial_offset * config.mid_level_inward_damping,
                )
            adjusted = max(adjusted, mid_floor)

        final_radius = max(config.r_min, adjusted)
        final_angle = cluster_angle + angular_offset
        positions.append(
            Position2D(*polar_to_cartesian(center.x, center.y, final_radius, final_angle))
        )
    return positions


def interpolate(
    free: list[Position2D], clustered: list[Position2D], alpha: float
) -> list[Position2D]:
    """Ease-in-out blend between the two arrangements."""
    t = ease_in_out_quad(alpha)
    return [
        Position2D(lerp(f.x, c.x, t), lerp(f.y, c.y, t))
        for f, c in zip(free, clustered)
    ]


def cluster_summary_cards(
    ctx: LayoutContext,
    radii: NDArray[np.float64],
    clusters: clustering.ClusterAssignment,
    angles_by_cluster: dict[int, float],
) -> list[Card]:
    """One card per cluster with more than one member, just outside the cluster."""
    cfg = ctx.config
    cards: list[Card] = []
    for cluster_id, members in clusters.items():
        if len(members) <= 1 or cluster_id not in angles_by_cluster:
            continue
        avg_radius = float(np.mean(radii[members]))
        x, y = polar_to_cartesian(
            ctx.center.x,
            ctx.center.y,
            avg_radius + cfg.cluster_card_offset,
            angles_by_cluster[cluster_id],
        )
        cards.append(Card(
            kind=CardKind.CLUSTER_SUMMARY,
            anchor=Position2D(x, y),
            width=cfg.cluster_card_width,
            height=cfg.cluster_card_height,
            source_ids=[ctx.items[m].id for m in members[: cfg.cluster_summary_source_limit]],
            cluster_id=cluster_id,
        ))
    return cards


@layout_mode(
    mode=Mode.WALKABOUT,
    description="Radial layout: radius from concept similarity, angle from note-to-note similarity",
)
def walkabout(ctx: LayoutContext) -> None:
    cfg = ctx.config
    n = ctx.num_items

    ctx.cards.append(Card(
        kind=CardKind.CONCEPT,
        anchor=ctx.center,
        text=ctx.concept_text or None,
        width=cfg.concept_card_width,
        height=cfg.concept_card_height,
    ))
    if n == 0:
        return

    level = int(clamp(ctx.clustering_level, MIN_LEVEL, MAX_LEVEL))
    alpha = clustering_alpha(level)

    radii = map_radii(ctx.similarities(), cfg)

    distances = distance_matrix(similarity_matrix(ctx.embedding_matrix()))
    raw_layout = force_directed.embed(distances, cfg, ctx.rng)
    balanced: NormalizedLayout = balance_angles(raw_layout, cfg)
    free = free_positions(ctx.center, radii, balanced.angles)

    k = clustering.cluster_count(n, cfg)
    clusters = clustering.kmeans(balanced.points, k, ctx.rng, cfg)
    angles_by_cluster = clustering.cluster_angles(balanced.points, clusters)
    clustered = clustered_positions(
        ctx.center, radii, balanced.angles, clusters, angles_by_cluster, alpha, cfg
    )

    final = interpolate(free, clustered, alpha)
    for item, pos in zip(ctx.items, final):
        ctx.place(item.id, pos)

    ctx.features["radii"] = {item.id: float(r) for item, r in zip(ctx.items, radii)}
    ctx.features["free_positions"] = dict(zip(ctx.item_ids, free))
    ctx.features["clustered_positions"] = dict(zip(ctx.item_ids, clustered))
    ctx.features["clusters"] = {
        cid: [ctx.items[m].id for m in members] for cid, members in clusters.items()
    }
    ctx.features["swirl_detected"] = balanced.swirled
    ctx.features["clustering_level"] = level

    if level == MAX_LEVEL:
        ctx.cards.extend(cluster_summary_cards(ctx, radii, clusters, angles_by_cluster))

    logger.info(
        "Walkabout placed %d items (level=%d, alpha=%.2f, k=%d, swirl=%s)",
        n, level, alpha, k, balanced.swirled,
    )
