"""Layout configuration: every tuning constant the layout modes read."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Immutable tuning for one layout invocation.

    Distances are canvas units (Obsidian canvas pixels). Pass a modified copy
    via ``dataclasses.replace`` to run layouts with different tuning side by side.
    """

    # Canvas node and card boxes
    node_width: float = 280.0
    node_height: float = 200.0
    concept_card_width: float = 400.0
    concept_card_height: float = 150.0
    cluster_card_width: float = 300.0
    cluster_card_height: float = 100.0

    # Radius mapping (walkabout)
    r_min: float = 600.0
    r_max: float = 2400.0
    radius_expansion_power: float = 1.25
    similarity_epsilon: float = 1e-10

    # Force-directed embedding
    initial_radius: float = 100.0
    initial_jitter: float = 0.0
    spring_constant: float = 50.0
    damping: float = 0.9
    force_iterations: int = 100
    min_distance: float = 0.1

    # Angular balancing
    swirl_gap_ratio: float = 3.0  # max gap > 3x mean gap = swirled layout
    rotation_step_deg: float = 10.0

    # k-means
    min_clusters: int = 3
    max_clusters: int = 8
    items_per_cluster: int = 5
    kmeans_max_iterations: int = 50
    kmeans_tolerance: float = 0.01

    # Cluster spread (walkabout clustered positions)
    max_radial_spread: float = 120.0
    radial_spread_falloff: float = 0.5
    max_angular_spread: float = math.pi / 6
    angular_spread_falloff: float = 0.6
    mid_level_low: float = 0.3
    mid_level_high: float = 0.7
    mid_level_inward_damping: float = 0.3
    mid_level_radius_keep: float = 0.95
    mid_level_min_radius_fraction: float = 0.25
    cluster_card_offset: float = 150.0
    cluster_summary_source_limit: int = 10

    # Paths (hopscotch / rolling path)
    path_length_cap: int = 50
    path_similarity_threshold: float = 0.65
    path_spacing: float = 100.0
    path_summary_source_limit: int = 20

    # Crowd (regiment / gaggle)
    crowd_offset_y: float = 200.0
    concept_card_raise: float = 50.0
    grid_gap: float = 50.0
    gaggle_spacing_margin: float = 20.0
    gaggle_min_radius: float = 600.0
    gaggle_radius_scale: float = 1.8
    gaggle_bound_ratio: float = 1.2
    gaggle_attempts: int = 2000
    gaggle_noise_ratio: float = 0.8
    gaggle_jitter_ratio: float = 0.3
    gaggle_retry_attempts: int = 500
    gaggle_retry_radius_scale: float = 1.5
    gaggle_retry_noise_ratio: float = 1.0
    gaggle_retry_jitter_ratio: float = 0.4

    @property
    def rotation_step(self) -> float:
        return math.radians(self.rotation_step_deg)

    @property
    def gaggle_min_spacing(self) -> float:
        return max(self.node_width, self.node_height) + self.gaggle_spacing_margin
