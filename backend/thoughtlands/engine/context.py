"""LayoutContext: the single state object flowing through one layout run.

Per-item inputs → LayoutItem
Mode outputs → LayoutContext.positions / cards
Intermediate results worth inspecting (free/clustered positions, clusters) → LayoutContext.features
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine.config import LayoutConfig


class Mode(str, enum.Enum):
    WALKABOUT = "walkabout"
    HOPSCOTCH = "hopscotch"
    ROLLING_PATH = "rolling_path"
    REGIMENT = "regiment"
    GAGGLE = "gaggle"


class CardKind(str, enum.Enum):
    CONCEPT = "concept"
    CLUSTER_SUMMARY = "cluster_summary"
    PATH_SUMMARY = "path_summary"


@dataclass(frozen=True)
class Position2D:
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Position2D:
        return Position2D(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class LayoutItem:
    """A note to place. ``embedding`` may be missing until the pipeline resolves it."""

    id: str
    embedding: NDArray[np.float64] | None = None
    concept_similarity: float | None = None
    # Note content, only used as summarizer input
    text: str = ""


@dataclass
class Card:
    """Auxiliary text node placed next to the notes. ``anchor`` is the card centre."""

    kind: CardKind
    anchor: Position2D
    text: str | None = None
    width: float = 400.0
    height: float = 150.0
    source_ids: list[str] = field(default_factory=list)
    cluster_id: int | None = None

    @property
    def needs_summary(self) -> bool:
        return self.kind in (CardKind.CLUSTER_SUMMARY, CardKind.PATH_SUMMARY)


@dataclass
class LayoutContext:
    """Shared state for a single layout invocation."""

    mode: Mode
    items: list[LayoutItem] = field(default_factory=list)
    concept_embedding: NDArray[np.float64] | None = None
    concept_text: str = ""
    # Canvas position the arrangement grows from
    center: Position2D = field(default_factory=lambda: Position2D(500.0, 400.0))
    clustering_level: int = 2
    config: LayoutConfig = field(default_factory=LayoutConfig)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    # --- Outputs (populated by the mode) ---
    positions: dict[str, Position2D] = field(default_factory=dict)
    cards: list[Card] = field(default_factory=list)
    # Ids in the order the mode placed them
    order: list[str] = field(default_factory=list)
    # Ids left out of the arrangement (no embedding, or not on a path)
    excluded: list[str] = field(default_factory=list)
    fallback_mode: Mode | None = None
    # Intermediate results keyed by name
    features: dict[str, Any] = field(default_factory=dict)
    # Non-fatal problems, keyed by item id or stage name
    warnings: dict[str, str] = field(default_factory=dict)

    @property
    def num_items(self) -> int:
        return len(self.items)

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self.items]

    def embedding_matrix(self) -> NDArray[np.float64]:
        """Stack item embeddings into an (N, D) array. Items must all have embeddings."""
        if not self.items:
            return np.empty((0, 0))
        return np.vstack([np.asarray(item.embedding, dtype=np.float64) for item in self.items])

    def similarities(self) -> NDArray[np.float64]:
        return np.array(
            [item.concept_similarity or 0.0 for item in self.items], dtype=np.float64
        )

    def place(self, item_id: str, pos: Position2D) -> None:
        self.positions[item_id] = pos
        self.order.append(item_id)


@dataclass
class LayoutResult:
    """What a layout invocation hands back to the caller."""

    mode: Mode
    positions: dict[str, Position2D]
    cards: list[Card]
    order: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    fallback_mode: Mode | None = None
    diagnostics: dict[str, Any] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_context(cls, ctx: LayoutContext) -> LayoutResult:
        return cls(
            mode=ctx.mode,
            positions=dict(ctx.positions),
            cards=list(ctx.cards),
            order=list(ctx.order),
            excluded=list(ctx.excluded),
            fallback_mode=ctx.fallback_mode,
            diagnostics=dict(ctx.features),
            warnings=dict(ctx.warnings),
        )
