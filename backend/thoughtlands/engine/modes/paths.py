"""Hopscotch / Rolling Path: greedy nearest-neighbour paths laid out on a diagonal.

Both start from the note most similar to the concept and repeatedly take the
unused note closest to a reference vector:
  hopscotch:    the last note taken
  rolling path: centroid of the concept and every note taken so far
The walk stops early (never errors) when candidates run out, nothing clears
the similarity threshold, or the path hits its length cap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import Card, CardKind, LayoutContext, Mode, Position2D
from thoughtlands.engine.registry import layout_mode
from thoughtlands.engine.similarity import centroid, cosine_similarity

logger = logging.getLogger(__name__)


@dataclass
class PathStep:
    index: int
    # Similarity to the reference that selected this step (None for the start)
    similarity: float | None = None


@dataclass
class Path:
    steps: list[PathStep] = field(default_factory=list)
    stop_reason: str = ""

    @property
    def indices(self) -> list[int]:
        return [s.index for s in self.steps]

    def __len__(self) -> int:
        return len(self.steps)


def _start_index(concept_similarities: NDArray[np.float64]) -> int:
    # argmax keeps the first of tied maxima
    return int(np.argmax(concept_similarities))


def build_path(
    embeddings: NDArray[np.float64],
    concept_similarities: NDArray[np.float64],
    concept_embedding: NDArray[np.float64] | None = None,
    *,
    rolling: bool = False,
    threshold: float = 0.65,
    cap: int = 50,
) -> Path:
    """Greedy walk over ``embeddings``; returns the steps taken, never repeating an item."""
    n = len(embeddings)
    path = Path()
    if n == 0 or cap <= 0:
        path.stop_reason = "empty"
        return path

    start = _start_index(np.asarray(concept_similarities, dtype=np.float64))
    path.steps.append(PathStep(index=start))
    used = {start}

    anchor: list[NDArray[np.float64]] = []
    if rolling and concept_embedding is not None and np.asarray(concept_embedding).size:
        concept = np.asarray(concept_embedding, dtype=np.float64).ravel()
        if concept.size == np.asarray(embeddings).shape[1]:
            anchor.append(concept)
        else:
            logger.warning(
                "Rolling path ignores concept embedding: dimension %d, items have %d",
                concept.size, np.asarray(embeddings).shape[1],
            )

    while True:
        if len(path) >= cap:
            path.stop_reason = "cap"
            break
        if len(used) == n:
            path.stop_reason = "exhausted"
            break

        if rolling:
            reference = centroid(anchor + [embeddings[i] for i in path.indices])
        else:
            reference = embeddings[path.steps[-1].index]

        best_index = -1
        best_sim = -np.inf
        for i in range(n):
            if i in used:
                continue
            sim = cosine_similarity(reference, embeddings[i])
            if sim > best_sim:
                best_sim = sim
                best_index = i

        if best_index < 0 or best_sim < threshold:
            path.stop_reason = "threshold"
            break

        path.steps.append(PathStep(index=best_index, similarity=float(best_sim)))
        used.add(best_index)

    return path


def diagonal_positions(
    start: Position2D, count: int, config: LayoutConfig
) -> list[Position2D]:
    """``count + 1`` diagonal slots: one per item plus the summary card slot."""
    first = start.offset(config.path_spacing, 0.0)
    step_x = config.node_width + config.path_spacing
    step_y = config.node_height + config.path_spacing
    return [first.offset(i * step_x, i * step_y) for i in range(count + 1)]


def _place_path(ctx: LayoutContext, rolling: bool) -> None:
    cfg = ctx.config
    path = build_path(
        ctx.embedding_matrix(),
        ctx.similarities(),
        ctx.concept_embedding,
        rolling=rolling,
        threshold=cfg.path_similarity_threshold,
        cap=cfg.path_length_cap,
    )
    slots = diagonal_positions(ctx.center, len(path), cfg)
    first = slots[0]

    # Concept card sits up and to the left of the first note (top-left corner
    # is first − card size − spacing)
    ctx.cards.append(Card(
        kind=CardKind.CONCEPT,
        anchor=first.offset(
            -cfg.concept_card_width / 2 - cfg.path_spacing,
            -cfg.concept_card_height / 2 - cfg.path_spacing,
        ),
        text=ctx.concept_text or None,
        width=cfg.concept_card_width,
        height=cfg.concept_card_height,
    ))

    for step, pos in zip(path.steps, slots):
        ctx.place(ctx.items[step.index].id, pos)

    on_path = set(path.indices)
    ctx.excluded.extend(item.id for i, item in enumerate(ctx.items) if i not in on_path)
    ctx.features["path"] = [ctx.items[i].id for i in path.indices]
    ctx.features["path_similarities"] = [s.similarity for s in path.steps]
    ctx.features["path_stop_reason"] = path.stop_reason

    if len(path) > 0:
        ctx.cards.append(Card(
            kind=CardKind.PATH_SUMMARY,
            anchor=slots[len(path)],
            width=cfg.concept_card_width,
            height=cfg.concept_card_height,
            source_ids=[
                ctx.items[i].id for i in path.indices[: cfg.path_summary_source_limit]
            ],
        ))

    logger.info(
        "%s path: %d of %d items (stopped: %s)",
        "Rolling" if rolling else "Hopscotch", len(path), ctx.num_items, path.stop_reason,
    )


@layout_mode(
    mode=Mode.HOPSCOTCH,
    description="Path that always steps to the note most similar to the previous one",
)
def hopscotch(ctx: LayoutContext) -> None:
    _place_path(ctx, rolling=False)


@layout_mode(
    mode=Mode.ROLLING_PATH,
    description="Path that steps to the note most similar to the running centroid",
)
def rolling_path(ctx: LayoutContext) -> None:
    _place_path(ctx, rolling=True)
