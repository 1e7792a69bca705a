"""Layout pipeline: resolves inputs, dispatches to the selected mode, collects the result."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import replace

import numpy as np

from thoughtlands.engine.collaborators import CachingEmbeddingSource, EmbeddingSource
from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import LayoutContext, LayoutItem, LayoutResult, Mode
from thoughtlands.engine.errors import NoPlaceableItemsError
from thoughtlands.engine.registry import ModeRegistry, load_modes
from thoughtlands.engine.similarity import similarities_to

logger = logging.getLogger(__name__)

# Non-similarity layout used when no item could be arranged by similarity
FALLBACK_MODE = Mode.REGIMENT


class LayoutPipeline:
    """Runs layout invocations; source embeddings, misses included, are fetched once."""

    def __init__(
        self,
        registry: ModeRegistry | None = None,
        config: LayoutConfig | None = None,
        embedding_source: EmbeddingSource | None = None,
    ) -> None:
        self.registry = registry or load_modes()
        self.config = config
        if embedding_source is not None and not isinstance(embedding_source, CachingEmbeddingSource):
            embedding_source = CachingEmbeddingSource(embedding_source)
        self.embedding_source = embedding_source

    def run(self, ctx: LayoutContext) -> LayoutResult:
        """Place the items of ``ctx`` with its mode and return the result."""
        start = time.perf_counter()

        if not ctx.items:
            raise NoPlaceableItemsError()

        if self.config is not None:
            ctx.config = self.config

        spec = self.registry.get(ctx.mode)
        items = self._resolve_embeddings(ctx)
        dimension = _dominant_dimension(items)
        _drop_mismatched_concept(ctx, dimension)

        placeable: list[LayoutItem] = []
        for item in items:
            if _has_embedding(item, dimension):
                placeable.append(item)
            elif not spec.uses_embeddings and item.concept_similarity is not None:
                placeable.append(item)
            else:
                ctx.excluded.append(item.id)
                ctx.warnings.setdefault(item.id, "no usable embedding")

        if not placeable:
            fallback = self.registry.get(FALLBACK_MODE)
            logger.info(
                "No item has an embedding for %s, falling back to %s",
                ctx.mode.value, FALLBACK_MODE.value,
            )
            ctx.fallback_mode = FALLBACK_MODE
            ctx.excluded.clear()
            spec = fallback
            placeable = list(items)

        ctx.items = self._order_by_similarity(ctx, placeable, dimension)
        if ctx.excluded:
            logger.info("Excluded %d item(s) without embeddings", len(ctx.excluded))

        spec.fn(ctx)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Layout %s complete: %d placed, %d excluded, %d cards in %.0fms",
            spec.mode.value,
            len(ctx.positions),
            len(ctx.excluded),
            len(ctx.cards),
            elapsed,
        )
        ctx.features["processing_time_ms"] = round(elapsed, 1)
        return LayoutResult.from_context(ctx)

    def _resolve_embeddings(self, ctx: LayoutContext) -> list[LayoutItem]:
        """Fill missing embeddings from the source; fetch failures count as absent."""
        if self.embedding_source is None:
            return list(ctx.items)

        resolved: list[LayoutItem] = []
        for item in ctx.items:
            if _has_embedding(item):
                resolved.append(item)
                continue
            try:
                embedding = self.embedding_source.fetch_embedding(item.id)
            except Exception as e:
                logger.warning("Embedding fetch failed for %s: %s", item.id, e)
                ctx.warnings[item.id] = f"embedding fetch failed: {e}"
                embedding = None
            resolved.append(replace(item, embedding=embedding) if embedding is not None else item)
        logger.debug("Embedding source holds %d cached id(s)", self.embedding_source.cached_count)
        return resolved

    def _order_by_similarity(
        self, ctx: LayoutContext, items: list[LayoutItem], dimension: int | None = None
    ) -> list[LayoutItem]:
        """Fill missing concept similarities, then sort highest first (stable)."""
        missing = [
            i for i, item in enumerate(items)
            if item.concept_similarity is None and _has_embedding(item, dimension)
        ]
        filled: dict[int, float] = {}
        if ctx.concept_embedding is not None and missing:
            matrix = np.vstack([np.asarray(items[i].embedding, dtype=np.float64).ravel()
                                for i in missing])
            sims = similarities_to(ctx.concept_embedding, matrix)
            filled = {i: float(s) for i, s in zip(missing, sims)}

        scored = [
            item if item.concept_similarity is not None
            else replace(item, concept_similarity=filled.get(i, 0.0))
            for i, item in enumerate(items)
        ]
        return sorted(scored, key=lambda it: -(it.concept_similarity or 0.0))


def create_pipeline(
    config: LayoutConfig | None = None,
    embedding_source: EmbeddingSource | None = None,
) -> LayoutPipeline:
    """Factory function for creating a pipeline instance."""
    return LayoutPipeline(config=config, embedding_source=embedding_source)


def _drop_mismatched_concept(ctx: LayoutContext, dimension: int | None) -> None:
    if ctx.concept_embedding is None or dimension is None:
        return
    size = np.asarray(ctx.concept_embedding).size
    if size == dimension:
        return
    logger.warning("Ignoring concept embedding: dimension %d, items have %d", size, dimension)
    ctx.warnings["concept_embedding"] = f"dimension {size} does not match items ({dimension})"
    ctx.concept_embedding = None


def _has_embedding(item: LayoutItem, dimension: int | None = None) -> bool:
    if item.embedding is None:
        return False
    size = np.asarray(item.embedding).size
    if size == 0:
        return False
    return dimension is None or size == dimension


def _dominant_dimension(items: list[LayoutItem]) -> int | None:
    """Most common embedding size; items of any other size cannot share a matrix."""
    sizes = Counter(
        np.asarray(item.embedding).size for item in items if _has_embedding(item)
    )
    if not sizes:
        return None
    return sizes.most_common(1)[0][0]
