"""POST /api/layout: arrange notes around a concept."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any

import numpy as np
from fastapi import APIRouter, HTTPException

from thoughtlands.engine.collaborators import InMemoryEmbeddingSource
from thoughtlands.engine.config import LayoutConfig
from thoughtlands.engine.context import (
    CardKind,
    LayoutContext,
    LayoutItem,
    LayoutResult,
    Position2D,
)
from thoughtlands.engine.errors import NoPlaceableItemsError
from thoughtlands.engine.modes.walkabout import clustering_level_from_percent
from thoughtlands.engine.pipeline import create_pipeline
from thoughtlands.engine.summaries import fill_card_text
from thoughtlands.llm.client import LLMSummarizer
from thoughtlands.models.requests import LayoutRequest
from thoughtlands.models.responses import CardOut, LayoutResponse, PositionOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/layout", response_model=LayoutResponse)
async def layout(req: LayoutRequest) -> LayoutResponse:
    ctx = build_context(req)
    # Items arrive without vectors; the pipeline resolves them from the request
    source = InMemoryEmbeddingSource(
        {item.id: item.embedding for item in req.items if item.embedding}
    )
    pipeline = create_pipeline(embedding_source=source)

    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, pipeline.run, ctx)
    except NoPlaceableItemsError as e:
        logger.info("Layout rejected (%s): %s", req.mode.value, e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    if req.summarize:
        task = "path_summary" if any(
            c.kind == CardKind.PATH_SUMMARY for c in result.cards
        ) else "cluster_summary"
        await fill_card_text(result, ctx.items, LLMSummarizer(task=task), req.concept_text)
    else:
        _set_concept_text(result, req.concept_text)

    return to_response(result, ctx.config)


def build_context(req: LayoutRequest) -> LayoutContext:
    """Translate the request into a LayoutContext with per-request config overrides."""
    config = LayoutConfig()
    overrides: dict[str, Any] = {}
    if req.path_length_cap is not None:
        overrides["path_length_cap"] = req.path_length_cap
    if req.similarity_threshold is not None:
        overrides["path_similarity_threshold"] = req.similarity_threshold
    if overrides:
        config = replace(config, **overrides)

    if req.clustering_level is not None:
        level = req.clustering_level
    elif req.clustering_percent is not None:
        level = clustering_level_from_percent(req.clustering_percent)
    else:
        level = 2

    items = [
        LayoutItem(
            id=item.id,
            concept_similarity=item.concept_similarity,
            text=item.text,
        )
        for item in req.items
    ]
    concept = (
        np.asarray(req.concept_embedding, dtype=np.float64) if req.concept_embedding else None
    )

    return LayoutContext(
        mode=req.mode,
        items=items,
        concept_embedding=concept,
        concept_text=req.concept_text,
        center=Position2D(req.center_x, req.center_y),
        clustering_level=level,
        config=config,
        rng=np.random.default_rng(req.seed),
    )


def to_response(result: LayoutResult, config: LayoutConfig) -> LayoutResponse:
    positions = [
        PositionOut(id=item_id, x=pos.x, y=pos.y,
                    width=config.node_width, height=config.node_height)
        for item_id, pos in result.positions.items()
    ]
    cards = [
        CardOut(
            kind=card.kind.value,
            x=card.anchor.x,
            y=card.anchor.y,
            width=card.width,
            height=card.height,
            text=card.text,
            source_ids=list(card.source_ids),
            cluster_id=card.cluster_id,
        )
        for card in result.cards
    ]
    diagnostics = {k: _jsonable(v) for k, v in result.diagnostics.items()}
    return LayoutResponse(
        mode=result.mode.value,
        positions=positions,
        cards=cards,
        excluded=list(result.excluded),
        fallback_mode=result.fallback_mode.value if result.fallback_mode else None,
        warnings=dict(result.warnings),
        diagnostics=diagnostics,
        processing_time_ms=float(result.diagnostics.get("processing_time_ms", 0.0)),
    )


def _set_concept_text(result: LayoutResult, concept_text: str) -> None:
    for card in result.cards:
        if card.kind == CardKind.CONCEPT and not card.text:
            card.text = concept_text or None


def _jsonable(value: Any) -> Any:
    if isinstance(value, Position2D):
        return [value.x, value.y]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value
