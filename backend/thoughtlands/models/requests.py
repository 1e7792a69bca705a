"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from thoughtlands.engine.context import Mode


class ItemIn(BaseModel):
    id: str = Field(..., description="Note identifier (e.g. vault path)")
    embedding: list[float] | None = Field(default=None, description="Note embedding vector")
    concept_similarity: float | None = Field(
        default=None,
        description="Precomputed similarity to the concept; computed from embeddings if omitted",
    )
    text: str = Field(default="", description="Note content, used for summary cards")


class LayoutRequest(BaseModel):
    mode: Mode = Field(default=Mode.WALKABOUT, description="Layout mode")
    concept_text: str = Field(default="", description="The concept or question the notes relate to")
    concept_embedding: list[float] | None = Field(default=None, description="Concept embedding vector")
    items: list[ItemIn] = Field(default_factory=list)
    clustering_level: int | None = Field(default=None, ge=1, le=4, description="Walkabout level 1-4")
    clustering_percent: float | None = Field(
        default=None,
        ge=0,
        le=100,
        description="Walkabout slider value 25-100, used when clustering_level is absent",
    )
    path_length_cap: int | None = Field(default=None, ge=1, description="Hopscotch / Rolling Path cap")
    similarity_threshold: float | None = Field(
        default=None, ge=-1, le=1, description="Hopscotch / Rolling Path stop threshold"
    )
    center_x: float = Field(default=500.0, description="Canvas x the arrangement grows from")
    center_y: float = Field(default=400.0, description="Canvas y the arrangement grows from")
    seed: int | None = Field(default=None, description="Seed for reproducible layouts")
    summarize: bool = Field(default=False, description="Fill summary cards via the LLM")
