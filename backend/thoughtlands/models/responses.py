"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    modes: list[str] = Field(default_factory=list)


class PositionOut(BaseModel):
    id: str
    x: float
    y: float
    width: float
    height: float


class CardOut(BaseModel):
    kind: str
    x: float
    y: float
    width: float
    height: float
    text: str | None = None
    source_ids: list[str] = Field(default_factory=list)
    cluster_id: int | None = None


class LayoutResponse(BaseModel):
    mode: str
    positions: list[PositionOut] = Field(default_factory=list)
    cards: list[CardOut] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    fallback_mode: str | None = None
    warnings: dict[str, str] = Field(default_factory=dict)
    diagnostics: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
