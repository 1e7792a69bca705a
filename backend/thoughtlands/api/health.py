"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from thoughtlands.dependencies import get_mode_registry
from thoughtlands.engine.registry import ModeRegistry
from thoughtlands.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(registry: ModeRegistry = Depends(get_mode_registry)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        modes=[spec.mode.value for spec in registry.all()],
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from thoughtlands.llm.prompts import get_all_templates

    return get_all_templates()
