"""Thoughtlands layout engine."""

from thoughtlands.engine.registry import layout_mode, get_registry, load_modes
from thoughtlands.engine.context import LayoutContext, LayoutItem, LayoutResult, Mode
from thoughtlands.engine.pipeline import LayoutPipeline, create_pipeline

__all__ = [
    "layout_mode",
    "get_registry",
    "load_modes",
    "LayoutContext",
    "LayoutItem",
    "LayoutResult",
    "Mode",
    "LayoutPipeline",
    "create_pipeline",
]
