"""FastAPI dependency injection."""

from __future__ import annotations

from thoughtlands.engine.registry import ModeRegistry, load_modes


def get_mode_registry() -> ModeRegistry:
    return load_modes()
