"""Layout mode registry: every mode is a standalone function registered via decorator.

Usage:
    @layout_mode(mode=Mode.REGIMENT, description="Deterministic grid")
    def regiment(ctx: LayoutContext) -> None:
        for i, item in enumerate(ctx.items):
            ctx.place(item.id, grid_cell(i))

Adding a new mode = creating one file in ``engine/modes`` with the decorator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from thoughtlands.engine.context import Mode

if TYPE_CHECKING:
    from thoughtlands.engine.context import LayoutContext

logger = logging.getLogger(__name__)


@dataclass
class ModeSpec:
    mode: Mode
    fn: Callable[["LayoutContext"], None]
    # Needs item embeddings (not just concept similarity) to arrange
    uses_embeddings: bool = True
    description: str = ""


class ModeRegistry:
    """Registry of all layout modes."""

    def __init__(self) -> None:
        self._modes: dict[Mode, ModeSpec] = {}

    def register(self, spec: ModeSpec) -> None:
        if spec.mode in self._modes:
            raise ValueError(f"Duplicate layout mode: {spec.mode.value}")
        self._modes[spec.mode] = spec
        logger.debug("Registered layout mode %s", spec.mode.value)

    def get(self, mode: Mode) -> ModeSpec:
        try:
            return self._modes[mode]
        except KeyError:
            raise ValueError(f"Unknown layout mode: {mode.value}") from None

    def has(self, mode: Mode) -> bool:
        return mode in self._modes

    def all(self) -> list[ModeSpec]:
        return [self._modes[m] for m in Mode if m in self._modes]

    @property
    def count(self) -> int:
        return len(self._modes)


# Module-level singleton
_registry = ModeRegistry()


def get_registry() -> ModeRegistry:
    return _registry


def layout_mode(
    *,
    mode: Mode,
    uses_embeddings: bool = True,
    description: str = "",
):
    """Decorator to register a layout mode function."""

    def decorator(fn: Callable[["LayoutContext"], None]):
        _registry.register(ModeSpec(
            mode=mode,
            fn=fn,
            uses_embeddings=uses_embeddings,
            description=description,
        ))
        return fn

    return decorator


def load_modes() -> ModeRegistry:
    """Import every module in ``engine/modes`` so @layout_mode decorators fire."""
    import importlib
    import pkgutil

    package = importlib.import_module("thoughtlands.engine.modes")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"thoughtlands.engine.modes.{module_name}")
    return _registry
