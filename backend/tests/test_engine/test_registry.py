"""Tests for the layout mode registry."""

import pytest

from thoughtlands.engine.context import LayoutContext, Mode
from thoughtlands.engine.registry import ModeRegistry, ModeSpec, load_modes


def _noop(ctx: LayoutContext) -> None:
    pass


def test_register_and_get():
    reg = ModeRegistry()
    spec = ModeSpec(mode=Mode.REGIMENT, fn=_noop, uses_embeddings=False)
    reg.register(spec)
    assert reg.get(Mode.REGIMENT) is spec
    assert reg.has(Mode.REGIMENT)
    assert reg.count == 1


def test_duplicate_registration_rejected():
    reg = ModeRegistry()
    reg.register(ModeSpec(mode=Mode.GAGGLE, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(ModeSpec(mode=Mode.GAGGLE, fn=_noop))


def test_unknown_mode():
    reg = ModeRegistry()
    assert not reg.has(Mode.WALKABOUT)
    with pytest.raises(ValueError, match="walkabout"):
        reg.get(Mode.WALKABOUT)


def test_all_in_enum_order():
    reg = ModeRegistry()
    reg.register(ModeSpec(mode=Mode.GAGGLE, fn=_noop))
    reg.register(ModeSpec(mode=Mode.WALKABOUT, fn=_noop))
    assert [s.mode for s in reg.all()] == [Mode.WALKABOUT, Mode.GAGGLE]


def test_load_modes_registers_every_mode():
    reg = load_modes()
    assert reg.count == len(Mode)
    assert not reg.get(Mode.REGIMENT).uses_embeddings
    assert not reg.get(Mode.GAGGLE).uses_embeddings
    assert reg.get(Mode.HOPSCOTCH).uses_embeddings
    # Idempotent: modules are only imported once
    assert load_modes() is reg
