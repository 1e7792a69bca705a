"""Layout errors. Only the total absence of placeable items is fatal."""

from __future__ import annotations


class LayoutError(ValueError):
    pass


class NoPlaceableItemsError(LayoutError):
    def __init__(self, message: str = "No items to place") -> None:
        super().__init__(message)
