"""Layout models for the Roblox UI exporter."""

from rbxlayout.layout.lib import (
    CanvasSize,
    Item,
    Layout,
    coerce_number,
    coerce_text,
)

__all__ = [
    "CanvasSize",
    "Item",
    "Layout",
    "coerce_number",
    "coerce_text",
]
