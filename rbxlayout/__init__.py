"""rbxlayout: export flat UI layouts as Roblox Luau scripts."""

from rbxlayout.exporter import (
    ExportOptions,
    ExportResult,
    ExportWarning,
    export_layout,
    export_with_warnings,
)
from rbxlayout.layout import CanvasSize, Item, Layout

__all__ = [
    # Models
    "Layout",
    "Item",
    "CanvasSize",
    # Export
    "export_layout",
    "export_with_warnings",
    "ExportOptions",
    "ExportResult",
    "ExportWarning",
]
