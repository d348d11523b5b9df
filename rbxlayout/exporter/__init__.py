"""Roblox Luau script export for flat UI layouts."""

from rbxlayout.exporter.lib import (
    DEFAULT_CLASS,
    PREAMBLE,
    ROOT_NAME,
    ExportOptions,
    ExportResult,
    ExportWarning,
    WarningKind,
    build_item_lines,
    class_name,
    export_layout,
    export_with_warnings,
    format_number,
    long_string,
    sanitize_name,
)
from rbxlayout.layout import coerce_number

__all__ = [
    # Export
    "export_layout",
    "export_with_warnings",
    "ExportOptions",
    "ExportResult",
    "ExportWarning",
    "WarningKind",
    # Helpers
    "sanitize_name",
    "coerce_number",
    "format_number",
    "class_name",
    "long_string",
    "build_item_lines",
    # Constants
    "PREAMBLE",
    "ROOT_NAME",
    "DEFAULT_CLASS",
]
