"""Export CLI for rbxlayout.

This module provides the `python . export` command, which reads a layout
JSON file and writes the generated Luau script to stdout or a file.
"""

import argparse
import json
import sys
from pathlib import Path

from rbxlayout.config import get_export_defaults, get_output_dir
from rbxlayout.core import get_logger
from rbxlayout.exporter.lib import ExportOptions, export_with_warnings

logger = get_logger("export")

DEFAULT_FILENAME = "Generated_UI.lua"


def _read_layout(source: str) -> object:
    """Load layout JSON from a path, or stdin when source is '-'."""
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _resolve_output(output: Path | None) -> Path | None:
    """Resolve where the script goes; None means stdout."""
    target = output if output is not None else get_output_dir()
    if target is None:
        return None
    if target.is_dir() or output is None:
        return target / DEFAULT_FILENAME
    return target


def cmd_export(args: argparse.Namespace) -> int:
    """Handle `export`."""
    try:
        raw = _read_layout(args.layout)
    except OSError as e:
        logger.error(f"Cannot read layout: {e}")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Invalid layout JSON: {e}")
        return 1

    options = ExportOptions(
        **get_export_defaults(
            unique_names=args.unique_names,
            safe_text=args.safe_text,
        )
    )
    result = export_with_warnings(raw, options)

    for warning in result.warnings:
        logger.warning(
            f"[{warning.kind.value}] item {warning.item_index}: {warning.message}"
        )

    target = _resolve_output(args.output)
    if target is None:
        print(result.script)
    else:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.script, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write script: {e}")
            return 1
        logger.info(f"Script with {result.item_count} item(s) saved to {target}")

    if args.strict and result.has_warnings:
        logger.error(f"{len(result.warnings)} warning(s) in strict mode")
        return 1
    return 0


def handle_export_command(argv: list[str]) -> int:
    """Handle export command arguments."""
    parser = argparse.ArgumentParser(
        prog="python . export",
        description="Export a layout JSON file as a Roblox Luau script",
    )
    parser.add_argument(
        "layout",
        type=str,
        help="Path to the layout JSON file ('-' reads stdin)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help=f"Output file or directory (directories get {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--unique-names",
        action="store_true",
        default=None,
        help="Rename colliding identifiers with numeric suffixes",
    )
    parser.add_argument(
        "--safe-text",
        action="store_true",
        default=None,
        help="Quote text so that ']]' cannot end the string early",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when the export produced warnings",
    )

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    return cmd_export(args)
