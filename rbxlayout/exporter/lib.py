"""Layout to Roblox Luau exporter.

Turns a flat ``Layout`` into a LocalScript that rebuilds the same UI under
a ``ScreenGui`` at runtime. Example output:

    ```lua
    local ScreenGui = Instance.new("ScreenGui")
    ScreenGui.Name = "GeneratedUI"
    ScreenGui.ResetOnSpawn = false
    ScreenGui.Parent = game.Players.LocalPlayer:WaitForChild("PlayerGui")

    local Title = Instance.new("TextLabel")
    Title.Position = UDim2.fromOffset(16, 16)
    Title.Size = UDim2.fromOffset(200, 40)
    Title.Text = [[Welcome]]
    Title.Parent = ScreenGui
    ```

The export is a pure function of its input. Malformed layouts never raise;
they degrade to defaults (see ``rbxlayout.layout``).
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rbxlayout.core import get_logger
from rbxlayout.layout import Item, Layout, coerce_number

logger = get_logger(__name__)

ROOT_NAME = "ScreenGui"
DEFAULT_CLASS = "Frame"

PREAMBLE: tuple[str, ...] = (
    f'local {ROOT_NAME} = Instance.new("ScreenGui")',
    f'{ROOT_NAME}.Name = "GeneratedUI"',
    f"{ROOT_NAME}.ResetOnSpawn = false",
    f'{ROOT_NAME}.Parent = game.Players.LocalPlayer:WaitForChild("PlayerGui")',
)

# Editor shapes without a Roblox class of their own; declared as Frame.
SHAPE_TYPES = frozenset({"Circle", "Line"})

# Editor helpers that take part in arrangement but have no runtime object.
LAYOUT_ONLY_TYPES = frozenset({"Spacer", "Group"})
LAYOUT_ROLE = "layout"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")
_CLASS_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class ExportOptions:
    """Opt-in changes to the generated script.

    Both switches default to off, which keeps the output byte-identical to
    the plain exporter.

    Attributes:
        unique_names: Rename colliding identifiers to ``<name>_2``,
            ``<name>_3`` and so on, in order of appearance.
        safe_text: Quote text with the lowest long-bracket level that the
            text cannot close, and keep a leading newline.
    """

    unique_names: bool = False
    safe_text: bool = False


class WarningKind(str, Enum):
    """Categories of export diagnostics."""

    DUPLICATE_NAME = "duplicate_name"
    UNTERMINATED_TEXT = "unterminated_text"
    SKIPPED_ITEM = "skipped_item"


@dataclass
class ExportWarning:
    """Something in the layout the script may not represent faithfully.

    Attributes:
        kind: Diagnostic category.
        item_index: Index of the item among exported items.
        identifier: Script identifier of the item.
        message: Human-readable explanation.
    """

    kind: WarningKind
    item_index: int
    identifier: str
    message: str


@dataclass
class ExportResult:
    """Generated script plus diagnostics.

    Attributes:
        script: The Luau source text.
        warnings: Issues detected while exporting.
        item_count: Number of item blocks written.
    """

    script: str
    warnings: list[ExportWarning] = field(default_factory=list)
    item_count: int = 0

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were emitted."""
        return len(self.warnings) > 0


# =============================================================================
# Helpers
# =============================================================================


def sanitize_name(name: str | None, type_name: str | None, index: int) -> str:
    """Turn a declared item name into a Luau identifier.

    An absent name falls back to ``<type>_<index>`` (``Item`` when the type
    is absent too). Every character outside ``[A-Za-z0-9_]`` is replaced by
    an underscore. A name with no letter or digit left becomes
    ``Item_<index>``.

    Known limitation: the replacement is one-to-one and nothing more, so a
    name that starts with a digit (``"1abc"``) or is a Luau keyword
    (``"end"``) comes through unchanged and is not a valid identifier.

    Example:
        >>> sanitize_name("my name!!", "Frame", 0)
        'my_name__'
        >>> sanitize_name(None, "TextLabel", 3)
        'TextLabel_3'
        >>> sanitize_name("###", "Frame", 2)
        'Item_2'
    """
    raw = name or f"{type_name or 'Item'}_{index}"
    identifier = _UNSAFE_NAME_CHARS.sub("_", raw)
    if not identifier.strip("_"):
        return f"Item_{index}"
    return identifier


def format_number(value: Any) -> str:
    """Render a number as a Luau literal.

    Integral floats drop the fractional part so ``12.0`` renders as ``12``.
    """
    number = coerce_number(value)
    if isinstance(number, float):
        if number.is_integer() and abs(number) < 1e16:
            return str(int(number))
        return repr(number)
    return str(number)


def class_name(type_name: str | None) -> str:
    """Resolve the Roblox class an item is instantiated as."""
    if not type_name or type_name in SHAPE_TYPES:
        return DEFAULT_CLASS
    if not _CLASS_NAME.fullmatch(type_name):
        return DEFAULT_CLASS
    return type_name


def long_string(text: str, safe: bool = False) -> str:
    """Quote text as a Luau long string.

    The plain form is ``[[text]]`` with no escaping, so text containing
    ``]]`` (or ending in ``]``) ends the string early. With ``safe`` the
    bracket level grows until its terminator no longer occurs in the text,
    nor across the text and the closing bracket, and a leading newline is
    doubled because Luau drops the first one.
    """
    if not safe:
        return f"[[{text}]]"
    level = 0
    while f"]{'=' * level}]" in text + "]":
        level += 1
    equals = "=" * level
    if text.startswith(("\n", "\r")):
        text = "\n" + text
    return f"[{equals}[{text}]{equals}]"


def _color(hex_value: str) -> str:
    return f'Color3.fromHex("{hex_value}")'


def build_item_lines(
    item: Item, identifier: str, options: ExportOptions | None = None
) -> list[str]:
    """Build the statement block for one item.

    Position, size and parent are always written; optional properties
    follow in a fixed order and only when set.

    Args:
        item: The item to declare.
        identifier: Sanitized script identifier.
        options: Export switches; defaults to the plain behaviour.

    Returns:
        list[str]: Lines of the block, starting with the blank separator.
    """
    options = options or ExportOptions()
    lines = [
        "",
        f'local {identifier} = Instance.new("{class_name(item.type)}")',
        f"{identifier}.Position = UDim2.fromOffset("
        f"{format_number(item.x)}, {format_number(item.y)})",
        f"{identifier}.Size = UDim2.fromOffset("
        f"{format_number(item.w)}, {format_number(item.h)})",
    ]

    if item.fill:
        lines.append(f"{identifier}.BackgroundColor3 = {_color(item.fill)}")
    if item.opacity is not None:
        transparency = format_number(1 - item.opacity)
        lines.append(f"{identifier}.BackgroundTransparency = {transparency}")
    if item.text:
        text = long_string(item.text, safe=options.safe_text)
        lines.append(f"{identifier}.Text = {text}")
    if item.text_color:
        lines.append(f"{identifier}.TextColor3 = {_color(item.text_color)}")
    if item.font_size is not None:
        lines.append(f"{identifier}.TextSize = {format_number(item.font_size)}")
    if item.image_id:
        lines.append(f'{identifier}.Image = "{item.image_id}"')

    lines.append(f"{identifier}.Parent = {ROOT_NAME}")

    if item.type == "Circle":
        corner = f"{identifier}_corner"
        lines.append(f'local {corner} = Instance.new("UICorner")')
        lines.append(
            f"{corner}.CornerRadius = UDim.new(0, math.floor(math.min("
            f"{identifier}.AbsoluteSize.X, {identifier}.AbsoluteSize.Y)/2))"
        )
        lines.append(f"{corner}.Parent = {identifier}")
    elif item.type == "Line":
        lines.append(f"{identifier}.BorderSizePixel = 0")

    return lines


def _is_layout_only(item: Item) -> bool:
    return item.type in LAYOUT_ONLY_TYPES or item.role == LAYOUT_ROLE


def _claimed_names(item: Item, identifier: str) -> set[str]:
    """Script locals an item block declares."""
    if item.type == "Circle":
        return {identifier, f"{identifier}_corner"}
    return {identifier}


def _dedupe(item: Item, identifier: str, taken: set[str]) -> str:
    suffix = 2
    while _claimed_names(item, f"{identifier}_{suffix}") & taken:
        suffix += 1
    return f"{identifier}_{suffix}"


def _breaks_long_string(text: str) -> bool:
    return "]]" in text + "]"


# =============================================================================
# Exporter
# =============================================================================


def export_with_warnings(
    layout: Any, options: ExportOptions | None = None
) -> ExportResult:
    """Export a layout and collect diagnostics.

    The script is the same one ``export_layout`` returns; warnings only
    describe it.

    Args:
        layout: A ``Layout`` or any raw structure (typically parsed JSON).
        options: Export switches; defaults to the plain behaviour.

    Returns:
        ExportResult with the script text and warnings.
    """
    options = options or ExportOptions()
    model = Layout.from_raw(layout)
    exportable = [item for item in model.items if item.export]

    lines = list(PREAMBLE)
    warnings: list[ExportWarning] = []
    taken: set[str] = {ROOT_NAME}
    blocks = 0

    declared = Counter([ROOT_NAME])
    for index, item in enumerate(exportable):
        if not _is_layout_only(item):
            declared.update(
                _claimed_names(item, sanitize_name(item.name, item.type, index))
            )

    for index, item in enumerate(exportable):
        identifier = sanitize_name(item.name, item.type, index)

        if _is_layout_only(item):
            warnings.append(
                ExportWarning(
                    kind=WarningKind.SKIPPED_ITEM,
                    item_index=index,
                    identifier=identifier,
                    message=f"'{identifier}' is a layout helper and was not exported",
                )
            )
            continue

        message = None
        claimed = _claimed_names(item, identifier)
        if options.unique_names and claimed & taken:
            renamed = _dedupe(item, identifier, taken)
            message = f"Duplicate identifier '{identifier}' renamed to '{renamed}'"
            identifier = renamed
            claimed = _claimed_names(item, identifier)
        elif not options.unique_names:
            clashes = sorted(name for name in claimed if declared[name] > 1)
            if clashes:
                message = (
                    f"Identifier '{clashes[0]}' is declared "
                    f"{declared[clashes[0]]} times"
                )
        if message:
            warnings.append(
                ExportWarning(
                    kind=WarningKind.DUPLICATE_NAME,
                    item_index=index,
                    identifier=identifier,
                    message=message,
                )
            )
        taken.update(claimed)

        if item.text and _breaks_long_string(item.text) and not options.safe_text:
            warnings.append(
                ExportWarning(
                    kind=WarningKind.UNTERMINATED_TEXT,
                    item_index=index,
                    identifier=identifier,
                    message=f"Text of '{identifier}' closes the long string early",
                )
            )

        lines.extend(build_item_lines(item, identifier, options))
        blocks += 1

    logger.debug(f"Exported {blocks} item(s) with {len(warnings)} warning(s)")
    return ExportResult(script="\n".join(lines), warnings=warnings, item_count=blocks)


def export_layout(layout: Any, options: ExportOptions | None = None) -> str:
    """Export a layout to Luau script text.

    Args:
        layout: A ``Layout`` or any raw structure (typically parsed JSON).
        options: Export switches; defaults to the plain behaviour.

    Returns:
        str: The preamble followed by one block per item, newline-joined.

    Example:
        >>> script = export_layout({"items": [{}]})
        >>> script.splitlines()[5]
        'local Item_0 = Instance.new("Frame")'
    """
    return export_with_warnings(layout, options).script
