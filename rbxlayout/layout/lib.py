"""Layout models consumed by the exporter.

A layout is a flat, ordered list of rectangular items drawn on a canvas.
Every validator here runs in ``before`` mode and never raises: missing,
mistyped or non-finite values fall back to their defaults so that
``Layout.from_raw`` accepts whatever the editor hands over.
"""

import math
import re
from collections.abc import Mapping
from numbers import Real
from typing import Any

from pydantic import BaseModel, Field, field_validator

_INTEGER_RE = re.compile(r"[+-]?\d+")
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def coerce_number(value: Any) -> int | float:
    """Coerce any value to a finite number.

    Numbers pass through, numeric strings are parsed, and everything else
    (None, booleans, NaN, infinities, garbage strings) becomes ``0``.

    Example:
        >>> coerce_number("12")
        12
        >>> coerce_number("abc")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, Real):
        number = float(value)
        return number if math.isfinite(number) else 0
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            return int(text)
        if _NUMBER_RE.fullmatch(text):
            number = float(text)
            return number if math.isfinite(number) else 0
    return 0


def coerce_text(value: Any) -> str | None:
    """Coerce an optional string field.

    Empty strings and falsy values count as absent. Numbers are rendered
    as text, any other type is dropped.
    """
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = coerce_number(value)
    if not number:
        return None
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


class CanvasSize(BaseModel):
    """Size of the editing surface. Carried along, never emitted."""

    w: int | float = 0
    h: int | float = 0

    model_config = {"frozen": True}

    @field_validator("w", "h", mode="before")
    @classmethod
    def _number(cls, value: Any) -> int | float:
        return coerce_number(value)


class Item(BaseModel):
    """One UI element descriptor.

    Attributes:
        type: Target class name; the exporter defaults it to ``Frame``.
        name: Declared name; the exporter derives one when absent.
        x, y: Offset from the top-left corner in pixels.
        w, h: Size in pixels.
        fill: Background color as a hex string.
        opacity: Background opacity in ``[0, 1]``.
        text: Text content.
        text_color: Text color as a hex string.
        font_size: Text size; present only when the source value was truthy.
        image_id: Opaque image asset reference.
        export: ``False`` drops the item before indexing.
        role: ``"layout"`` marks editor-only helpers.

    Example:
        >>> Item.model_validate({"type": "TextLabel", "textColor": "#fff"})
        Item(type='TextLabel', ..., text_color='#fff', ...)
    """

    type: str | None = Field(None, description="Target class name")
    name: str | None = Field(None, description="Declared script name")
    x: int | float = Field(default=0, description="Horizontal offset in pixels")
    y: int | float = Field(default=0, description="Vertical offset in pixels")
    w: int | float = Field(default=0, description="Width in pixels")
    h: int | float = Field(default=0, description="Height in pixels")
    fill: str | None = Field(None, description="Background hex color")
    opacity: int | float | None = Field(None, description="Background opacity 0-1")
    text: str | None = Field(None, description="Text content")
    text_color: str | None = Field(
        None, alias="textColor", description="Text hex color"
    )
    font_size: int | float | None = Field(
        None, alias="fontSize", description="Text size"
    )
    image_id: str | None = Field(
        None, alias="imageId", description="Image asset reference"
    )
    export: bool = Field(default=True, description="False drops the item")
    role: str | None = Field(None, description='"layout" marks editor helpers')

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("x", "y", "w", "h", mode="before")
    @classmethod
    def _geometry(cls, value: Any) -> int | float:
        return coerce_number(value)

    @field_validator(
        "type", "name", "fill", "text", "text_color", "image_id", "role", mode="before"
    )
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("font_size", mode="before")
    @classmethod
    def _font_size(cls, value: Any) -> int | float | None:
        if not value:
            return None
        return coerce_number(value)

    @field_validator("opacity", mode="before")
    @classmethod
    def _opacity(cls, value: Any) -> int | float:
        # Only runs for a key that is present; an explicit null means 0.
        return max(0, min(1, coerce_number(value)))

    @field_validator("export", mode="before")
    @classmethod
    def _export(cls, value: Any) -> bool:
        return value is not False


def _item_payload(entry: Any) -> Any:
    if isinstance(entry, Item):
        return entry
    if isinstance(entry, Mapping):
        return dict(entry)
    return {}


class Layout(BaseModel):
    """The exporter's whole input: canvas metadata plus ordered items.

    ``items`` that is not a list or tuple becomes empty, and any entry that
    is not a mapping becomes an all-defaults ``Item``.
    """

    canvas_size: CanvasSize | None = Field(None, alias="canvasSize")
    items: tuple[Item, ...] = ()

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("canvas_size", mode="before")
    @classmethod
    def _canvas(cls, value: Any) -> Any:
        if isinstance(value, CanvasSize):
            return value
        if isinstance(value, Mapping):
            return dict(value)
        return None

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [_item_payload(entry) for entry in value]

    @classmethod
    def from_raw(cls, raw: Any) -> "Layout":
        """Build a Layout from a model, a mapping, or anything else.

        Args:
            raw: Parsed JSON, an existing Layout, or arbitrary data.

        Returns:
            Layout: ``raw`` itself when it already is one, otherwise a new
            model. Non-mapping input yields an empty layout.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        return cls.model_validate(dict(raw))
