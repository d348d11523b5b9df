"""Unit tests for layout models."""

import math

import pytest

from rbxlayout.layout import CanvasSize, Item, Layout, coerce_number, coerce_text


class TestCoerceNumber:
    """Tests for numeric coercion."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (12, 12),
            (-3, -3),
            (2.5, 2.5),
            ("12", 12),
            (" 4.5 ", 4.5),
            ("-7", -7),
            ("1e3", 1000.0),
            (".5", 0.5),
        ],
    )
    def test_numeric_values(self, value, expected):
        """Numbers and numeric strings keep their value."""
        assert coerce_number(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "12px", "1_000", True, False, [], {}, object()],
    )
    def test_invalid_values_become_zero(self, value):
        """Anything that is not a number becomes 0."""
        assert coerce_number(value) == 0

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value", [math.nan, math.inf, -math.inf, "nan", "inf", "1e999"]
    )
    def test_non_finite_become_zero(self, value):
        """NaN and infinities never leak into the output."""
        assert coerce_number(value) == 0

    @pytest.mark.unit
    def test_integer_string_stays_int(self):
        """Integer strings produce ints, not floats."""
        assert isinstance(coerce_number("40"), int)


class TestCoerceText:
    """Tests for optional string coercion."""

    @pytest.mark.unit
    def test_string_passthrough(self):
        """Strings pass through untouched."""
        assert coerce_text("  hi ]] ") == "  hi ]] "

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", 0, False, True, [], {"a": 1}])
    def test_absent_values(self, value):
        """Falsy and non-scalar values count as absent."""
        assert coerce_text(value) is None

    @pytest.mark.unit
    def test_numbers_render_as_text(self):
        """Numbers are rendered without a trailing .0."""
        assert coerce_text(42) == "42"
        assert coerce_text(3.0) == "3"
        assert coerce_text(1.5) == "1.5"


class TestItem:
    """Tests for the Item model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Empty item has zero geometry and no optional fields."""
        item = Item.model_validate({})
        assert item.type is None
        assert item.name is None
        assert (item.x, item.y, item.w, item.h) == (0, 0, 0, 0)
        assert item.fill is None
        assert item.opacity is None
        assert item.text is None
        assert item.text_color is None
        assert item.font_size is None
        assert item.image_id is None
        assert item.export is True

    @pytest.mark.unit
    def test_camel_case_aliases(self):
        """Editor field names map onto the model."""
        item = Item.model_validate(
            {"textColor": "#fff", "fontSize": 18, "imageId": "rbxassetid://1"}
        )
        assert item.text_color == "#fff"
        assert item.font_size == 18
        assert item.image_id == "rbxassetid://1"

    @pytest.mark.unit
    def test_field_names_accepted(self):
        """Python field names are accepted as well."""
        item = Item(text_color="#000", font_size=12)
        assert item.text_color == "#000"
        assert item.font_size == 12

    @pytest.mark.unit
    def test_geometry_coercion(self):
        """Bad geometry coerces to 0 instead of failing."""
        item = Item.model_validate({"x": "abc", "y": None, "w": "100", "h": [1]})
        assert (item.x, item.y, item.w, item.h) == (0, 0, 100, 0)

    @pytest.mark.unit
    def test_font_size_presence(self):
        """Falsy font sizes are absent, truthy garbage coerces to 0."""
        assert Item.model_validate({"fontSize": 0}).font_size is None
        assert Item.model_validate({"fontSize": ""}).font_size is None
        assert Item.model_validate({"fontSize": "big"}).font_size == 0

    @pytest.mark.unit
    def test_opacity_clamped(self):
        """Opacity is clamped into [0, 1]."""
        assert Item.model_validate({"opacity": 2}).opacity == 1
        assert Item.model_validate({"opacity": -1}).opacity == 0
        assert Item.model_validate({"opacity": 0.25}).opacity == 0.25

    @pytest.mark.unit
    def test_null_opacity_is_present(self):
        """A null opacity counts as given and coerces to 0."""
        assert Item.model_validate({"opacity": None}).opacity == 0
        assert Item.model_validate({"opacity": "abc"}).opacity == 0
        assert Item.model_validate({}).opacity is None

    @pytest.mark.unit
    def test_export_flag(self):
        """Only a literal False disables export."""
        assert Item.model_validate({"export": False}).export is False
        assert Item.model_validate({"export": 0}).export is True
        assert Item.model_validate({"export": "no"}).export is True

    @pytest.mark.unit
    def test_unknown_fields_ignored(self):
        """Editor bookkeeping fields are ignored."""
        item = Item.model_validate({"id": "abc", "locked": True, "name": "Box"})
        assert item.name == "Box"

    @pytest.mark.unit
    def test_frozen(self):
        """Items are immutable."""
        item = Item(name="Box")
        with pytest.raises(Exception):
            item.name = "Other"


class TestLayout:
    """Tests for the Layout model."""

    @pytest.mark.unit
    def test_items_preserve_order(self):
        """Items keep their input order."""
        layout = Layout.from_raw({"items": [{"name": "a"}, {"name": "b"}]})
        assert [item.name for item in layout.items] == ["a", "b"]

    @pytest.mark.unit
    @pytest.mark.parametrize("items", ["not-an-array", None, 5, {"name": "a"}])
    def test_non_sequence_items(self, items):
        """Non-sequence items degrade to an empty list."""
        assert Layout.from_raw({"items": items}).items == ()

    @pytest.mark.unit
    def test_missing_items(self):
        """Missing items key yields no items."""
        assert Layout.from_raw({}).items == ()

    @pytest.mark.unit
    def test_non_mapping_entries_become_defaults(self):
        """Entries that are not objects become default items."""
        layout = Layout.from_raw({"items": [None, 3, "x", {"name": "ok"}]})
        assert len(layout.items) == 4
        assert layout.items[0] == Item()
        assert layout.items[3].name == "ok"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [None, "layout", 42, ["items"]])
    def test_non_mapping_layout(self, raw):
        """Non-mapping input yields an empty layout."""
        assert Layout.from_raw(raw) == Layout()

    @pytest.mark.unit
    def test_from_raw_returns_same_model(self):
        """An existing Layout is returned as is."""
        layout = Layout(items=(Item(name="a"),))
        assert Layout.from_raw(layout) is layout

    @pytest.mark.unit
    def test_canvas_size(self):
        """Canvas size is parsed when present and dropped when malformed."""
        layout = Layout.from_raw({"canvasSize": {"w": "1280", "h": 720}})
        assert layout.canvas_size == CanvasSize(w=1280, h=720)
        assert Layout.from_raw({"canvasSize": "big"}).canvas_size is None

    @pytest.mark.unit
    def test_input_not_mutated(self):
        """Building a layout leaves the caller's data untouched."""
        raw = {"items": [{"name": "my name!!", "x": "abc"}]}
        Layout.from_raw(raw)
        assert raw == {"items": [{"name": "my name!!", "x": "abc"}]}
