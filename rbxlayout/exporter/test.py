"""Unit tests for the Luau exporter."""

import pytest

from rbxlayout.exporter import (
    PREAMBLE,
    ExportOptions,
    WarningKind,
    build_item_lines,
    class_name,
    export_layout,
    export_with_warnings,
    format_number,
    long_string,
    sanitize_name,
)
from rbxlayout.layout import Item, Layout

PREAMBLE_TEXT = "\n".join(PREAMBLE)

OPTIONAL_PROPERTIES = (
    ".BackgroundColor3 =",
    ".BackgroundTransparency =",
    ".Text =",
    ".TextColor3 =",
    ".TextSize =",
    ".Image =",
)


def _optional_lines(script: str) -> list[str]:
    return [
        line
        for line in script.split("\n")
        if any(prop in line for prop in OPTIONAL_PROPERTIES)
    ]


class TestSanitizeName:
    """Tests for identifier sanitization."""

    @pytest.mark.unit
    def test_replaces_disallowed_chars(self):
        """Each disallowed character becomes one underscore."""
        assert sanitize_name("my name!!", "Frame", 0) == "my_name__"

    @pytest.mark.unit
    def test_keeps_valid_identifier(self):
        """Valid identifiers are untouched."""
        assert sanitize_name("Title_1", "TextLabel", 4) == "Title_1"

    @pytest.mark.unit
    def test_fallback_uses_type_and_index(self):
        """Absent name falls back to <type>_<index>."""
        assert sanitize_name(None, "TextLabel", 3) == "TextLabel_3"
        assert sanitize_name("", "ImageLabel", 1) == "ImageLabel_1"

    @pytest.mark.unit
    def test_fallback_without_type(self):
        """Absent type in the fallback becomes Item."""
        assert sanitize_name(None, None, 0) == "Item_0"

    @pytest.mark.unit
    def test_symbol_only_name_falls_back(self):
        """A name made only of symbols falls back to Item_<index>."""
        assert sanitize_name("###", "Frame", 2) == "Item_2"
        assert sanitize_name("_", "Frame", 7) == "Item_7"

    @pytest.mark.unit
    def test_underscores_kept_next_to_letters(self):
        """Leading and trailing underscores survive when letters remain."""
        assert sanitize_name("__init__", "Frame", 0) == "__init__"

    @pytest.mark.unit
    def test_fallback_type_is_sanitized(self):
        """The derived name is sanitized too."""
        assert sanitize_name(None, "my type", 5) == "my_type_5"

    @pytest.mark.unit
    def test_non_ascii_replaced(self):
        """Non-ASCII letters are not valid identifier characters."""
        assert sanitize_name("café", "Frame", 0) == "caf_"

    @pytest.mark.unit
    def test_digit_prefix_and_keywords_pass_through(self):
        """Only characters are replaced; leading digits and keywords remain."""
        assert sanitize_name("1abc", "Frame", 0) == "1abc"
        assert sanitize_name("end", "Frame", 0) == "end"


class TestFormatNumber:
    """Tests for numeric literal rendering."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (12, "12"),
            (12.0, "12"),
            (-0.0, "0"),
            (12.5, "12.5"),
            (0.7, "0.7"),
            ("abc", "0"),
            (None, "0"),
            ("40", "40"),
        ],
    )
    def test_rendering(self, value, expected):
        """Numbers render as plain Luau literals."""
        assert format_number(value) == expected


class TestClassName:
    """Tests for class resolution."""

    @pytest.mark.unit
    def test_default_frame(self):
        """Absent type declares a Frame."""
        assert class_name(None) == "Frame"

    @pytest.mark.unit
    @pytest.mark.parametrize("type_name", ["TextLabel", "ImageButton", "ScrollingFrame"])
    def test_class_passthrough(self, type_name):
        """Class names pass through."""
        assert class_name(type_name) == type_name

    @pytest.mark.unit
    @pytest.mark.parametrize("type_name", ["Circle", "Line"])
    def test_shapes_are_frames(self, type_name):
        """Editor shapes are declared as Frames."""
        assert class_name(type_name) == "Frame"

    @pytest.mark.unit
    @pytest.mark.parametrize("type_name", ['Frame")', "Text Label", "9Patch"])
    def test_invalid_class_names(self, type_name):
        """Types that are not identifiers fall back to Frame."""
        assert class_name(type_name) == "Frame"


class TestLongString:
    """Tests for Luau long string quoting."""

    @pytest.mark.unit
    def test_plain_form_is_unescaped(self):
        """Default quoting wraps text verbatim."""
        assert long_string('say "hi"\nbye') == '[[say "hi"\nbye]]'
        assert long_string("a]]b") == "[[a]]b]]"

    @pytest.mark.unit
    def test_safe_without_terminator(self):
        """Safe quoting uses level 0 when possible."""
        assert long_string("hello", safe=True) == "[[hello]]"

    @pytest.mark.unit
    def test_safe_raises_level(self):
        """Safe quoting picks a level the text cannot close."""
        assert long_string("a]]b", safe=True) == "[=[a]]b]=]"
        assert long_string("a]]b]=]c", safe=True) == "[==[a]]b]=]c]==]"

    @pytest.mark.unit
    def test_safe_trailing_bracket(self):
        """Text ending in a bracket cannot merge with the terminator."""
        assert long_string("Press [A]", safe=True) == "[=[Press [A]]=]"
        assert long_string("a]]b]=", safe=True) == "[==[a]]b]=]==]"
        assert long_string("]", safe=True) == "[=[]]=]"

    @pytest.mark.unit
    def test_safe_keeps_leading_newline(self):
        """Safe quoting doubles a leading newline."""
        assert long_string("\nline", safe=True) == "[[\n\nline]]"


class TestBuildItemLines:
    """Tests for single item blocks."""

    @pytest.mark.unit
    def test_minimal_block(self):
        """Empty item yields declaration, geometry and parent only."""
        lines = build_item_lines(Item(), "Box")
        assert lines == [
            "",
            'local Box = Instance.new("Frame")',
            "Box.Position = UDim2.fromOffset(0, 0)",
            "Box.Size = UDim2.fromOffset(0, 0)",
            "Box.Parent = ScreenGui",
        ]

    @pytest.mark.unit
    def test_full_block_order(self):
        """Optional properties follow the fixed order."""
        item = Item.model_validate(
            {
                "type": "ImageButton",
                "x": 10,
                "y": 20,
                "w": 300,
                "h": 50,
                "imageId": "rbxassetid://123",
                "fontSize": 18,
                "textColor": "#FFFFFF",
                "text": "Play",
                "opacity": 0.25,
                "fill": "#1E1E1E",
            }
        )
        assert build_item_lines(item, "PlayButton") == [
            "",
            'local PlayButton = Instance.new("ImageButton")',
            "PlayButton.Position = UDim2.fromOffset(10, 20)",
            "PlayButton.Size = UDim2.fromOffset(300, 50)",
            'PlayButton.BackgroundColor3 = Color3.fromHex("#1E1E1E")',
            "PlayButton.BackgroundTransparency = 0.75",
            "PlayButton.Text = [[Play]]",
            'PlayButton.TextColor3 = Color3.fromHex("#FFFFFF")',
            "PlayButton.TextSize = 18",
            'PlayButton.Image = "rbxassetid://123"',
            "PlayButton.Parent = ScreenGui",
        ]

    @pytest.mark.unit
    def test_colors_pass_through(self):
        """Color strings are not validated."""
        item = Item(fill="not-a-color")
        assert 'Box.BackgroundColor3 = Color3.fromHex("not-a-color")' in (
            build_item_lines(item, "Box")
        )

    @pytest.mark.unit
    def test_circle_gets_corner(self):
        """Circles get a UICorner parented to the frame."""
        lines = build_item_lines(Item(type="Circle"), "Dot")
        assert lines[1] == 'local Dot = Instance.new("Frame")'
        assert lines[-4] == "Dot.Parent = ScreenGui"
        assert lines[-3] == 'local Dot_corner = Instance.new("UICorner")'
        assert lines[-2] == (
            "Dot_corner.CornerRadius = UDim.new(0, math.floor(math.min("
            "Dot.AbsoluteSize.X, Dot.AbsoluteSize.Y)/2))"
        )
        assert lines[-1] == "Dot_corner.Parent = Dot"

    @pytest.mark.unit
    def test_line_has_no_border(self):
        """Lines drop their border after parenting."""
        lines = build_item_lines(Item(type="Line"), "Rule")
        assert lines[-2:] == ["Rule.Parent = ScreenGui", "Rule.BorderSizePixel = 0"]

    @pytest.mark.unit
    def test_null_opacity_is_fully_transparent(self):
        """An explicit null opacity writes a transparency of 1."""
        lines = build_item_lines(Item.model_validate({"opacity": None}), "Glass")
        assert "Glass.BackgroundTransparency = 1" in lines
        assert not any(
            "BackgroundTransparency" in line
            for line in build_item_lines(Item.model_validate({}), "Box")
        )

    @pytest.mark.unit
    def test_safe_text_option(self):
        """Safe text quoting is applied through options."""
        lines = build_item_lines(
            Item(text="x]]y"), "Label", ExportOptions(safe_text=True)
        )
        assert "Label.Text = [=[x]]y]=]" in lines


class TestExportLayout:
    """Tests for the full export."""

    @pytest.mark.unit
    def test_preamble(self):
        """Output starts with the fixed four-line preamble."""
        lines = export_layout({"items": []}).split("\n")
        assert lines == [
            'local ScreenGui = Instance.new("ScreenGui")',
            'ScreenGui.Name = "GeneratedUI"',
            "ScreenGui.ResetOnSpawn = false",
            'ScreenGui.Parent = game.Players.LocalPlayer:WaitForChild("PlayerGui")',
        ]

    @pytest.mark.unit
    def test_default_fallback(self):
        """An empty item uses Frame, Item_0, zero geometry and no extras."""
        script = export_layout({"items": [{}]})
        assert script == PREAMBLE_TEXT + "\n" + "\n".join(
            [
                "",
                'local Item_0 = Instance.new("Frame")',
                "Item_0.Position = UDim2.fromOffset(0, 0)",
                "Item_0.Size = UDim2.fromOffset(0, 0)",
                "Item_0.Parent = ScreenGui",
            ]
        )

    @pytest.mark.unit
    def test_no_trailing_newline(self):
        """Lines are joined without a trailing newline."""
        assert not export_layout({"items": [{}]}).endswith("\n")

    @pytest.mark.unit
    def test_deterministic(self, sample_layout):
        """Repeated exports are byte-identical."""
        assert export_layout(sample_layout) == export_layout(sample_layout)

    @pytest.mark.unit
    def test_order_preserved(self):
        """Blocks appear in input order."""
        names = ["Zeta", "Alpha", "Mid"]
        script = export_layout({"items": [{"name": name} for name in names]})
        declared = [
            line.split()[1] for line in script.split("\n") if line.startswith("local ")
        ]
        assert declared == ["ScreenGui", *names]

    @pytest.mark.unit
    def test_sanitized_name(self):
        """Declared names are sanitized."""
        script = export_layout({"items": [{"name": "my name!!"}]})
        assert 'local my_name__ = Instance.new("Frame")' in script

    @pytest.mark.unit
    def test_symbol_only_name_at_index(self):
        """A symbol-only name falls back to the item index."""
        items = [{}, {}, {"name": "###", "type": "Frame"}]
        script = export_layout({"items": items})
        assert 'local Item_2 = Instance.new("Frame")' in script
        assert "___" not in script

    @pytest.mark.unit
    def test_empty_name_at_index(self):
        """Empty name falls back to the type and index."""
        items = [{}, {}, {"name": "", "type": "TextLabel"}]
        assert 'local TextLabel_2 = Instance.new("TextLabel")' in export_layout(
            {"items": items}
        )

    @pytest.mark.unit
    def test_text_only_item(self):
        """Only the text property is written for a text-only item."""
        script = export_layout({"items": [{"text": "Hello"}]})
        assert _optional_lines(script) == ["Item_0.Text = [[Hello]]"]

    @pytest.mark.unit
    @pytest.mark.parametrize("items", ["not-an-array", None, 42, {"a": 1}])
    def test_non_array_items(self, items):
        """Non-array items produce only the preamble."""
        assert export_layout({"items": items}) == PREAMBLE_TEXT

    @pytest.mark.unit
    @pytest.mark.parametrize("layout", [None, "layout", 7, []])
    def test_non_mapping_layout(self, layout):
        """Non-mapping layouts produce only the preamble."""
        assert export_layout(layout) == PREAMBLE_TEXT

    @pytest.mark.unit
    def test_numeric_coercion(self):
        """Non-numeric coordinates become 0."""
        script = export_layout({"items": [{"x": "abc", "y": 30, "w": "120"}]})
        assert "Item_0.Position = UDim2.fromOffset(0, 30)" in script
        assert "Item_0.Size = UDim2.fromOffset(120, 0)" in script

    @pytest.mark.unit
    def test_non_object_item(self):
        """Non-object items fall through to defaults."""
        script = export_layout({"items": [None, 5]})
        assert 'local Item_0 = Instance.new("Frame")' in script
        assert 'local Item_1 = Instance.new("Frame")' in script

    @pytest.mark.unit
    def test_text_is_not_escaped(self):
        """Multi-line text with quotes goes into the long string as is."""
        script = export_layout({"items": [{"name": "L", "text": 'He said "hi"\nok'}]})
        assert 'L.Text = [[He said "hi"\nok]]' in script

    @pytest.mark.unit
    def test_duplicate_names_kept(self):
        """Duplicate identifiers are emitted verbatim by default."""
        script = export_layout({"items": [{"name": "Box"}, {"name": "Box"}]})
        assert script.count('local Box = Instance.new("Frame")') == 2

    @pytest.mark.unit
    def test_canvas_size_is_ignored(self):
        """Canvas size does not change the output."""
        items = [{"name": "A", "w": 10, "h": 10}]
        assert export_layout(
            {"canvasSize": {"w": 1280, "h": 720}, "items": items}
        ) == export_layout({"items": items})

    @pytest.mark.unit
    def test_accepts_layout_model(self, sample_layout):
        """Raw mappings and models export identically."""
        model = Layout.from_raw(sample_layout)
        assert export_layout(model) == export_layout(sample_layout)

    @pytest.mark.unit
    def test_input_not_mutated(self, sample_layout):
        """The caller's layout is left untouched."""
        import copy

        snapshot = copy.deepcopy(sample_layout)
        export_layout(sample_layout, ExportOptions(unique_names=True, safe_text=True))
        assert sample_layout == snapshot

    @pytest.mark.unit
    def test_export_false_dropped_before_indexing(self):
        """Hidden items are dropped and do not consume an index."""
        script = export_layout({"items": [{"export": False}, {}]})
        assert 'local Item_0 = Instance.new("Frame")' in script
        assert "Item_1" not in script

    @pytest.mark.unit
    def test_layout_helpers_consume_index(self):
        """Spacers and layout roles are skipped but keep their index."""
        items = [{"type": "Spacer"}, {"role": "layout"}, {}]
        script = export_layout({"items": items})
        assert "Spacer_0" not in script
        assert "Item_1" not in script
        assert 'local Item_2 = Instance.new("Frame")' in script

    @pytest.mark.unit
    def test_golden_layout(self, sample_layout):
        """Full layout matches the expected script."""
        expected = "\n".join(
            [
                *PREAMBLE,
                "",
                'local Background = Instance.new("Frame")',
                "Background.Position = UDim2.fromOffset(0, 0)",
                "Background.Size = UDim2.fromOffset(1280, 720)",
                'Background.BackgroundColor3 = Color3.fromHex("#101820")',
                "Background.Parent = ScreenGui",
                "",
                'local Title = Instance.new("TextLabel")',
                "Title.Position = UDim2.fromOffset(40, 32)",
                "Title.Size = UDim2.fromOffset(400, 48)",
                "Title.Text = [[Main Menu]]",
                'Title.TextColor3 = Color3.fromHex("#FFFFFF")',
                "Title.TextSize = 32",
                "Title.Parent = ScreenGui",
                "",
                'local Play_Button = Instance.new("TextButton")',
                "Play_Button.Position = UDim2.fromOffset(40, 120)",
                "Play_Button.Size = UDim2.fromOffset(240, 56)",
                'Play_Button.BackgroundColor3 = Color3.fromHex("#2ECC71")',
                "Play_Button.Text = [[Play]]",
                "Play_Button.Parent = ScreenGui",
                "",
                'local ImageLabel_3 = Instance.new("ImageLabel")',
                "ImageLabel_3.Position = UDim2.fromOffset(900, 40)",
                "ImageLabel_3.Size = UDim2.fromOffset(128, 128)",
                'ImageLabel_3.Image = "rbxassetid://1818"',
                "ImageLabel_3.Parent = ScreenGui",
            ]
        )
        assert export_layout(sample_layout) == expected


class TestUniqueNames:
    """Tests for the opt-in identifier deduplication."""

    @pytest.mark.unit
    def test_collisions_suffixed(self):
        """Later duplicates get numeric suffixes."""
        items = [{"name": "Box"}, {"name": "Box"}, {"name": "Box!"}]
        script = export_layout({"items": items}, ExportOptions(unique_names=True))
        assert 'local Box = Instance.new("Frame")' in script
        assert 'local Box_2 = Instance.new("Frame")' in script
        assert 'local Box__3 = Instance.new("Frame")' not in script
        assert 'local Box_ = Instance.new("Frame")' in script

    @pytest.mark.unit
    def test_suffix_skips_taken_names(self):
        """Generated names never reuse an identifier already declared."""
        items = [{"name": "A"}, {"name": "A_2"}, {"name": "A"}]
        script = export_layout({"items": items}, ExportOptions(unique_names=True))
        assert 'local A_3 = Instance.new("Frame")' in script
        assert "A_3.Parent = ScreenGui" in script

    @pytest.mark.unit
    def test_root_name_reserved(self):
        """An item named after the root object is renamed."""
        script = export_layout(
            {"items": [{"name": "ScreenGui"}]}, ExportOptions(unique_names=True)
        )
        assert 'local ScreenGui_2 = Instance.new("Frame")' in script
        assert "ScreenGui_2.Parent = ScreenGui" in script
        assert "ScreenGui.Parent = ScreenGui" not in script

    @pytest.mark.unit
    def test_corner_names_reserved(self):
        """A Circle's UICorner local takes part in collision checks."""
        options = ExportOptions(unique_names=True)
        script = export_layout(
            {"items": [{"type": "Circle", "name": "Dot"}, {"name": "Dot_corner"}]},
            options,
        )
        assert 'local Dot_corner = Instance.new("UICorner")' in script
        assert 'local Dot_corner_2 = Instance.new("Frame")' in script

        script = export_layout(
            {"items": [{"name": "Dot_corner"}, {"type": "Circle", "name": "Dot"}]},
            options,
        )
        assert 'local Dot_corner = Instance.new("Frame")' in script
        assert 'local Dot_2 = Instance.new("Frame")' in script
        assert 'local Dot_2_corner = Instance.new("UICorner")' in script

    @pytest.mark.unit
    def test_unique_input_unchanged(self, sample_layout):
        """Layouts without collisions export identically."""
        assert export_layout(
            sample_layout, ExportOptions(unique_names=True)
        ) == export_layout(sample_layout)


class TestExportWithWarnings:
    """Tests for export diagnostics."""

    @pytest.mark.unit
    def test_clean_layout(self, sample_layout):
        """A clean layout has no warnings."""
        result = export_with_warnings(sample_layout)
        assert not result.has_warnings
        assert result.item_count == 4
        assert result.script == export_layout(sample_layout)

    @pytest.mark.unit
    def test_duplicate_warning(self):
        """Each duplicate declaration is reported."""
        result = export_with_warnings({"items": [{"name": "Box"}, {"name": "Box"}]})
        kinds = [w.kind for w in result.warnings]
        assert kinds == [WarningKind.DUPLICATE_NAME, WarningKind.DUPLICATE_NAME]
        assert [w.item_index for w in result.warnings] == [0, 1]

    @pytest.mark.unit
    def test_duplicate_warning_when_renamed(self):
        """Renames are reported with the new identifier."""
        result = export_with_warnings(
            {"items": [{"name": "Box"}, {"name": "Box"}]},
            ExportOptions(unique_names=True),
        )
        assert len(result.warnings) == 1
        assert result.warnings[0].identifier == "Box_2"

    @pytest.mark.unit
    def test_unterminated_text_warning(self):
        """Text containing ]] is reported but not altered."""
        result = export_with_warnings({"items": [{"name": "L", "text": "a]]b"}]})
        assert [w.kind for w in result.warnings] == [WarningKind.UNTERMINATED_TEXT]
        assert "L.Text = [[a]]b]]" in result.script

    @pytest.mark.unit
    def test_trailing_bracket_warning(self):
        """Text ending in a bracket is reported as well."""
        result = export_with_warnings({"items": [{"name": "L", "text": "Press [A]"}]})
        assert [w.kind for w in result.warnings] == [WarningKind.UNTERMINATED_TEXT]
        assert "L.Text = [[Press [A]]]" in result.script

        result = export_with_warnings(
            {"items": [{"name": "L", "text": "Press [A]"}]},
            ExportOptions(safe_text=True),
        )
        assert not result.has_warnings
        assert "L.Text = [=[Press [A]]=]" in result.script

    @pytest.mark.unit
    def test_root_name_collision_warning(self):
        """Reusing the root object's name is reported but kept."""
        result = export_with_warnings({"items": [{"name": "ScreenGui"}]})
        assert [w.kind for w in result.warnings] == [WarningKind.DUPLICATE_NAME]
        assert result.warnings[0].identifier == "ScreenGui"
        assert 'local ScreenGui = Instance.new("Frame")' in result.script

    @pytest.mark.unit
    def test_corner_collision_warning(self):
        """A name clashing with a Circle's corner local is reported."""
        result = export_with_warnings(
            {"items": [{"type": "Circle", "name": "Dot"}, {"name": "Dot_corner"}]}
        )
        assert [w.item_index for w in result.warnings] == [0, 1]
        assert all(w.kind == WarningKind.DUPLICATE_NAME for w in result.warnings)

    @pytest.mark.unit
    def test_safe_text_silences_warning(self):
        """Safe quoting removes the text warning."""
        result = export_with_warnings(
            {"items": [{"text": "a]]b"}]}, ExportOptions(safe_text=True)
        )
        assert not result.has_warnings

    @pytest.mark.unit
    def test_skipped_item_warning(self):
        """Layout helpers are reported as skipped."""
        result = export_with_warnings({"items": [{"type": "Group"}, {}]})
        assert result.item_count == 1
        assert result.warnings[0].kind == WarningKind.SKIPPED_ITEM
        assert result.warnings[0].identifier == "Group_0"
