"""Tests for the export CLI."""

import json
import logging

import pytest

from rbxlayout.exporter import PREAMBLE, export_layout
from rbxlayout.exporter.cli import DEFAULT_FILENAME, handle_export_command


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep exporter switches from the host environment out of the tests."""
    for name in (
        "RBXLAYOUT_UNIQUE_NAMES",
        "RBXLAYOUT_SAFE_TEXT",
        "RBXLAYOUT_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def layout_file(tmp_path, sample_layout):
    """Write the sample layout to a JSON file."""
    path = tmp_path / "layout.json"
    path.write_text(json.dumps(sample_layout), encoding="utf-8")
    return path


class TestExportCommand:
    """Tests for `python . export`."""

    @pytest.mark.integration
    def test_stdout(self, layout_file, sample_layout, capsys):
        """Without -o the script goes to stdout."""
        assert handle_export_command([str(layout_file)]) == 0
        out = capsys.readouterr().out
        assert out == export_layout(sample_layout) + "\n"

    @pytest.mark.integration
    def test_output_file(self, layout_file, sample_layout, tmp_path):
        """-o with a file path writes exactly the script."""
        target = tmp_path / "out" / "menu.lua"
        assert handle_export_command([str(layout_file), "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == export_layout(sample_layout)

    @pytest.mark.integration
    def test_output_directory(self, layout_file, tmp_path):
        """-o with a directory uses the default file name."""
        out_dir = tmp_path / "scripts"
        out_dir.mkdir()
        assert handle_export_command([str(layout_file), "-o", str(out_dir)]) == 0
        assert (out_dir / DEFAULT_FILENAME).exists()

    @pytest.mark.integration
    def test_output_dir_from_environment(self, layout_file, tmp_path, monkeypatch):
        """RBXLAYOUT_OUTPUT_DIR is used when -o is absent."""
        monkeypatch.setenv("RBXLAYOUT_OUTPUT_DIR", str(tmp_path / "env"))
        assert handle_export_command([str(layout_file)]) == 0
        assert (tmp_path / "env" / DEFAULT_FILENAME).exists()

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        """Unreadable layout exits with 1."""
        assert handle_export_command([str(tmp_path / "missing.json")]) == 1

    @pytest.mark.integration
    def test_invalid_json(self, tmp_path):
        """Malformed JSON exits with 1."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert handle_export_command([str(path)]) == 1

    @pytest.mark.integration
    def test_odd_json_shape(self, tmp_path, capsys):
        """Valid JSON of the wrong shape still exports the preamble."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert handle_export_command([str(path)]) == 0
        assert capsys.readouterr().out == "\n".join(PREAMBLE) + "\n"

    @pytest.mark.integration
    def test_warnings_logged(self, tmp_path, caplog):
        """Export warnings are logged."""
        path = tmp_path / "dup.json"
        path.write_text(
            json.dumps({"items": [{"name": "Box"}, {"name": "Box"}]}), encoding="utf-8"
        )
        with caplog.at_level(logging.WARNING):
            assert handle_export_command([str(path)]) == 0
        assert "duplicate_name" in caplog.text

    @pytest.mark.integration
    def test_strict_fails_on_warnings(self, tmp_path):
        """--strict turns warnings into a failing exit status."""
        path = tmp_path / "text.json"
        path.write_text(
            json.dumps({"items": [{"text": "a]]b"}]}), encoding="utf-8"
        )
        assert handle_export_command([str(path), "--strict"]) == 1
        assert handle_export_command([str(path), "--strict", "--safe-text"]) == 0

    @pytest.mark.integration
    def test_unique_names_flag(self, tmp_path, capsys):
        """--unique-names renames collisions."""
        path = tmp_path / "dup.json"
        path.write_text(
            json.dumps({"items": [{"name": "Box"}, {"name": "Box"}]}), encoding="utf-8"
        )
        assert handle_export_command([str(path), "--unique-names"]) == 0
        assert 'local Box_2 = Instance.new("Frame")' in capsys.readouterr().out

    @pytest.mark.integration
    def test_safe_text_from_environment(self, tmp_path, capsys, monkeypatch):
        """Environment switches apply when flags are absent."""
        monkeypatch.setenv("RBXLAYOUT_SAFE_TEXT", "true")
        path = tmp_path / "text.json"
        path.write_text(json.dumps({"items": [{"text": "a]]b"}]}), encoding="utf-8")
        assert handle_export_command([str(path)]) == 0
        assert "Item_0.Text = [=[a]]b]=]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_no_arguments_prints_help(self, capsys):
        """No arguments prints usage and exits with 1."""
        assert handle_export_command([]) == 1
        assert "usage" in capsys.readouterr().out
