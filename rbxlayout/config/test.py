"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_export_defaults,
    get_output_dir,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("RBXLAYOUT_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.RBXLAYOUT_LOG_LEVEL) == "INFO"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("RBXLAYOUT_SAFE_TEXT", "false")
        assert get_environment(EnvVar.RBXLAYOUT_SAFE_TEXT, override=True) is True

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("RBXLAYOUT_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.RBXLAYOUT_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "on", "TRUE", "Yes"):
            monkeypatch.setenv("RBXLAYOUT_UNIQUE_NAMES", value)
            assert get_environment(EnvVar.RBXLAYOUT_UNIQUE_NAMES) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "off", "FALSE", "No"):
            monkeypatch.setenv("RBXLAYOUT_UNIQUE_NAMES", value)
            assert get_environment(EnvVar.RBXLAYOUT_UNIQUE_NAMES) is False

    @pytest.mark.unit
    def test_invalid_bool_returns_default(self, monkeypatch):
        """Unrecognized boolean falls back to the default."""
        monkeypatch.setenv("RBXLAYOUT_UNIQUE_NAMES", "maybe")
        assert get_environment(EnvVar.RBXLAYOUT_UNIQUE_NAMES) is False

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables convert to Path objects."""
        monkeypatch.setenv("RBXLAYOUT_OUTPUT_DIR", str(tmp_path))
        result = get_environment(EnvVar.RBXLAYOUT_OUTPUT_DIR)
        assert isinstance(result, Path)
        assert result == tmp_path

    @pytest.mark.unit
    def test_blank_path_returns_default(self, monkeypatch):
        """Whitespace-only path is treated as unset."""
        monkeypatch.setenv("RBXLAYOUT_OUTPUT_DIR", "  ")
        assert get_environment(EnvVar.RBXLAYOUT_OUTPUT_DIR) is None


# =============================================================================
# Tests for metadata and convenience helpers
# =============================================================================


class TestEnvironmentInfo:
    """Tests for EnvConfig metadata access."""

    @pytest.mark.unit
    def test_info_is_env_config(self):
        """get_environment_info returns the EnvConfig payload."""
        info = get_environment_info(EnvVar.RBXLAYOUT_SAFE_TEXT)
        assert isinstance(info, EnvConfig)
        assert info.name == "RBXLAYOUT_SAFE_TEXT"
        assert info.var_type is bool
        assert info.category == "export"

    @pytest.mark.unit
    def test_enum_names_match_config_names(self):
        """Every member is registered under its own variable name."""
        for var in EnvVar:
            assert var.name == var.value.name

    @pytest.mark.unit
    def test_types_have_converters(self):
        """Every variable uses a type the conversion layer understands."""
        assert {var.value.var_type for var in EnvVar} <= {str, bool, Path}

    @pytest.mark.unit
    def test_list_all(self):
        """Listing without a category returns every variable."""
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter only returns matching variables."""
        export_vars = list_environment_variables("export")
        assert EnvVar.RBXLAYOUT_UNIQUE_NAMES in export_vars
        assert EnvVar.RBXLAYOUT_LOG_LEVEL not in export_vars
        assert list_environment_variables("nope") == []


class TestExportDefaults:
    """Tests for exporter switch resolution."""

    @pytest.mark.unit
    def test_defaults_are_off(self, monkeypatch):
        """Both switches default to the plain exporter behaviour."""
        monkeypatch.delenv("RBXLAYOUT_UNIQUE_NAMES", raising=False)
        monkeypatch.delenv("RBXLAYOUT_SAFE_TEXT", raising=False)
        assert get_export_defaults() == {"unique_names": False, "safe_text": False}

    @pytest.mark.unit
    def test_environment_enables_switch(self, monkeypatch):
        """Environment values flow into the defaults."""
        monkeypatch.setenv("RBXLAYOUT_SAFE_TEXT", "1")
        monkeypatch.delenv("RBXLAYOUT_UNIQUE_NAMES", raising=False)
        assert get_export_defaults()["safe_text"] is True

    @pytest.mark.unit
    def test_override_wins(self, monkeypatch):
        """Explicit arguments win over the environment."""
        monkeypatch.setenv("RBXLAYOUT_UNIQUE_NAMES", "true")
        assert get_export_defaults(unique_names=False)["unique_names"] is False

    @pytest.mark.unit
    def test_output_dir_override(self, monkeypatch, tmp_path):
        """Explicit output directory wins over the environment."""
        monkeypatch.setenv("RBXLAYOUT_OUTPUT_DIR", "/elsewhere")
        assert get_output_dir(str(tmp_path)) == tmp_path
