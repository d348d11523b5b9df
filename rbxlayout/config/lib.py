"""Centralized environment configuration management for rbxlayout.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from rbxlayout.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.RBXLAYOUT_LOG_LEVEL)  # Returns str
    >>> unique = get_environment(EnvVar.RBXLAYOUT_UNIQUE_NAMES)  # Returns bool
    >>>
    >>> # Override at runtime
    >>> unique = get_environment(EnvVar.RBXLAYOUT_UNIQUE_NAMES, override=True)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "RBXLAYOUT_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by rbxlayout.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log verbosity
        - export: Exporter behaviour switches and output location
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    RBXLAYOUT_LOG_LEVEL = EnvConfig(
        name="RBXLAYOUT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Export Options (both off reproduce the plain exporter output)
    # -------------------------------------------------------------------------
    RBXLAYOUT_UNIQUE_NAMES = EnvConfig(
        name="RBXLAYOUT_UNIQUE_NAMES",
        default=False,
        var_type=bool,
        description="Suffix colliding identifiers with _2, _3, ...",
        category="export",
    )
    RBXLAYOUT_SAFE_TEXT = EnvConfig(
        name="RBXLAYOUT_SAFE_TEXT",
        default=False,
        var_type=bool,
        description="Pick a long-bracket level that cannot be closed by the text",
        category="export",
    )
    RBXLAYOUT_OUTPUT_DIR = EnvConfig(
        name="RBXLAYOUT_OUTPUT_DIR",
        default=None,
        var_type=Path,
        description="Directory for exported scripts when no -o is given",
        category="export",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no, on/off (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes", "on"):
        return True
    if normalized in ("false", "0", "no", "off"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value) if value.strip() else default

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, bool, or Path).

    Example:
        >>> get_environment(EnvVar.RBXLAYOUT_SAFE_TEXT)
        False
        >>> get_environment(EnvVar.RBXLAYOUT_SAFE_TEXT, override=True)
        True
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_export_defaults(
    unique_names: bool | None = None,
    safe_text: bool | None = None,
) -> dict[str, bool]:
    """Resolve the exporter switches from overrides and the environment.

    Returns:
        Dict with ``unique_names`` and ``safe_text`` keys, ready to be
        passed as keyword arguments to ``ExportOptions``.
    """
    return {
        "unique_names": get_environment(
            EnvVar.RBXLAYOUT_UNIQUE_NAMES, override=unique_names
        ),
        "safe_text": get_environment(EnvVar.RBXLAYOUT_SAFE_TEXT, override=safe_text),
    }


def get_output_dir(override: Path | str | None = None) -> Path | None:
    """Get the default output directory for exported scripts."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.RBXLAYOUT_OUTPUT_DIR)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, export).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_export_defaults",
    "get_output_dir",
    # Introspection
    "list_environment_variables",
]
