"""Centralized configuration management for rbxlayout.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from rbxlayout.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.RBXLAYOUT_LOG_LEVEL)  # Returns str: "INFO"
    >>> options = get_export_defaults(safe_text=True)
    >>>
    >>> for var in list_environment_variables("export"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: CLI log verbosity
    export: Exporter switches and output location
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_export_defaults,
    get_output_dir,
    # Introspection
    list_environment_variables,
)

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
