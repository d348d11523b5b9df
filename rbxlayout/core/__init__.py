"""Core utilities shared across rbxlayout."""

from .log import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
