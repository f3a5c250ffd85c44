"""Shared helpers for Block Blast."""

from .logger import configure_logging, get_logger, set_debugging

__all__ = ["configure_logging", "get_logger", "set_debugging"]
