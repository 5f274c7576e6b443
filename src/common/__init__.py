"""Shared utilities for buildergen packages."""

from .config import Settings
from .formatter import CommandFormatter, Formatter, HttpFormatter, build_formatter
from .logging import configure_logging

__all__ = [
    "Settings",
    "configure_logging",
    "Formatter",
    "CommandFormatter",
    "HttpFormatter",
    "build_formatter",
]
