"""Utilities for docpager."""

from .geometry import Margins, Size
from .logger import configure_logging, get_logger

__all__ = ["Margins", "Size", "configure_logging", "get_logger"]
