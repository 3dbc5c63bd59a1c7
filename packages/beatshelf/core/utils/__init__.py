"""Shared utilities for beatshelf."""

from beatshelf.core.utils.json import read_json
from beatshelf.core.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "read_json",
]
