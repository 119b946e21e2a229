"""Shared utilities for runnercache."""

from runnercache.core.utils.formatting import format_size
from runnercache.core.utils.logging import StructuredJSONFormatter, configure_logging

__all__ = [
    "configure_logging",
    "format_size",
    "StructuredJSONFormatter",
]
