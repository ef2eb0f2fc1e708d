"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READER_AP,
    DEFAULT_SAFETY_MARGIN,
    DEFAULT_WRITER_AP,
    IMPORT_TRUSTED_BLOCK_METHOD,
    RETRIEVE_TRUSTED_BLOCK_METHOD,
)
from .logging import configure_logging

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_READER_AP",
    "DEFAULT_SAFETY_MARGIN",
    "DEFAULT_WRITER_AP",
    "IMPORT_TRUSTED_BLOCK_METHOD",
    "RETRIEVE_TRUSTED_BLOCK_METHOD",
    "configure_logging",
]
