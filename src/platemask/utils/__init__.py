"""Utility functions for platemask.

This module provides logging setup and export statistics tracking.
"""

from platemask.utils.logging import (
    ExportLogger,
    ExportStats,
    configure_logging,
)

__all__ = [
    "ExportLogger",
    "ExportStats",
    "configure_logging",
]
