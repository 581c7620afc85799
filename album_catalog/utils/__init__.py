"""
Utilities package for the Album Catalog.

Exports shared helpers for logging, timing, and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from album_catalog.utils.logging import configure_logging, get_logger
from album_catalog.utils.profiler import TimingStats, timed_block

__all__ = [
    "configure_logging",
    "get_logger",
    "TimingStats",
    "timed_block",
]
