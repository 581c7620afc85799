"""
Timing utilities for the Album Catalog.

Provides a context manager that measures wall-clock time of a block so the
dispatcher and request handlers can log how long a query took.

Usage example:
    from album_catalog.utils.profiler import timed_block

    with timed_block("by_artist") as stats:
        store.find_by_artist("John Coltrane")

    print(stats.duration_ms)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Generator


@dataclass
class TimingStats:
    """
    Container for timing measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return round(self.duration_seconds * 1000, 2)


@contextlib.contextmanager
def timed_block(label: str) -> Generator[TimingStats, None, None]:
    """
    Measure the wall-clock duration (perf_counter) of a block.

    The stats are filled in even when the block raises.
    """
    stats = TimingStats(label=label)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts


__all__ = ["TimingStats", "timed_block"]
