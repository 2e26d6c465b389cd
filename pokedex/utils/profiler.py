"""
Wall-clock timing for the initial record load.

Usage:
    from pokedex.utils.profiler import timed_block

    with timed_block("initial-load") as stats:
        records = fetcher.fetch()
    stats.records = len(records)

    print(stats.duration_seconds)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Generator, Optional


@dataclass
class LoadStats:
    """
    Container for timing measurements of one load.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    records: Optional[int] = field(default=None)

    @property
    def records_per_sec(self) -> float:
        if not self.records or self.duration_seconds <= 0:
            return 0.0
        return self.records / self.duration_seconds


@contextlib.contextmanager
def timed_block(label: str) -> Generator[LoadStats, None, None]:
    """
    Time a block of code with ``perf_counter``.

    The stats object is filled in even when the block raises, so callers can
    still report how long a failed load took.
    """
    stats = LoadStats(label=label)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts


__all__ = ["LoadStats", "timed_block"]
