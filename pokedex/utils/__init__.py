"""
Utilities package for the Pokedex browser.

Exports shared helpers for logging and timing.
Keep this package lightweight and free of domain-specific logic.
"""

from pokedex.utils.logging import configure_logging, get_logger
from pokedex.utils.profiler import LoadStats, timed_block

__all__ = [
    "configure_logging",
    "get_logger",
    "LoadStats",
    "timed_block",
]
