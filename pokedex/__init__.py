"""
Pokedex browser - fetch, filter and paginate creatures from PokeAPI.

This package loads a fixed-size batch of creature records once, then derives
every view from that in-memory set:

- Record fetching with one list request and concurrent detail requests
- Name substring and type filtering
- Client-side pagination
- A small set of reducers over an immutable selection state

A Typer CLI and a Rich renderer act as the presentation layer.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from pokedex.config import Settings, get_settings
from pokedex.domain.models import CATEGORY_CHOICES, PAGE_SIZE_CHOICES, PageView, Record, Stat
from pokedex.errors import DetailFetchError, FetchError, ListFetchError, PayloadError
from pokedex.fetcher import RecordFetcher
from pokedex.pipeline import filter_records, paginate
from pokedex.session import BrowserSession, available_actions
from pokedex.state import SelectionState
from pokedex.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "CATEGORY_CHOICES",
    "PAGE_SIZE_CHOICES",
    "PageView",
    "Record",
    "Stat",
    # Loading
    "RecordFetcher",
    "FetchError",
    "ListFetchError",
    "DetailFetchError",
    "PayloadError",
    # Pipeline and state
    "filter_records",
    "paginate",
    "SelectionState",
    "BrowserSession",
    "available_actions",
    # Logging
    "configure_logging",
    "get_logger",
]
