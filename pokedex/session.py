"""
Browser session: the loaded record set plus the current selection.

Usage (example from the CLI):
    from pokedex.session import BrowserSession

    session = BrowserSession()
    session.load()
    session.dispatch("search", "char")
    session.dispatch("toggle", "fire")
    view = session.view()

The record set is populated exactly once. Everything after that is a pure
derivation: reducers produce a new ``SelectionState`` and ``view()`` re-runs
the filter and the paginator against it.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pokedex.domain.models import PageView, Record
from pokedex.errors import FetchError
from pokedex.fetcher import RecordFetcher
from pokedex.pipeline.filters import filter_records
from pokedex.pipeline.pagination import paginate
from pokedex.state import (
    SelectionState,
    clear_filters,
    next_page,
    previous_page,
    set_page,
    set_page_size,
    set_search_text,
    toggle_category,
)
from pokedex.utils.logging import get_logger
from pokedex.utils.profiler import LoadStats, timed_block

log = get_logger(__name__)

Reducer = Callable[..., SelectionState]


def _action_registry() -> Dict[str, Reducer]:
    """Registry of user actions and the reducer each one applies."""
    return {
        "search": set_search_text,
        "toggle": toggle_category,
        "clear": clear_filters,
        "page": set_page,
        "next": next_page,
        "prev": previous_page,
        "size": set_page_size,
    }


def available_actions() -> List[str]:
    """List available action names."""
    return sorted(_action_registry().keys())


def _resolve_action(name: str) -> Reducer:
    actions = _action_registry()
    if name not in actions:
        raise ValueError(f"Unknown action '{name}'. Available: {', '.join(sorted(actions))}")
    return actions[name]


class BrowserSession:
    """
    Owns the record set and the selection state for one browsing session.

    Parameters
    ----------
    fetcher : RecordFetcher | None
        Loader for the record set. Defaults to a fetcher built from settings.
    state : SelectionState | None
        Initial selection. Defaults to an empty selection using the configured
        page size.
    limit : int | None
        Batch size of the initial load. Defaults to ``settings.batch_limit``.
    """

    def __init__(
        self,
        fetcher: Optional[RecordFetcher] = None,
        state: Optional[SelectionState] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.fetcher = fetcher or RecordFetcher()
        self.limit = limit or self.fetcher.settings.batch_limit
        self.state = state or SelectionState(page_size=self.fetcher.settings.default_page_size)
        self._records: Tuple[Record, ...] = ()
        self._load_attempted = False
        self._loaded = False
        self.load_error: Optional[FetchError] = None
        self.load_stats: Optional[LoadStats] = None

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _skip_reload(self) -> bool:
        if self._load_attempted:
            log.warning("Initial load already attempted; ignoring repeated load")
            return True
        self._load_attempted = True
        return False

    def _finish_load(
        self,
        records: Sequence[Record],
        error: Optional[FetchError],
        stats: LoadStats,
    ) -> bool:
        self.load_stats = stats
        if error is not None:
            self.load_error = error
            log.error(
                f"[LOAD FAILED] {error}",
                exc_info=error,
                extra={"url": error.url, "duration": round(stats.duration_seconds, 3)},
            )
            return False

        self._loaded = True
        self._records = tuple(records)
        stats.records = len(self._records)
        # Re-clamp in case a preset selection points past the loaded data.
        self.state = set_page(self.state, self._records, self.state.current_page)
        log.info(
            f"[LOAD COMPLETE] {len(self._records)} records",
            extra={
                "records": len(self._records),
                "duration": round(stats.duration_seconds, 3),
            },
        )
        return True

    def load(self) -> bool:
        """
        Populate the record set from the fetcher, once.

        A ``FetchError`` does not propagate: the session keeps an empty record
        set and exposes the failure as ``load_error``. Returns whether the
        record set is available.
        """
        if self._skip_reload():
            return self.loaded

        error: Optional[FetchError] = None
        records: List[Record] = []
        with timed_block("initial-load") as stats:
            try:
                records = self.fetcher.fetch(self.limit)
            except FetchError as exc:
                error = exc
        return self._finish_load(records, error, stats)

    async def load_async(self) -> bool:
        """Same as ``load`` for callers already inside an event loop."""
        if self._skip_reload():
            return self.loaded

        error: Optional[FetchError] = None
        records: List[Record] = []
        with timed_block("initial-load") as stats:
            try:
                records = await self.fetcher.fetch_records(self.limit)
            except FetchError as exc:
                error = exc
        return self._finish_load(records, error, stats)

    def dispatch(self, action: str, *args: Any) -> SelectionState:
        """
        Apply the named action to the current state and keep the result.

        Raises
        ------
        ValueError
            For an unknown action or an invalid argument (e.g. page size).
        """
        reducer = _resolve_action(action)
        self.state = reducer(self.state, self._records, *args)
        log.debug(
            f"[ACTION] {action}",
            extra={
                "action": action,
                "action_args": list(args),
                "page": self.state.current_page,
                "page_size": self.state.page_size,
            },
        )
        return self.state

    def filtered(self) -> List[Record]:
        return filter_records(
            self._records, self.state.search_text, self.state.selected_categories
        )

    def view(self) -> PageView:
        """Derive the current page window from the record set and selection."""
        matching = self.filtered()
        page = paginate(matching, self.state.current_page, self.state.page_size)
        return PageView(
            items=page.window,
            current_page=page.page,
            page_count=page.page_count,
            page_size=self.state.page_size,
            filtered_count=len(matching),
            total_count=len(self._records),
        )


__all__ = ["BrowserSession", "available_actions"]
