"""
Selection state and the reducers that change it.

``SelectionState`` is frozen: every reducer takes the current state plus the
full record set and returns a new state. The record set is needed because the
current page must stay inside ``[1, page_count]`` of the *filtered* list after
any change to the filters or the page size.
"""

from __future__ import annotations

from typing import FrozenSet, Sequence

from pydantic import BaseModel, Field, field_validator

from pokedex.domain.models import PAGE_SIZE_CHOICES, Record
from pokedex.pipeline.filters import filter_records
from pokedex.pipeline.pagination import clamp_page, page_count


def _check_page_size(value: int) -> int:
    if value not in PAGE_SIZE_CHOICES:
        choices = ", ".join(str(size) for size in PAGE_SIZE_CHOICES)
        raise ValueError(f"page size must be one of {choices}, got {value}")
    return value


class SelectionState(BaseModel):
    """
    Search text, active category toggles and pagination position.
    """

    search_text: str = ""
    selected_categories: FrozenSet[str] = frozenset()
    current_page: int = Field(1, ge=1)
    page_size: int = PAGE_SIZE_CHOICES[0]

    model_config = {"frozen": True}

    @field_validator("page_size")
    @classmethod
    def _page_size_is_offered(cls, value: int) -> int:
        return _check_page_size(value)


def filtered_count(state: SelectionState, records: Sequence[Record]) -> int:
    return len(filter_records(records, state.search_text, state.selected_categories))


def _with_page(state: SelectionState, records: Sequence[Record], page: int) -> SelectionState:
    pages = page_count(filtered_count(state, records), state.page_size)
    return state.model_copy(update={"current_page": clamp_page(page, pages)})


def set_search_text(
    state: SelectionState, records: Sequence[Record], text: str
) -> SelectionState:
    updated = state.model_copy(update={"search_text": text})
    return _with_page(updated, records, updated.current_page)


def toggle_category(
    state: SelectionState, records: Sequence[Record], category: str
) -> SelectionState:
    """Add ``category`` if absent, remove it if present."""
    updated = state.model_copy(
        update={"selected_categories": state.selected_categories ^ {category}}
    )
    return _with_page(updated, records, updated.current_page)


def clear_filters(state: SelectionState, records: Sequence[Record]) -> SelectionState:
    updated = state.model_copy(update={"search_text": "", "selected_categories": frozenset()})
    return _with_page(updated, records, updated.current_page)


def set_page(state: SelectionState, records: Sequence[Record], page: int) -> SelectionState:
    return _with_page(state, records, page)


def next_page(state: SelectionState, records: Sequence[Record]) -> SelectionState:
    return _with_page(state, records, state.current_page + 1)


def previous_page(state: SelectionState, records: Sequence[Record]) -> SelectionState:
    return _with_page(state, records, state.current_page - 1)


def set_page_size(
    state: SelectionState, records: Sequence[Record], size: int
) -> SelectionState:
    """
    Switch to a different page size and keep the current page valid.

    Raises
    ------
    ValueError
        If ``size`` is not one of ``PAGE_SIZE_CHOICES``.
    """
    updated = state.model_copy(update={"page_size": _check_page_size(size)})
    return _with_page(updated, records, updated.current_page)


__all__ = [
    "SelectionState",
    "clear_filters",
    "filtered_count",
    "next_page",
    "previous_page",
    "set_page",
    "set_page_size",
    "set_search_text",
    "toggle_category",
]
