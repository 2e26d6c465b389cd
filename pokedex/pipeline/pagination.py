"""
Client-side pagination of a filtered record list.
"""

from __future__ import annotations

import math
from typing import Sequence

from pokedex.domain.models import Page, Record


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items; 0 when there are none."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return math.ceil(total / page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def paginate(records: Sequence[Record], page: int, page_size: int) -> Page:
    """
    Slice ``records`` into the window for ``page``.

    The requested page is clamped into ``[1, max(page_count, 1)]`` first, so
    asking for a page past the end returns the last one.
    """
    pages = page_count(len(records), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return Page(
        window=tuple(records[start : start + page_size]),
        page_count=pages,
        page=current,
    )


__all__ = ["clamp_page", "page_count", "paginate"]
