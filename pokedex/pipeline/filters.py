"""
Name and category filtering over the in-memory record set.

Both predicates are pure; ``filter_records`` keeps the relative order of the
input so pagination stays stable across re-filters.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, List

from pokedex.domain.models import Record


def matches_name(record: Record, search_text: str) -> bool:
    # Only the query is lower-cased; upstream names are already lower-case.
    return search_text.lower() in record.name


def matches_categories(record: Record, selected_categories: AbstractSet[str]) -> bool:
    """True when nothing is selected or the record shares any selected category."""
    if not selected_categories:
        return True
    return any(category in selected_categories for category in record.categories)


def filter_records(
    records: Iterable[Record],
    search_text: str = "",
    selected_categories: AbstractSet[str] = frozenset(),
) -> List[Record]:
    """
    Narrow ``records`` by name substring and category membership.

    Parameters
    ----------
    records : iterable[Record]
        Full record set, in display order.
    search_text : str
        Substring to look for in the record name. Empty matches everything.
    selected_categories : set[str]
        Active category toggles. Empty matches everything; otherwise a record
        passes when it carries at least one of them.

    Returns
    -------
    List[Record]
        Matching records in their original order.
    """
    return [
        record
        for record in records
        if matches_name(record, search_text)
        and matches_categories(record, selected_categories)
    ]


__all__ = ["filter_records", "matches_categories", "matches_name"]
