"""
Pure derived computations re-run on every selection change.
"""

from pokedex.pipeline.filters import filter_records, matches_categories, matches_name
from pokedex.pipeline.pagination import clamp_page, page_count, paginate

__all__ = [
    "clamp_page",
    "filter_records",
    "matches_categories",
    "matches_name",
    "page_count",
    "paginate",
]
