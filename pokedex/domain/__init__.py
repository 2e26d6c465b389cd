"""
Domain package for the Pokedex browser.

Exports the record types shared by the fetcher, the pipeline and the session.
Keep this package focused on data definitions and validation concerns.
"""

from pokedex.domain.models import (
    CATEGORY_CHOICES,
    PAGE_SIZE_CHOICES,
    Page,
    PageView,
    Record,
    Stat,
)

__all__ = [
    "CATEGORY_CHOICES",
    "PAGE_SIZE_CHOICES",
    "Page",
    "PageView",
    "Record",
    "Stat",
]
