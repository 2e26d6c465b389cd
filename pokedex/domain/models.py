"""
Domain models for the Pokedex browser.

``Record`` is the normalized, immutable shape every creature takes once the
fetcher has resolved its detail document. ``Page`` and ``PageView`` are the
derived values the paginator and the session hand to the presentation layer.
"""
from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, Field, field_validator

# Toggle buttons offered by the browser; any other category still filters.
CATEGORY_CHOICES: Tuple[str, ...] = (
    "bug",
    "electric",
    "fire",
    "grass",
    "normal",
    "poison",
    "water",
)

PAGE_SIZE_CHOICES: Tuple[int, ...] = (10, 20, 50)


class Stat(BaseModel):
    """
    A single base stat of a creature (e.g. ``hp: 45``).
    """

    name: str = Field(..., description="Stat name as reported upstream.")
    value: int = Field(..., description="Base stat value.")

    model_config = {"frozen": True}


class Record(BaseModel):
    """
    A creature entry enriched with avatar, categories and stats.
    """

    name: str = Field(..., description="Creature name (lower-case upstream).")
    avatar_url: str = Field("", description="Front sprite URL; empty when unavailable.")
    categories: Tuple[str, ...] = Field(default=(), description="Ordered, unique type names.")
    stats: Tuple[Stat, ...] = Field(default=(), description="Ordered base stats.")

    model_config = {"frozen": True}

    @field_validator("avatar_url", mode="before")
    @classmethod
    def _none_avatar_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("categories")
    @classmethod
    def _dedupe_categories(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(value))


class Page(BaseModel):
    """Result of slicing a record list into one page window."""

    window: Tuple[Record, ...] = ()
    page_count: int = 0
    page: int = 1

    model_config = {"frozen": True}


class PageView(BaseModel):
    """
    Everything the presentation layer needs to render the current page.
    """

    items: Tuple[Record, ...] = ()
    current_page: int = 1
    page_count: int = 0
    page_size: int = PAGE_SIZE_CHOICES[0]
    filtered_count: int = 0
    total_count: int = 0

    model_config = {"frozen": True}


__all__ = ["CATEGORY_CHOICES", "PAGE_SIZE_CHOICES", "Page", "PageView", "Record", "Stat"]
