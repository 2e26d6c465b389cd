"""
Exceptions raised while loading the record set.

Every failure of the initial load is a ``FetchError``; callers that only want
to know whether the load worked can catch that one type.
"""

from __future__ import annotations

from typing import Optional


class FetchError(Exception):
    """Base class for failures while populating the record set."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


class ListFetchError(FetchError):
    """The list of reference handles could not be retrieved."""


class DetailFetchError(FetchError):
    """One detail request failed, which fails the whole batch."""

    def __init__(self, url: str, reason: str, handle: Optional[str] = None) -> None:
        super().__init__(url, reason)
        self.handle = handle


class PayloadError(FetchError):
    """A response was not shaped the way the upstream API documents it."""


__all__ = ["DetailFetchError", "FetchError", "ListFetchError", "PayloadError"]
