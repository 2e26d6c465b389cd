"""
Record fetcher: list request, then one detail request per handle.

Intent:
- Issue a single ``GET {base}/{resource}?limit=N`` for the reference handles.
- Resolve every handle's detail URL concurrently over one ``httpx.AsyncClient``.
- Map each detail document into a ``Record``; the batch succeeds or fails as a
  whole, so callers never observe a partial record set.

No retries and no backoff. The client timeout comes from settings and is
disabled by default.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from pokedex.config import Settings, get_settings
from pokedex.domain.models import Record, Stat
from pokedex.errors import DetailFetchError, FetchError, ListFetchError, PayloadError
from pokedex.utils.logging import get_logger

log = get_logger(__name__)


class Handle(BaseModel):
    """Reference handle returned by the list endpoint."""

    name: str
    url: str

    model_config = {"frozen": True}


def record_from_detail(payload: Dict[str, Any], source: str = "<detail>") -> Record:
    """
    Map an upstream detail document into a ``Record``.

    Only ``name``, ``sprites.front_default``, ``types[].type.name`` and
    ``stats[].{stat.name, base_stat}`` are read; everything else is ignored.

    Raises
    ------
    PayloadError
        If any of those fields is missing or has the wrong type.
    """
    try:
        return Record(
            name=payload["name"],
            avatar_url=(payload.get("sprites") or {}).get("front_default"),
            categories=tuple(entry["type"]["name"] for entry in payload["types"]),
            stats=tuple(
                Stat(name=entry["stat"]["name"], value=entry["base_stat"])
                for entry in payload["stats"]
            ),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as exc:
        raise PayloadError(source, f"malformed detail document: {exc!r}") from exc


def handles_from_list(payload: Dict[str, Any], url: str) -> List[Handle]:
    try:
        return [Handle.model_validate(entry) for entry in payload["results"]]
    except (KeyError, TypeError, ValidationError) as exc:
        raise PayloadError(url, f"malformed list document: {exc!r}") from exc


class RecordFetcher:
    """
    Load the full record set from the upstream REST API.

    Parameters
    ----------
    settings : Settings | None
        Source of the base URL, resource path and timeout. Defaults to
        ``get_settings()``.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override, used by tests to serve canned responses.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
            follow_redirects=True,
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        error_cls: Type[FetchError],
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise error_cls(url, str(exc) or type(exc).__name__) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadError(url, "response body is not JSON") from exc

    async def _fetch_handles(self, client: httpx.AsyncClient, limit: int) -> List[Handle]:
        url = self.settings.list_url
        payload = await self._get_json(client, url, ListFetchError, params={"limit": limit})
        handles = handles_from_list(payload, url)
        log.info(f"Fetched {len(handles)} handles", extra={"url": url, "limit": limit})
        return handles

    async def _fetch_detail(self, client: httpx.AsyncClient, handle: Handle) -> Record:
        try:
            payload = await self._get_json(client, handle.url, DetailFetchError)
        except DetailFetchError as exc:
            exc.handle = handle.name
            raise
        return record_from_detail(payload, source=handle.url)

    async def fetch_records(self, limit: Optional[int] = None) -> List[Record]:
        """
        Fetch ``limit`` handles and resolve all of them into records.

        Records come back in the order the list endpoint returned the handles.
        The first failing detail request cancels the rest and propagates.
        """
        effective_limit = limit or self.settings.batch_limit
        async with self._client() as client:
            handles = await self._fetch_handles(client, effective_limit)
            tasks = [
                asyncio.ensure_future(self._fetch_detail(client, handle)) for handle in handles
            ]
            try:
                records = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        log.info(f"Resolved {len(records)} records", extra={"records": len(records)})
        return list(records)

    def fetch(self, limit: Optional[int] = None) -> List[Record]:
        """
        Synchronous entry point for callers outside an event loop.

        Raises
        ------
        RuntimeError
            When called from inside a running event loop; await
            ``fetch_records`` there instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.fetch_records(limit))
        raise RuntimeError(
            "RecordFetcher.fetch() cannot run inside an async context; "
            "await fetch_records() instead"
        )


__all__ = ["Handle", "RecordFetcher", "handles_from_list", "record_from_detail"]
