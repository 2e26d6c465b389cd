"""
Pytest configuration for the Pokedex browser.

Provides fixtures for:
- Building records without touching the network
- A fake PokeAPI served through ``httpx.MockTransport``
- Settings pointing the fetcher at that fake API
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set

import httpx
import pytest

from pokedex.config import Settings
from pokedex.domain.models import Record, Stat
from pokedex.fetcher import RecordFetcher

FAKE_BASE_URL = "https://pokeapi.test/api/v2"


def _make_record(name: str, *categories: str, hp: int = 50) -> Record:
    return Record(
        name=name,
        avatar_url=f"https://sprites.test/{name}.png",
        categories=categories,
        stats=(Stat(name="hp", value=hp), Stat(name="attack", value=hp + 5)),
    )


def _detail_payload(
    name: str,
    types: Sequence[str],
    stats: Optional[Dict[str, int]] = None,
    sprite: Optional[str] = "default",
) -> Dict[str, Any]:
    """Detail document shaped like ``GET /pokemon/{name}``."""
    stats = stats if stats is not None else {"hp": 45, "attack": 49}
    return {
        "id": abs(hash(name)) % 1000,
        "name": name,
        "height": 7,
        "sprites": {
            "front_default": f"https://sprites.test/{name}.png" if sprite == "default" else sprite,
            "back_default": None,
        },
        "types": [
            {"slot": slot, "type": {"name": type_name, "url": f"{FAKE_BASE_URL}/type/{slot}/"}}
            for slot, type_name in enumerate(types, start=1)
        ],
        "stats": [
            {"base_stat": value, "effort": 0, "stat": {"name": stat_name, "url": ""}}
            for stat_name, value in stats.items()
        ],
    }


class FakePokeApi:
    """
    In-memory stand-in for the list and detail endpoints.

    ``fail_list`` makes the list endpoint return 500; names in
    ``fail_details`` make their detail endpoint return 500. ``delay`` makes
    every detail response wait, which lets tests observe concurrency.
    """

    def __init__(self, details: Iterable[Dict[str, Any]]) -> None:
        self.details: Dict[str, Dict[str, Any]] = {d["name"]: d for d in details}
        self.order: List[str] = list(self.details)
        self.fail_list = False
        self.fail_details: Set[str] = set()
        self.delay: float = 0.0
        self.slow_details: Set[str] = set()
        self.cancelled: List[str] = []
        self.requests: List[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def url_for(self, name: str) -> str:
        return f"{FAKE_BASE_URL}/pokemon/{name}/"

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rstrip("/")
        if path == "/api/v2/pokemon":
            if self.fail_list:
                return httpx.Response(500, json={"detail": "boom"})
            limit = int(request.url.params.get("limit", "20"))
            names = self.order[:limit]
            return httpx.Response(
                200,
                json={
                    "count": len(self.order),
                    "next": None,
                    "previous": None,
                    "results": [{"name": n, "url": self.url_for(n)} for n in names],
                },
            )

        name = path.split("/")[-1]
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if name in self.slow_details:
                await asyncio.sleep(30)
            elif self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise
        finally:
            self.in_flight -= 1

        if name in self.fail_details or name not in self.details:
            return httpx.Response(500 if name in self.fail_details else 404)
        return httpx.Response(200, json=self.details[name])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def records() -> List[Record]:
    """Small mixed record set in upstream order."""
    return [
        _make_record("bulbasaur", "grass", "poison"),
        _make_record("charmander", "fire"),
        _make_record("charizard", "fire", "flying"),
        _make_record("squirtle", "water"),
        _make_record("caterpie", "bug"),
        _make_record("pidgey", "normal", "flying"),
        _make_record("pikachu", "electric"),
        _make_record("psyduck", "water"),
    ]


@pytest.fixture
def numbered_records() -> Callable[[int], List[Record]]:
    def _build(count: int) -> List[Record]:
        return [_make_record(f"mon{index:03d}", "normal") for index in range(1, count + 1)]

    return _build


@pytest.fixture
def fake_api() -> FakePokeApi:
    return FakePokeApi(
        [
            _detail_payload("bulbasaur", ["grass", "poison"], {"hp": 45, "attack": 49}),
            _detail_payload("ivysaur", ["grass", "poison"], {"hp": 60, "attack": 62}),
            _detail_payload("charmander", ["fire"], {"hp": 39, "attack": 52}),
            _detail_payload("squirtle", ["water"], {"hp": 44, "attack": 48}),
            _detail_payload("pikachu", ["electric"], {"hp": 35, "attack": 55}),
        ]
    )


@pytest.fixture
def api_settings() -> Settings:
    """
    Settings fixture pointing at the fake API.
    """
    return Settings(
        api_base_url=FAKE_BASE_URL,
        resource="pokemon",
        batch_limit=5,
        default_page_size=10,
        log_level="DEBUG",
    )


@pytest.fixture
def fake_fetcher(api_settings: Settings, fake_api: FakePokeApi) -> RecordFetcher:
    return RecordFetcher(settings=api_settings, transport=fake_api.transport)


@pytest.fixture
def reset_logging():
    """Drop handlers installed by ``configure_logging`` during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for records: ``make_record(name, *categories, hp=50)``."""
    return _make_record


@pytest.fixture
def detail_payload() -> Callable[..., Dict[str, Any]]:
    """Factory for upstream detail documents."""
    return _detail_payload
