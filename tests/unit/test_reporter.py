from __future__ import annotations

import io

from rich.console import Console

from pokedex.domain.models import PageView
from pokedex.errors import DetailFetchError
from pokedex.reporter import page_status, print_load_error, print_page, view_to_dict
from pokedex.state import SelectionState
from pokedex.utils.profiler import LoadStats


def _console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def test_page_status_line():
    view = PageView(current_page=2, page_count=3, page_size=10, filtered_count=25, total_count=100)
    assert page_status(view) == "Page 2 of 3 | 25 of 100 records | 10 per page"


def test_print_page_renders_window(records):
    console = _console()
    view = PageView(
        items=tuple(records[:3]),
        current_page=1,
        page_count=3,
        page_size=3,
        filtered_count=8,
        total_count=8,
    )
    state = SelectionState(search_text="", selected_categories=frozenset({"fire"}))
    stats = LoadStats(label="initial-load", duration_seconds=0.5, records=8)

    print_page(view, state=state, stats=stats, console=console)

    output = console.file.getvalue()
    assert "bulbasaur" in output
    assert "charizard" in output
    assert "squirtle" not in output
    assert "Page 1 of 3" in output
    assert "types: fire" in output
    assert "loaded 8 in 0.50s" in output


def test_print_page_numbers_rows_from_page_offset(records):
    console = _console()
    view = PageView(items=(records[3],), current_page=2, page_count=2, page_size=3)
    print_page(view, console=console)
    assert " 4 " in console.file.getvalue()


def test_print_page_with_no_matches():
    console = _console()
    print_page(PageView(), console=console)
    assert "No records match" in console.file.getvalue()


def test_view_to_dict_includes_selection(records):
    view = PageView(items=(records[1],), page_count=1, filtered_count=1, total_count=8)
    state = SelectionState(search_text="char", selected_categories=frozenset({"water", "fire"}))

    payload = view_to_dict(view, state)

    assert payload["items"][0]["name"] == "charmander"
    assert payload["items"][0]["stats"][0] == {"name": "hp", "value": 50}
    assert payload["selection"]["selected_categories"] == ["fire", "water"]
    assert payload["page_count"] == 1


def test_print_load_error_shows_reason():
    console = _console()
    error = DetailFetchError("https://pokeapi.test/pokemon/25/", "404 Not Found", handle="pikachu")
    print_load_error(error, console=console)
    output = console.file.getvalue()
    assert "Load failed" in output
    assert "404 Not Found" in output
