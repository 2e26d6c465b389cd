from __future__ import annotations

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pokedex.domain.models import PageView, Record
from pokedex.errors import FetchError
from pokedex.state import SelectionState
from pokedex.utils.profiler import LoadStats

# Badge colours for the most common types; everything else is grey.
CATEGORY_STYLES: Dict[str, str] = {
    "fire": "bold white on dark_orange",
    "water": "bold white on blue",
    "grass": "bold white on green",
}
DEFAULT_CATEGORY_STYLE = "white on grey37"


def category_badges(record: Record) -> Text:
    badges = Text()
    for index, category in enumerate(record.categories):
        if index:
            badges.append(" ")
        badges.append(f" {category} ", style=CATEGORY_STYLES.get(category, DEFAULT_CATEGORY_STYLE))
    return badges


def stat_lines(record: Record) -> str:
    return "\n".join(f"{stat.name}: {stat.value}" for stat in record.stats)


def page_status(view: PageView) -> str:
    """Status line shown under the grid, e.g. ``Page 2 of 10``."""
    return (
        f"Page {view.current_page} of {view.page_count} | "
        f"{view.filtered_count} of {view.total_count} records | "
        f"{view.page_size} per page"
    )


def selection_summary(state: SelectionState) -> str:
    search = state.search_text or "-"
    categories = ", ".join(sorted(state.selected_categories)) or "-"
    return f"search: {search} | types: {categories}"


def view_to_dict(view: PageView, state: Optional[SelectionState] = None) -> Dict[str, Any]:
    """
    JSON-friendly rendering of a page view, used by ``browse --json``.
    """
    payload: Dict[str, Any] = view.model_dump(mode="json")
    if state is not None:
        payload["selection"] = {
            "search_text": state.search_text,
            "selected_categories": sorted(state.selected_categories),
            "current_page": state.current_page,
            "page_size": state.page_size,
        }
    return payload


def print_load_error(error: FetchError, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print(
        Panel(
            f"Could not load records: {error.reason}\n[dim]{error.url}[/dim]",
            title="Load failed",
            border_style="red",
        )
    )


def print_page(
    view: PageView,
    state: Optional[SelectionState] = None,
    stats: Optional[LoadStats] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render the current page window as a rich table.

    The caption carries the pagination status and, when available, how long
    the initial load took.
    """
    console = console or Console()

    caption_parts = [page_status(view)]
    if stats is not None and stats.records:
        caption_parts.append(
            f"loaded {stats.records} in {stats.duration_seconds:.2f}s "
            f"({stats.records_per_sec:,.1f} records/s)"
        )

    title = "Pokedex"
    if state is not None:
        title = f"{title}\n[dim]{selection_summary(state)}[/dim]"

    table = Table(title=title, box=box.ROUNDED, caption="\n".join(caption_parts))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Types")
    table.add_column("Stats", style="magenta")
    table.add_column("Avatar", style="dim", overflow="fold")

    if not view.items:
        console.print(table)
        console.print("[yellow]No records match the current selection.[/yellow]")
        return

    offset = (view.current_page - 1) * view.page_size
    for index, record in enumerate(view.items, start=offset + 1):
        table.add_row(
            str(index),
            record.name,
            category_badges(record),
            stat_lines(record),
            record.avatar_url or "N/A",
        )

    console.print(table)
