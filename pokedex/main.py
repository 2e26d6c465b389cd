from __future__ import annotations

import json
import shlex
import sys
from typing import List, Optional

import typer
from rich.console import Console

from pokedex.config import get_settings
from pokedex.domain.models import CATEGORY_CHOICES, PAGE_SIZE_CHOICES
from pokedex.reporter import print_load_error, print_page, view_to_dict
from pokedex.session import BrowserSession
from pokedex.utils.logging import configure_logging

app = typer.Typer(help="Browse a batch of creatures from PokeAPI.")

SHELL_HELP = (
    "Commands:\n"
    "  search <text>   filter by name substring (empty clears)\n"
    "  toggle <type>   add/remove a type filter\n"
    "  clear           drop search text and type filters\n"
    "  next | prev     move one page\n"
    "  page <n>        jump to page n\n"
    f"  size <n>        page size, one of {', '.join(str(s) for s in PAGE_SIZE_CHOICES)}\n"
    "  help            show this text\n"
    "  quit            leave the shell"
)


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _load_session(limit: Optional[int]) -> BrowserSession:
    session = BrowserSession(limit=limit)
    if not session.load() and session.load_error is not None:
        print_load_error(session.load_error)
    return session


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"API={settings.list_url} | limit={settings.batch_limit} "
        f"page_size={settings.default_page_size} timeout={settings.http_timeout} | "
        f"log_level={settings.log_level} json_logs={settings.log_json}"
    )


@app.command()
def types() -> None:
    """
    List the type filters offered as toggles.
    """
    typer.echo("Available types: " + ", ".join(CATEGORY_CHOICES))


@app.command()
def browse(
    search: str = typer.Option("", "--search", "-q", help="Name substring to search for."),
    category: Optional[List[str]] = typer.Option(
        None,
        "--type",
        "-t",
        help="Type filter; repeat for several (a record matches if it has any of them).",
    ),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to show (clamped)."),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        "-n",
        help="Records per page: 10, 20 or 50 (default from settings).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        help="Override number of records to load (default from settings).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the page as JSON."),
) -> None:
    """
    Load the record set, apply the given selection and show one page.
    """
    _setup_logging()
    session = _load_session(limit)
    if session.load_error is not None:
        raise typer.Exit(code=1)

    try:
        session.dispatch("search", search)
        for name in category or []:
            session.dispatch("toggle", name.lower())
        if page_size is not None:
            session.dispatch("size", page_size)
        session.dispatch("page", page)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    view = session.view()
    if as_json:
        typer.echo(json.dumps(view_to_dict(view, session.state), indent=2))
        return
    print_page(view, state=session.state, stats=session.load_stats)


def run_shell_command(session: BrowserSession, line: str) -> bool:
    """
    Apply one shell command to the session.

    Returns False when the shell should exit. Invalid input raises ValueError.
    """
    parts = shlex.split(line)
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        typer.echo(SHELL_HELP)
        return True
    if command == "search":
        session.dispatch("search", " ".join(args))
    elif command == "toggle":
        if len(args) != 1:
            raise ValueError("usage: toggle <type>")
        session.dispatch("toggle", args[0].lower())
    elif command in ("next", "n"):
        session.dispatch("next")
    elif command in ("prev", "previous", "p"):
        session.dispatch("prev")
    elif command in ("page", "size"):
        if len(args) != 1 or not args[0].lstrip("-").isdigit():
            raise ValueError(f"usage: {command} <number>")
        session.dispatch(command, int(args[0]))
    elif command == "clear":
        session.dispatch("clear")
    else:
        raise ValueError(f"unknown command '{command}' (try 'help')")
    return True


@app.command()
def shell(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        help="Override number of records to load (default from settings).",
    ),
) -> None:
    """
    Interactive browser: search, toggle types and page through the results.
    """
    _setup_logging()
    session = _load_session(limit)
    console = Console()
    print_page(session.view(), state=session.state, stats=session.load_stats, console=console)
    typer.echo(SHELL_HELP)

    while True:
        try:
            line = typer.prompt("pokedex", default="", show_default=False)
        except typer.Abort:
            break
        try:
            keep_going = run_shell_command(session, line)
        except ValueError as exc:
            typer.echo(f"error: {exc}", err=True)
            continue
        if not keep_going:
            break
        if line.strip().lower() == "help":
            continue
        print_page(session.view(), state=session.state, console=console)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
