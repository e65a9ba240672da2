"""
CLI utility helpers — output formatting, settings and corpus loading.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from guidebook.content.corpus import Corpus
from guidebook.content.loader import load_configured_corpus
from guidebook.core.errors import ConfigError, GuidebookError
from guidebook.core.settings import GuidebookSettings, get_settings

console = Console()
err_console = Console(stderr=True)


# ── Error handling ───────────────────────────────────────────────────────


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn a :class:`GuidebookError` into a red error line and exit code.

    Configuration errors exit with 2, everything else with 1.
    """
    try:
        yield
    except GuidebookError as exc:
        err_console.print(f"[bold red]Error[/bold red] ({exc.category.value}): {escape(str(exc))}")
        raise typer.Exit(code=2 if isinstance(exc, ConfigError) else 1) from exc


# ── Settings / corpus helpers ────────────────────────────────────────────


def load_settings() -> GuidebookSettings:
    """Settings for the project containing the working directory."""
    with cli_errors():
        return get_settings()


def open_corpus(directory: Path | None = None) -> Corpus:
    """Load the configured corpus, or the one under ``directory``."""
    settings = load_settings()
    with cli_errors():
        return load_configured_corpus(settings, directory)


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(escape("" if v is None else str(v)) for v in d.values()))
    console.print(table)


def print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {escape(str(v))}")


def output_items(items: list, *, as_json: bool = False, title: str = "", empty: str = "No items.") -> None:
    """Render a list as JSON or a table."""
    if as_json:
        print_json([_to_dict(item) for item in items])
        return
    if not items:
        console.print(f"[dim]{empty}[/dim]")
        return
    _print_table(items, title=title)


SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "blue"}
