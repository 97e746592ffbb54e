from __future__ import annotations

import contextlib
from collections.abc import Iterator
from typing import Any

import typer
from rich import print

from accordion_store.config import load_config, read_config_file, write_config_file
from accordion_store.errors import ConflictError, StoreError, ValidationError
from accordion_store.store import AccordionStore, ViewModel


def store_from_url(api_url: str | None) -> AccordionStore:
    store = AccordionStore(api_url, config=load_config())
    if not store.load():
        print(f"[red]{store.load_error} ({store.client.base_url})[/red]")
        raise typer.Exit(code=1)
    report = store.last_repair
    if not report.clean:
        print(
            f"[yellow]Repaired {len(report.deleted)} orphaned item(s); "
            f"{len(report.failed)} could not be removed[/yellow]"
        )
    return store


@contextlib.contextmanager
def store_errors_exit() -> Iterator[None]:
    try:
        yield
    except ValidationError as exc:
        print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=1) from exc
    except ConflictError as exc:
        print(f"[red]Conflict: {exc}. Reload and try again.[/red]")
        raise typer.Exit(code=2) from exc
    except StoreError as exc:
        print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def read_config_or_exit() -> dict[str, Any]:
    try:
        return read_config_file()
    except ValueError as exc:
        print(f"[red]Invalid config file: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def write_config_or_exit(data: dict[str, Any]) -> None:
    try:
        write_config_file(data)
    except OSError as exc:
        print(f"[red]Failed to write config: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def view_to_dict(view: ViewModel) -> dict[str, Any]:
    return {
        "categories": [
            {
                **category.category().to_wire(),
                "accordions": [acc.to_wire() for acc in category.accordions],
            }
            for category in view.categories
        ],
        "authors": [author.to_wire() for author in view.authors],
    }


def compact_text(text: str, limit: int) -> str:
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 3, 0)] + "..."
