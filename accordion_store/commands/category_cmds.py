from __future__ import annotations

from rich import print
from rich.markup import escape

from .common import store_errors_exit


def category_add_cmd(
    *,
    store_from_url,
    api_url: str | None,
    name: str,
    description: str | None,
    pinned: bool,
) -> None:
    """Create a category."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            category = store.create_category(name, description=description, pinned=pinned)
        print(f"[green]Created category {escape(category.name)} (#{category.id})[/green]")
    finally:
        store.close()


def category_edit_cmd(
    *,
    store_from_url,
    api_url: str | None,
    category_id: int,
    name: str | None,
    description: str | None,
) -> None:
    """Rename a category or change its description."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            category = store.update_category(category_id, name=name, description=description)
        print(f"[green]Updated category {escape(category.name)} (#{category.id})[/green]")
    finally:
        store.close()


def category_rm_cmd(*, store_from_url, api_url: str | None, category_id: int) -> None:
    """Delete a category along with its items."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            removed = store.delete_category(category_id)
        print(f"[green]Deleted category #{category_id} and {removed} item(s)[/green]")
    finally:
        store.close()


def category_pin_cmd(*, store_from_url, api_url: str | None, category_id: int) -> None:
    """Toggle the pinned flag on a category."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            category = store.toggle_pin(category_id)
        state = "Pinned" if category.pinned else "Unpinned"
        print(f"[green]{state} {escape(category.name)}[/green]")
    finally:
        store.close()
