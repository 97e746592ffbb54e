from __future__ import annotations

import typer
from rich import print
from rich.markup import escape

from .common import store_errors_exit


def item_add_cmd(
    *,
    store_from_url,
    api_url: str | None,
    title: str,
    content: str,
    category_id: int | None,
    new_category: str | None,
    author_id: int,
) -> None:
    """Create an item in an existing or a brand new category."""

    if (category_id is None) == (new_category is None):
        print("[red]Use exactly one of --category or --new-category[/red]")
        raise typer.Exit(code=1)
    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            if category_id is not None:
                acc = store.create_accordion(
                    title=title,
                    content=content,
                    category_id=category_id,
                    author_id=author_id,
                )
            else:
                acc = store.create_accordion_in_new_category(
                    category_name=new_category or "",
                    title=title,
                    content=content,
                    author_id=author_id,
                )
        print(f"[green]Created item {escape(acc.title)} (#{acc.id})[/green]")
    finally:
        store.close()


def item_edit_cmd(
    *,
    store_from_url,
    api_url: str | None,
    accordion_id: int,
    title: str | None,
    content: str | None,
    category_id: int | None,
    author_id: int | None,
) -> None:
    """Edit an item; --category moves it."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            acc = store.update_accordion(
                accordion_id,
                title=title,
                content=content,
                category_id=category_id,
                author_id=author_id,
            )
        print(f"[green]Updated item {escape(acc.title)} (#{acc.id})[/green]")
    finally:
        store.close()


def item_rm_cmd(*, store_from_url, api_url: str | None, accordion_id: int) -> None:
    """Delete an item."""

    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            store.delete_accordion(accordion_id)
        print(f"[green]Deleted item #{accordion_id}[/green]")
    finally:
        store.close()
