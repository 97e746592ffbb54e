from __future__ import annotations

from rich import print
from rich.markup import escape

from .common import store_errors_exit


def author_list_cmd(*, store_from_url, api_url: str | None) -> None:
    store = store_from_url(api_url)
    try:
        if not store.view.authors:
            print("[dim]No authors[/dim]")
            return
        for author in store.view.authors:
            print(f"[{author.id}] {escape(author.name)} [dim]{escape(author.color)}[/dim]")
    finally:
        store.close()


def author_add_cmd(*, store_from_url, api_url: str | None, name: str, color: str | None) -> None:
    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            author = store.create_author(name, color=color)
        print(f"[green]Created author {escape(author.name)} (#{author.id})[/green]")
    finally:
        store.close()


def author_edit_cmd(
    *,
    store_from_url,
    api_url: str | None,
    author_id: int,
    name: str | None,
    color: str | None,
) -> None:
    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            author = store.update_author(author_id, name=name, color=color)
        print(f"[green]Updated author {escape(author.name)} (#{author.id})[/green]")
    finally:
        store.close()


def author_rm_cmd(*, store_from_url, api_url: str | None, author_id: int) -> None:
    store = store_from_url(api_url)
    try:
        with store_errors_exit():
            store.delete_author(author_id)
        print(f"[green]Deleted author #{author_id}[/green]")
    finally:
        store.close()
