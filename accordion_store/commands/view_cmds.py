from __future__ import annotations

import json

import typer
from rich import print
from rich.markup import escape

from .common import compact_text, view_to_dict


def list_cmd(*, store_from_url, api_url: str | None, query: str, as_json: bool) -> None:
    """Print categories (pinned first) with their items."""

    store = store_from_url(api_url)
    try:
        view = store.pinned_first(query)
        if as_json:
            typer.echo(json.dumps(view_to_dict(view), indent=2, ensure_ascii=False))
            return
        if not view.categories:
            print("[dim]No categories[/dim]" if not query.strip() else "[dim]No matches[/dim]")
            return
        authors = {author.id: author for author in view.authors}
        for category in view.categories:
            pin = "📌 " if category.pinned else ""
            print(f"{pin}[bold]{escape(category.name)}[/bold] [dim](#{category.id})[/dim]")
            if category.description:
                print(f"  [dim]{escape(compact_text(category.description, 80))}[/dim]")
            for acc in category.accordions:
                author = authors.get(acc.author_id)
                by = f" [dim]by {escape(author.name)}[/dim]" if author else ""
                print(f"  [{acc.id}] {escape(acc.title)}{by}")
                print(f"      {escape(compact_text(acc.content, 72))}")
    finally:
        store.close()


def show_cmd(*, store_from_url, api_url: str | None, accordion_id: int) -> None:
    """Print a single item as JSON."""

    store = store_from_url(api_url)
    try:
        acc = store.find_accordion(accordion_id)
        if acc is None:
            print(f"[red]Item {accordion_id} not found[/red]")
            raise typer.Exit(code=1)
        typer.echo(json.dumps(acc.to_wire(), indent=2, ensure_ascii=False))
    finally:
        store.close()


def stats_cmd(*, store_from_url, api_url: str | None) -> None:
    """Show collection counts."""

    store = store_from_url(api_url)
    try:
        counts = store.stats()
        print(f"Store: {store.client.base_url}")
        print(f"Categories: {counts['categories']} ({counts['pinned']} pinned)")
        print(f"Items: {counts['accordions']}")
        print(f"Authors: {counts['authors']}")
    finally:
        store.close()


def repair_cmd(*, store_from_url, api_url: str | None) -> None:
    """Report orphaned items found (and removed) by the last load."""

    store = store_from_url(api_url)
    try:
        report = store.last_repair
        if report.clean:
            print("[green]No orphaned items[/green]")
            return
        for orphan in report.orphans:
            status = "deleted" if orphan.accordion_id in report.deleted else "kept"
            if orphan.accordion_id in report.failed:
                status = "delete failed"
            print(
                f"- item {orphan.accordion_id}: {orphan.reason} "
                f"(category={orphan.category_id} author={orphan.author_id}) {status}"
            )
        if report.failed:
            raise typer.Exit(code=1)
    finally:
        store.close()
