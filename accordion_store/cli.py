from __future__ import annotations

import logging

import typer
from rich import print

from . import __version__
from .commands.author_cmds import author_add_cmd, author_edit_cmd, author_list_cmd, author_rm_cmd
from .commands.category_cmds import (
    category_add_cmd,
    category_edit_cmd,
    category_pin_cmd,
    category_rm_cmd,
)
from .commands.common import store_from_url
from .commands.config_cmds import config_set_cmd, config_show_cmd
from .commands.item_cmds import item_add_cmd, item_edit_cmd, item_rm_cmd
from .commands.view_cmds import list_cmd, repair_cmd, show_cmd, stats_cmd

app = typer.Typer(help="accordions: categorized notes backed by a REST store")
category_app = typer.Typer(help="Manage categories")
item_app = typer.Typer(help="Manage items")
author_app = typer.Typer(help="Manage authors")
config_app = typer.Typer(help="Inspect and edit configuration")
app.add_typer(category_app, name="category")
app.add_typer(item_app, name="item")
app.add_typer(author_app, name="author")
app.add_typer(config_app, name="config")

API_URL_HELP = "Base URL of the REST store (defaults to config api_url)"


def _store(api_url: str | None):
    return store_from_url(api_url)


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and repairs"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("version")
def version() -> None:
    """Print the installed version."""

    print(__version__)


@app.command("list")
def list_items(
    query: str = typer.Argument("", help="Filter text"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the view model as JSON"),
) -> None:
    """List categories and items, pinned categories first."""

    list_cmd(store_from_url=_store, api_url=api_url, query=query, as_json=as_json)


@app.command("show")
def show(
    accordion_id: int = typer.Argument(..., help="Item id"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Print an item as JSON."""

    show_cmd(store_from_url=_store, api_url=api_url, accordion_id=accordion_id)


@app.command("stats")
def stats(api_url: str = typer.Option(None, help=API_URL_HELP)) -> None:
    """Show collection counts."""

    stats_cmd(store_from_url=_store, api_url=api_url)


@app.command("repair")
def repair(api_url: str = typer.Option(None, help=API_URL_HELP)) -> None:
    """Load once and report orphaned items."""

    repair_cmd(store_from_url=_store, api_url=api_url)


@category_app.command("add")
def category_add(
    name: str = typer.Argument(..., help="Category name"),
    description: str = typer.Option(None, help="Optional description"),
    pinned: bool = typer.Option(False, "--pinned", help="Pin on creation"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Create a category."""

    category_add_cmd(
        store_from_url=_store,
        api_url=api_url,
        name=name,
        description=description,
        pinned=pinned,
    )


@category_app.command("edit")
def category_edit(
    category_id: int = typer.Argument(..., help="Category id"),
    name: str = typer.Option(None, help="New name"),
    description: str = typer.Option(None, help="New description (empty clears it)"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Rename a category or change its description."""

    category_edit_cmd(
        store_from_url=_store,
        api_url=api_url,
        category_id=category_id,
        name=name,
        description=description,
    )


@category_app.command("rm")
def category_rm(
    category_id: int = typer.Argument(..., help="Category id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Delete a category and all of its items."""

    if not yes:
        typer.confirm(f"Delete category {category_id} and all of its items?", abort=True)
    category_rm_cmd(store_from_url=_store, api_url=api_url, category_id=category_id)


@category_app.command("pin")
def category_pin(
    category_id: int = typer.Argument(..., help="Category id"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Toggle the pinned flag."""

    category_pin_cmd(store_from_url=_store, api_url=api_url, category_id=category_id)


@item_app.command("add")
def item_add(
    title: str = typer.Option(..., help="Item title"),
    content: str = typer.Option(..., help="Item body"),
    author_id: int = typer.Option(..., "--author", help="Author id"),
    category_id: int = typer.Option(None, "--category", help="Existing category id"),
    new_category: str = typer.Option(None, "--new-category", help="Create this category first"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Create an item."""

    item_add_cmd(
        store_from_url=_store,
        api_url=api_url,
        title=title,
        content=content,
        category_id=category_id,
        new_category=new_category,
        author_id=author_id,
    )


@item_app.command("edit")
def item_edit(
    accordion_id: int = typer.Argument(..., help="Item id"),
    title: str = typer.Option(None, help="New title"),
    content: str = typer.Option(None, help="New body"),
    category_id: int = typer.Option(None, "--category", help="Move to this category"),
    author_id: int = typer.Option(None, "--author", help="Reassign author"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Edit or move an item."""

    item_edit_cmd(
        store_from_url=_store,
        api_url=api_url,
        accordion_id=accordion_id,
        title=title,
        content=content,
        category_id=category_id,
        author_id=author_id,
    )


@item_app.command("rm")
def item_rm(
    accordion_id: int = typer.Argument(..., help="Item id"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Delete an item."""

    item_rm_cmd(store_from_url=_store, api_url=api_url, accordion_id=accordion_id)


@author_app.command("list")
def author_list(api_url: str = typer.Option(None, help=API_URL_HELP)) -> None:
    """List authors."""

    author_list_cmd(store_from_url=_store, api_url=api_url)


@author_app.command("add")
def author_add(
    name: str = typer.Argument(..., help="Author name"),
    color: str = typer.Option(None, help="Accent color token"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Create an author."""

    author_add_cmd(store_from_url=_store, api_url=api_url, name=name, color=color)


@author_app.command("edit")
def author_edit(
    author_id: int = typer.Argument(..., help="Author id"),
    name: str = typer.Option(None, help="New name"),
    color: str = typer.Option(None, help="New color"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Rename an author or change the color."""

    author_edit_cmd(
        store_from_url=_store, api_url=api_url, author_id=author_id, name=name, color=color
    )


@author_app.command("rm")
def author_rm(
    author_id: int = typer.Argument(..., help="Author id"),
    api_url: str = typer.Option(None, help=API_URL_HELP),
) -> None:
    """Delete an author with no items."""

    author_rm_cmd(store_from_url=_store, api_url=api_url, author_id=author_id)


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""

    config_show_cmd()


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Config key"),
    value: str = typer.Argument(..., help="Value (parsed as JSON when possible)"),
) -> None:
    """Persist a config value."""

    config_set_cmd(key=key, value=value)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
