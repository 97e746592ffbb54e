from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..errors import ValidationError
from . import writes
from .types import Author
from .utils import clean_text, name_key, now_iso, to_int

if TYPE_CHECKING:
    from ._store import AccordionStore


def validate_author_name(store: AccordionStore, name: str, *, exclude_id: int | None = None) -> str:
    cleaned = clean_text(name)
    if not cleaned:
        raise ValidationError("author name is required")
    key = name_key(cleaned)
    for author in store.view.authors:
        if author.id != exclude_id and name_key(author.name) == key:
            raise ValidationError(f"author {author.name!r} already exists")
    return cleaned


def create_author(store: AccordionStore, name: str, *, color: str | None = None) -> Author:
    record = Author(
        id=0,
        name=validate_author_name(store, name),
        color=clean_text(color) or store.default_author_color,
        created_at=now_iso(),
    ).to_wire()
    with writes.reload_after(store, "create author"):
        created = writes.create_record(store, "authors", record)
    return Author.from_wire(created)


def update_author(
    store: AccordionStore,
    author_id: int,
    *,
    name: str | None = None,
    color: str | None = None,
) -> Author:
    author_id = to_int(author_id)
    current = store.get_author(author_id)
    if current is None:
        raise ValidationError(f"author {author_id} not found")
    updated = current
    if name is not None:
        updated = replace(updated, name=validate_author_name(store, name, exclude_id=author_id))
    if color is not None:
        updated = replace(updated, color=clean_text(color) or store.default_author_color)
    with writes.reload_after(store, f"update author {author_id}"):
        saved = writes.replace_record(store, "authors", current.version, updated.to_wire())
    return Author.from_wire(saved)


def delete_author(store: AccordionStore, author_id: int) -> None:
    author_id = to_int(author_id)
    if store.get_author(author_id) is None:
        raise ValidationError(f"author {author_id} not found")
    in_use = [acc.id for acc in store.view.accordions() if acc.author_id == author_id]
    if in_use:
        raise ValidationError(f"author {author_id} is referenced by {len(in_use)} accordion(s)")
    with writes.reload_after(store, f"delete author {author_id}"):
        store.client.delete("authors", author_id)
