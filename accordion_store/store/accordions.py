from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..errors import ValidationError
from . import writes
from .categories import create_category, validate_category_name
from .types import Accordion
from .utils import clean_text, now_iso, to_int

if TYPE_CHECKING:
    from ._store import AccordionStore


def _require_text(value: str, field: str) -> str:
    cleaned = clean_text(value)
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned


def _require_category(store: AccordionStore, category_id: int) -> int:
    category_id = to_int(category_id)
    if category_id <= 0 or store.get_category(category_id) is None:
        raise ValidationError(f"category {category_id} does not exist")
    return category_id


def _require_author(store: AccordionStore, author_id: int) -> int:
    author_id = to_int(author_id)
    if author_id <= 0 or store.get_author(author_id) is None:
        raise ValidationError(f"author {author_id} does not exist")
    return author_id


def create_accordion(
    store: AccordionStore,
    *,
    title: str,
    content: str,
    category_id: int,
    author_id: int,
) -> Accordion:
    record = Accordion(
        id=0,
        title=_require_text(title, "title"),
        content=_require_text(content, "content"),
        category_id=_require_category(store, category_id),
        author_id=_require_author(store, author_id),
        created_at=now_iso(),
    ).to_wire()
    with writes.reload_after(store, "create accordion"):
        created = writes.create_record(store, "accordions", record)
    return Accordion.from_wire(created)


def update_accordion(
    store: AccordionStore,
    accordion_id: int,
    *,
    title: str | None = None,
    content: str | None = None,
    category_id: int | None = None,
    author_id: int | None = None,
) -> Accordion:
    """Merge the given fields over the last loaded record and PUT the result.

    Moving to another category is a plain ``category_id`` change.
    """
    accordion_id = to_int(accordion_id)
    current = store.find_accordion(accordion_id)
    if current is None:
        raise ValidationError(f"accordion {accordion_id} not found")
    updated = current
    if title is not None:
        updated = replace(updated, title=_require_text(title, "title"))
    if content is not None:
        updated = replace(updated, content=_require_text(content, "content"))
    if category_id is not None:
        updated = replace(updated, category_id=_require_category(store, category_id))
    if author_id is not None:
        updated = replace(updated, author_id=_require_author(store, author_id))
    with writes.reload_after(store, f"update accordion {accordion_id}"):
        saved = writes.replace_record(store, "accordions", current.version, updated.to_wire())
    return Accordion.from_wire(saved)


def delete_accordion(store: AccordionStore, accordion_id: int) -> None:
    accordion_id = to_int(accordion_id)
    if store.find_accordion(accordion_id) is None:
        raise ValidationError(f"accordion {accordion_id} not found")
    with writes.reload_after(store, f"delete accordion {accordion_id}"):
        store.client.delete("accordions", accordion_id)


def create_accordion_in_new_category(
    store: AccordionStore,
    *,
    category_name: str,
    title: str,
    content: str,
    author_id: int,
    description: str | None = None,
) -> Accordion:
    # Validate everything up front so a bad item does not leave an empty category behind.
    validate_category_name(store, category_name)
    _require_text(title, "title")
    _require_text(content, "content")
    _require_author(store, author_id)
    category = create_category(store, category_name, description=description)
    return create_accordion(
        store,
        title=title,
        content=content,
        category_id=category.id,
        author_id=author_id,
    )
