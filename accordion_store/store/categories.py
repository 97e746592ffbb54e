from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ..errors import PinLimitError, ValidationError
from . import writes
from .types import Category
from .utils import clean_text, name_key, now_iso, to_int

if TYPE_CHECKING:
    from ._store import AccordionStore


def validate_category_name(
    store: AccordionStore, name: str, *, exclude_id: int | None = None
) -> str:
    cleaned = clean_text(name)
    if not cleaned:
        raise ValidationError("category name is required")
    key = name_key(cleaned)
    for category in store.view.categories:
        if category.id == exclude_id:
            continue
        if name_key(category.name) == key:
            raise ValidationError(f"category {category.name!r} already exists")
    return cleaned


def _check_pin_limit(store: AccordionStore) -> None:
    if store.pinned_count() >= store.max_pinned:
        raise PinLimitError(store.max_pinned)


def create_category(
    store: AccordionStore,
    name: str,
    *,
    description: str | None = None,
    pinned: bool = False,
) -> Category:
    cleaned = validate_category_name(store, name)
    if pinned:
        _check_pin_limit(store)
    record = Category(
        id=0,
        name=cleaned,
        description=description,
        pinned=pinned,
        created_at=now_iso(),
    ).to_wire()
    with writes.reload_after(store, "create category"):
        created = writes.create_record(store, "categories", record)
    return Category.from_wire(created)


def update_category(
    store: AccordionStore,
    category_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    pinned: bool | None = None,
) -> Category:
    category_id = to_int(category_id)
    current = store.get_category(category_id)
    if current is None:
        raise ValidationError(f"category {category_id} not found")
    updated = current.category()
    if name is not None:
        updated = replace(updated, name=validate_category_name(store, name, exclude_id=category_id))
    if description is not None:
        # An empty description clears it.
        updated = replace(updated, description=clean_text(description) or None)
    if pinned is not None:
        if pinned and not current.pinned:
            _check_pin_limit(store)
        updated = replace(updated, pinned=pinned)
    with writes.reload_after(store, f"update category {category_id}"):
        saved = writes.replace_record(store, "categories", current.version, updated.to_wire())
    return Category.from_wire(saved)


def delete_category(store: AccordionStore, category_id: int) -> int:
    """Delete a category and every accordion filed under it.

    Children are looked up on the server rather than in the snapshot so that
    items created since the last reload are removed too. Returns the number of
    accordions deleted.
    """
    category_id = to_int(category_id)
    if store.get_category(category_id) is None:
        raise ValidationError(f"category {category_id} not found")
    with writes.reload_after(store, f"delete category {category_id}"):
        children = [
            to_int(item.get("id"))
            for item in store.client.list("accordions")
            if to_int(item.get("categoryId")) == category_id
        ]
        children = [child for child in children if child > 0]
        writes.delete_many(store, "accordions", children)
        store.client.delete("categories", category_id)
    return len(children)


def toggle_pin(store: AccordionStore, category_id: int) -> Category:
    category_id = to_int(category_id)
    current = store.get_category(category_id)
    if current is None:
        raise ValidationError(f"category {category_id} not found")
    if not current.pinned:
        _check_pin_limit(store)
    return update_category(store, category_id, pinned=not current.pinned)
