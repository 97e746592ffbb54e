from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from ..errors import StoreHTTPError
from ..rest import COLLECTIONS
from .types import Accordion, Author, Category, CategoryView, Orphan, RepairReport, ViewModel

if TYPE_CHECKING:
    from ._store import AccordionStore

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Could not load data from the store"


def fetch_collections(store: AccordionStore) -> dict[str, list[dict[str, Any]]]:
    with ThreadPoolExecutor(max_workers=len(COLLECTIONS)) as pool:
        futures = {name: pool.submit(store.client.list, name) for name in COLLECTIONS}
        return {name: future.result() for name, future in futures.items()}


def _valid_only(records: Sequence[Category | Accordion | Author], kind: str) -> list[Any]:
    kept = []
    for record in records:
        if record.id <= 0:
            logger.warning("ignoring %s record without a usable id", kind)
            continue
        kept.append(record)
    return kept


def find_orphans(
    categories: Sequence[Category],
    accordions: Sequence[Accordion],
    authors: Sequence[Author],
) -> list[Orphan]:
    category_ids = {category.id for category in categories}
    author_ids = {author.id for author in authors}
    orphans: list[Orphan] = []
    for acc in accordions:
        if acc.category_id <= 0 or acc.category_id not in category_ids:
            reason = "missing category"
        elif acc.author_id <= 0 or acc.author_id not in author_ids:
            reason = "missing author"
        else:
            continue
        orphans.append(
            Orphan(
                accordion_id=acc.id,
                category_id=acc.category_id,
                author_id=acc.author_id,
                reason=reason,
            )
        )
    return orphans


def repair_orphans(
    store: AccordionStore, orphans: Sequence[Orphan], *, delete: bool
) -> RepairReport:
    report = RepairReport(orphans=list(orphans))
    for orphan in orphans:
        if not delete:
            logger.warning(
                "accordion %s has %s (category=%s author=%s); hidden, not deleted",
                orphan.accordion_id,
                orphan.reason,
                orphan.category_id,
                orphan.author_id,
            )
            continue
        logger.warning(
            "deleting accordion %s: %s (category=%s author=%s)",
            orphan.accordion_id,
            orphan.reason,
            orphan.category_id,
            orphan.author_id,
        )
        try:
            store.client.delete("accordions", orphan.accordion_id)
        except StoreHTTPError as exc:
            logger.error("orphan cleanup for accordion %s failed: %s", orphan.accordion_id, exc)
            report.failed.append(orphan.accordion_id)
            continue
        report.deleted.append(orphan.accordion_id)
    return report


def build_view(
    categories: Sequence[Category],
    accordions: Sequence[Accordion],
    authors: Sequence[Author],
    *,
    exclude: set[int] | None = None,
) -> ViewModel:
    exclude = exclude or set()
    by_category: dict[int, list[Accordion]] = {category.id: [] for category in categories}
    for acc in accordions:
        if acc.id in exclude:
            continue
        bucket = by_category.get(acc.category_id)
        if bucket is not None:
            bucket.append(acc)
    views = [
        CategoryView(
            id=category.id,
            name=category.name,
            description=category.description,
            pinned=category.pinned,
            created_at=category.created_at,
            version=category.version,
            accordions=by_category[category.id],
        )
        for category in categories
    ]
    return ViewModel(categories=views, authors=list(authors))


def load(store: AccordionStore) -> bool:
    try:
        raw = fetch_collections(store)
    except StoreHTTPError as exc:
        logger.error("load failed: %s", exc)
        store._view = ViewModel()
        store.last_repair = RepairReport()
        store.load_error = LOAD_FAILED_MESSAGE
        store.loaded = False
        return False

    categories: list[Category] = _valid_only(
        [Category.from_wire(item) for item in raw["categories"]], "category"
    )
    authors: list[Author] = _valid_only(
        [Author.from_wire(item) for item in raw["authors"]], "author"
    )
    accordions: list[Accordion] = _valid_only(
        [Accordion.from_wire(item) for item in raw["accordions"]], "accordion"
    )

    orphans = find_orphans(categories, accordions, authors)
    store.last_repair = repair_orphans(store, orphans, delete=store.repair_orphans)
    store._view = build_view(
        categories,
        accordions,
        authors,
        exclude={orphan.accordion_id for orphan in orphans},
    )
    store.load_error = None
    store.loaded = True
    return True
