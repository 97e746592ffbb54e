from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from ..errors import ConflictError, StoreError, StoreHTTPError
from .utils import next_id, to_int

if TYPE_CHECKING:
    from ._store import AccordionStore

logger = logging.getLogger(__name__)

MAX_DELETE_WORKERS = 8


@contextlib.contextmanager
def reload_after(store: AccordionStore, action: str) -> Iterator[None]:
    """Run a write, then reload the snapshot whether or not the write succeeded."""
    try:
        yield
    except StoreError as exc:
        logger.warning("%s failed: %s", action, exc)
        raise
    finally:
        store.load()


def create_record(store: AccordionStore, collection: str, record: dict[str, Any]) -> dict[str, Any]:
    existing = store.client.list(collection)
    record = {**record, "id": next_id(item.get("id") for item in existing)}
    try:
        created = store.client.create(collection, record)
    except StoreHTTPError as exc:
        if exc.status == 409:
            raise ConflictError(collection, record["id"], "id already taken") from exc
        raise
    if to_int(created.get("id")) <= 0:
        created = {**created, "id": record["id"]}
    return created


def replace_record(
    store: AccordionStore, collection: str, known_version: int, record: dict[str, Any]
) -> dict[str, Any]:
    record_id = to_int(record.get("id"))
    remote = store.client.get(collection, record_id)
    remote_version = to_int(remote.get("version"))
    if remote_version != known_version:
        raise ConflictError(
            collection,
            record_id,
            f"changed remotely (version {remote_version}, expected {known_version})",
        )
    record = {**record, "version": known_version + 1}
    try:
        return store.client.replace(collection, record_id, record)
    except StoreHTTPError as exc:
        if exc.status in {409, 412}:
            raise ConflictError(collection, record_id, "rejected as stale") from exc
        raise


def delete_many(store: AccordionStore, collection: str, record_ids: Sequence[int]) -> None:
    if not record_ids:
        return
    workers = min(MAX_DELETE_WORKERS, len(record_ids))
    errors: list[StoreHTTPError] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(store.client.delete, collection, rid) for rid in record_ids]
        for future in futures:
            try:
                future.result()
            except StoreHTTPError as exc:
                errors.append(exc)
    if errors:
        raise errors[0]
