from __future__ import annotations

import logging
import time

import pytest

from accordion_store.config import AccordionConfig
from accordion_store.store import AccordionStore


def _seed_basic(fake_rest) -> None:
    fake_rest.seed("categories", {"id": "1", "name": "Work"}, {"id": 2, "name": "Home"})
    fake_rest.seed("authors", {"id": "7", "name": "Ana", "color": "#f00"})
    fake_rest.seed(
        "accordions",
        {"id": "10", "title": "Note", "content": "Body", "categoryId": "1", "authorId": "7"},
        {"id": 11, "title": "List", "content": "Eggs", "categoryId": 2, "authorId": 7},
    )


def test_load_coerces_string_ids_and_joins(store: AccordionStore, fake_rest) -> None:
    _seed_basic(fake_rest)

    assert store.load() is True

    work, home = store.view.categories
    assert (work.id, work.name) == (1, "Work")
    assert [(a.id, a.category_id, a.author_id) for a in work.accordions] == [(10, 1, 7)]
    assert [a.id for a in home.accordions] == [11]
    assert store.view.authors[0].id == 7
    assert store.load_error is None
    assert store.last_repair.clean


def test_load_fetches_each_collection_once(store: AccordionStore, fake_rest) -> None:
    store.load()
    assert sorted(fake_rest.requests) == [
        ("GET", "/accordions"),
        ("GET", "/authors"),
        ("GET", "/categories"),
    ]


def test_load_deletes_orphans_and_reports_them(
    store: AccordionStore, fake_rest, caplog: pytest.LogCaptureFixture
) -> None:
    _seed_basic(fake_rest)
    fake_rest.seed(
        "accordions",
        {"id": 12, "title": "Lost", "content": "x", "categoryId": 99, "authorId": 7},
        {"id": 13, "title": "Anon", "content": "y", "categoryId": 1, "authorId": 42},
        {"id": 14, "title": "Junk", "content": "z", "categoryId": "abc", "authorId": 7},
    )

    with caplog.at_level(logging.WARNING, logger="accordion_store"):
        assert store.load() is True

    assert ("DELETE", "/accordions/12") in fake_rest.requests
    assert ("DELETE", "/accordions/13") in fake_rest.requests
    assert ("DELETE", "/accordions/14") in fake_rest.requests
    remaining = {str(a["id"]) for a in fake_rest.collections["accordions"]}
    assert remaining == {"10", "11"}

    report = store.last_repair
    assert {o.accordion_id: o.reason for o in report.orphans} == {
        12: "missing category",
        13: "missing author",
        14: "missing category",
    }
    assert sorted(report.deleted) == [12, 13, 14]
    assert "deleting accordion 12" in caplog.text

    shown = {a.id for a in store.view.accordions()}
    assert shown == {10, 11}


def test_no_orphan_survives_a_load(store: AccordionStore, fake_rest) -> None:
    _seed_basic(fake_rest)
    fake_rest.seed(
        "accordions",
        {"id": 20, "title": "t", "content": "c", "categoryId": 0, "authorId": 0},
        {"id": 21, "title": "t", "content": "c", "authorId": 7},
    )

    store.load()

    category_ids = {c.id for c in store.view.categories}
    author_ids = {a.id for a in store.view.authors}
    for acc in store.view.accordions():
        assert acc.category_id in category_ids
        assert acc.author_id in author_ids


def test_orphan_delete_failure_is_logged_not_raised(store: AccordionStore, fake_rest) -> None:
    _seed_basic(fake_rest)
    fake_rest.seed(
        "accordions",
        {"id": 12, "title": "Lost", "content": "x", "categoryId": 99, "authorId": 7},
    )
    fake_rest.fail[("DELETE", "/accordions/12")] = 500

    assert store.load() is True

    assert store.last_repair.failed == [12]
    assert 12 not in {a.id for a in store.view.accordions()}


def test_repair_disabled_hides_orphans_without_deleting(fake_rest) -> None:
    _seed_basic(fake_rest)
    fake_rest.seed(
        "accordions",
        {"id": 12, "title": "Lost", "content": "x", "categoryId": 99, "authorId": 7},
    )
    store = AccordionStore(fake_rest.url, config=AccordionConfig(repair_orphans=False))

    assert store.load() is True

    assert fake_rest.writes() == []
    assert [o.accordion_id for o in store.last_repair.orphans] == [12]
    assert store.last_repair.deleted == []
    assert 12 not in {a.id for a in store.view.accordions()}


def test_records_without_usable_id_are_ignored(store: AccordionStore, fake_rest) -> None:
    fake_rest.seed("categories", {"id": "abc", "name": "Broken"}, {"id": 3, "name": "Ok"})

    store.load()

    assert [c.name for c in store.view.categories] == ["Ok"]


def test_load_failure_empties_model_without_raising(store: AccordionStore, fake_rest) -> None:
    _seed_basic(fake_rest)
    assert store.load() is True
    fake_rest.fail[("GET", "/authors")] = 500

    assert store.refresh() is False

    assert store.view.categories == []
    assert store.view.authors == []
    assert store.load_error
    assert store.loaded is False


def test_load_failure_when_payload_is_not_a_list(store: AccordionStore, fake_rest) -> None:
    _seed_basic(fake_rest)
    fake_rest.responses[("GET", "/authors")] = (200, {"authors": []})

    assert store.load() is False
    assert store.view.categories == []
    assert fake_rest.writes() == []


def test_load_returns_false_on_malformed_http(raw_server) -> None:
    store = AccordionStore(
        raw_server(b"garbage\r\n\r\n"), config=AccordionConfig(request_timeout_s=2.0)
    )

    assert store.load() is False
    assert store.load_error
    assert store.view.categories == []


def test_load_gives_up_on_a_silent_store(raw_server) -> None:
    store = AccordionStore(raw_server(None), config=AccordionConfig(request_timeout_s=0.5))

    started = time.monotonic()
    assert store.load() is False
    assert time.monotonic() - started < 5.0
    assert store.loaded is False
