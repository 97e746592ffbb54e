from __future__ import annotations

import json
import socket
import threading
from collections.abc import Callable, Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any

import pytest

from accordion_store.config import CONFIG_ENV_OVERRIDES, AccordionConfig
from accordion_store.store import AccordionStore


class FakeRestStore:
    """In-memory json-server lookalike: GET/POST/PUT/DELETE over three collections."""

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            "categories": [],
            "accordions": [],
            "authors": [],
        }
        self.requests: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], int] = {}
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self.lock = threading.Lock()
        self.url = ""

    def seed(self, collection: str, *records: dict[str, Any]) -> None:
        self.collections[collection].extend(dict(record) for record in records)

    def find(self, collection: str, record_id: str) -> dict[str, Any] | None:
        for record in self.collections[collection]:
            if str(record.get("id")) == record_id:
                return record
        return None

    def writes(self) -> list[tuple[str, str]]:
        return [req for req in self.requests if req[0] != "GET"]


def _build_handler(fake: FakeRestStore):
    class Handler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: Any) -> None:
            return

        def _send(self, payload: Any, status: int = 200) -> None:
            body = json.dumps(payload).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def _body(self) -> dict[str, Any]:
            length = int(self.headers.get("Content-Length", "0") or 0)
            raw = self.rfile.read(length) if length else b""
            return json.loads(raw.decode("utf-8")) if raw else {}

        def _route(self) -> tuple[str, str | None] | None:
            parts = [part for part in self.path.split("?")[0].split("/") if part]
            if not parts or parts[0] not in fake.collections or len(parts) > 2:
                return None
            return parts[0], parts[1] if len(parts) == 2 else None

        def _handle(self, method: str) -> None:
            body = self._body() if method in {"POST", "PUT"} else {}
            with fake.lock:
                fake.requests.append((method, self.path))
                status = fake.fail.get((method, self.path))
                if status is not None:
                    self._send({"error": "injected"}, status)
                    return
                canned = fake.responses.get((method, self.path))
                if canned is not None:
                    self._send(canned[1], canned[0])
                    return
                route = self._route()
                if route is None:
                    self._send({"error": "not_found"}, 404)
                    return
                collection, record_id = route
                records = fake.collections[collection]
                if method == "GET" and record_id is None:
                    self._send(records)
                    return
                if method == "POST" and record_id is None:
                    if "id" not in body:
                        ids = [int(r["id"]) for r in records if str(r.get("id")).isdigit()]
                        body["id"] = max(ids, default=0) + 1
                    if fake.find(collection, str(body["id"])) is not None:
                        self._send({"error": "duplicate_id"}, 409)
                        return
                    records.append(body)
                    self._send(body, 201)
                    return
                if record_id is None:
                    self._send({"error": "method_not_allowed"}, 405)
                    return
                current = fake.find(collection, record_id)
                if current is None:
                    self._send({}, 404)
                    return
                if method == "GET":
                    self._send(current)
                elif method == "PUT":
                    replaced = {**body, "id": current["id"]}
                    records[records.index(current)] = replaced
                    self._send(replaced)
                elif method == "DELETE":
                    records.remove(current)
                    self._send({})

        def do_GET(self) -> None:  # noqa: N802
            self._handle("GET")

        def do_POST(self) -> None:  # noqa: N802
            self._handle("POST")

        def do_PUT(self) -> None:  # noqa: N802
            self._handle("PUT")

        def do_DELETE(self) -> None:  # noqa: N802
            self._handle("DELETE")

    return Handler


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for env_var in CONFIG_ENV_OVERRIDES.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv("ACCORDION_CONFIG", str(tmp_path / "config.json"))


@pytest.fixture
def fake_rest() -> Iterator[FakeRestStore]:
    fake = FakeRestStore()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _build_handler(fake))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    fake.url = f"http://127.0.0.1:{server.server_address[1]}"
    try:
        yield fake
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def raw_server() -> Iterator[Callable[[bytes | None], str]]:
    """Start bare TCP listeners that answer with fixed bytes, or never answer (None)."""
    sockets: list[socket.socket] = []

    def start(reply: bytes | None) -> str:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(8)
        sockets.append(listener)

        def serve() -> None:
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError:
                    return
                sockets.append(conn)
                if reply is None:
                    continue
                conn.recv(65536)
                conn.sendall(reply)
                conn.close()

        threading.Thread(target=serve, daemon=True).start()
        return f"http://127.0.0.1:{listener.getsockname()[1]}"

    try:
        yield start
    finally:
        for sock in sockets:
            sock.close()


@pytest.fixture
def store(fake_rest: FakeRestStore) -> AccordionStore:
    return AccordionStore(fake_rest.url, config=AccordionConfig(request_timeout_s=2.0))
