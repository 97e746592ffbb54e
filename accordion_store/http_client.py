from __future__ import annotations

import json
from http.client import HTTPConnection, HTTPSConnection
from typing import Any
from urllib.parse import urlparse

JsonPayload = dict[str, Any] | list[Any]


def build_base_url(address: str) -> str:
    trimmed = address.strip().rstrip("/")
    if not trimmed:
        return ""
    if "://" in trimmed:
        return trimmed
    return f"http://{trimmed}"


def request_json(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    body: JsonPayload | None = None,
    timeout_s: float = 5.0,
) -> tuple[int, JsonPayload | None]:
    parsed = urlparse(url)
    if not parsed.hostname:
        raise ValueError("missing hostname")
    if parsed.scheme == "https":
        conn = HTTPSConnection(parsed.hostname, parsed.port or 443, timeout=timeout_s)
    else:
        conn = HTTPConnection(parsed.hostname, parsed.port or 80, timeout=timeout_s)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    body_bytes = None
    if body is not None:
        body_bytes = json.dumps(body, ensure_ascii=False).encode("utf-8")
    request_headers = {"Accept": "application/json"}
    if body_bytes is not None:
        request_headers["Content-Type"] = "application/json"
        request_headers["Content-Length"] = str(len(body_bytes))
    if headers:
        request_headers.update(headers)
    try:
        conn.request(method, path, body=body_bytes, headers=request_headers)
        resp = conn.getresponse()
        status = int(resp.status)
        raw = resp.read()
    finally:
        conn.close()
    return status, _decode_payload(raw)


def _decode_payload(raw: bytes) -> JsonPayload | None:
    # Error bodies that are not JSON still surface as {"error": ...} for the caller.
    if not raw:
        return None
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        snippet = raw[:240].decode("utf-8", errors="replace").strip()
        return {"error": f"non_json_response: {snippet}" if snippet else "non_json_response"}
    if isinstance(payload, (dict, list)):
        return payload
    return {"error": f"unexpected_json_type: {type(payload).__name__}"}
