from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Any

from . import http_client
from .errors import StoreHTTPError

logger = logging.getLogger(__name__)

COLLECTIONS = ("categories", "accordions", "authors")


def _error_detail(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    reason = payload.get("reason")
    if isinstance(error, str) and isinstance(reason, str):
        return f"{error}:{reason}"
    if isinstance(error, str):
        return error
    return None


def _ok(status: int) -> bool:
    return 200 <= status < 300


class RestClient:
    """Thin JSON client for a json-server style REST store."""

    def __init__(self, base_url: str, *, timeout_s: float = 5.0) -> None:
        self.base_url = http_client.build_base_url(base_url)
        if not self.base_url:
            raise ValueError("api url is empty")
        self.timeout_s = timeout_s

    def _url(self, collection: str, record_id: int | None = None) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"unknown collection: {collection}")
        if record_id is None:
            return f"{self.base_url}/{collection}"
        return f"{self.base_url}/{collection}/{record_id}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        action: str,
        body: dict[str, Any] | None = None,
    ) -> tuple[int, Any]:
        try:
            status, payload = http_client.request_json(
                method, url, body=body, timeout_s=self.timeout_s
            )
        except (OSError, HTTPException, ValueError) as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise StoreHTTPError(action, 0, str(exc)) from exc
        logger.debug("%s %s -> %s", method, url, status)
        if not _ok(status):
            raise StoreHTTPError(action, status, _error_detail(payload))
        return status, payload

    def list(self, collection: str) -> list[dict[str, Any]]:
        _, payload = self._request("GET", self._url(collection), action=f"list {collection}")
        if not isinstance(payload, list):
            raise StoreHTTPError(f"list {collection}", 0, "expected a json array")
        return [item for item in payload if isinstance(item, dict)]

    def get(self, collection: str, record_id: int) -> dict[str, Any]:
        _, payload = self._request(
            "GET", self._url(collection, record_id), action=f"get {collection}/{record_id}"
        )
        if not isinstance(payload, dict):
            raise StoreHTTPError(f"get {collection}/{record_id}", 0, "expected a json object")
        return payload

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        _, payload = self._request(
            "POST", self._url(collection), action=f"create {collection}", body=record
        )
        return payload if isinstance(payload, dict) else dict(record)

    def replace(self, collection: str, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        _, payload = self._request(
            "PUT",
            self._url(collection, record_id),
            action=f"update {collection}/{record_id}",
            body=record,
        )
        return payload if isinstance(payload, dict) else dict(record)

    def delete(self, collection: str, record_id: int) -> None:
        self._request(
            "DELETE", self._url(collection, record_id), action=f"delete {collection}/{record_id}"
        )
