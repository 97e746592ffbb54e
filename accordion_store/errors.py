from __future__ import annotations


class StoreError(Exception):
    """Base class for errors raised by the accordion store."""


class StoreHTTPError(StoreError):
    """A request to the backing store failed.

    ``status`` is the HTTP status code, or 0 when the request never got a
    response (connection refused, timeout, malformed reply).
    """

    def __init__(self, action: str, status: int, detail: str | None = None) -> None:
        self.action = action
        self.status = status
        self.detail = detail
        message = f"{action} failed: {status}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ValidationError(StoreError):
    """Input rejected before any request was sent."""


class PinLimitError(ValidationError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"at most {limit} categories can be pinned")


class ConflictError(StoreError):
    """The remote record changed underneath us, or an id was already taken."""

    def __init__(self, collection: str, record_id: int, reason: str) -> None:
        self.collection = collection
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"{collection}/{record_id}: {reason}")
