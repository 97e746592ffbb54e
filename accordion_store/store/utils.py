from __future__ import annotations

import datetime as dt
from collections.abc import Iterable


def to_int(value: object) -> int:
    """Coerce a wire id (int or numeric string) to int; anything else is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return 0
    return 0


def next_id(ids: Iterable[object]) -> int:
    valid = [n for n in (to_int(value) for value in ids) if n > 0]
    return max(valid) + 1 if valid else 1


def now_iso() -> str:
    return dt.datetime.now(dt.UTC).isoformat()


def name_key(value: str) -> str:
    return value.strip().casefold()


def clean_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
