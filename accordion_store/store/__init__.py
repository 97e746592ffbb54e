from __future__ import annotations

from ._store import AccordionStore
from .types import (
    Accordion,
    Author,
    Category,
    CategoryView,
    Orphan,
    RepairReport,
    ViewModel,
)
from .utils import next_id, to_int
from .views import filter_view, pinned_first

__all__ = [
    "Accordion",
    "AccordionStore",
    "Author",
    "Category",
    "CategoryView",
    "Orphan",
    "RepairReport",
    "ViewModel",
    "filter_view",
    "next_id",
    "pinned_first",
    "to_int",
]
