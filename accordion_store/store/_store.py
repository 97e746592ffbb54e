from __future__ import annotations

from ..config import AccordionConfig, load_config
from ..rest import RestClient
from . import accordions as store_accordions
from . import authors as store_authors
from . import categories as store_categories
from . import load as store_load
from . import views as store_views
from .types import Accordion, Author, Category, CategoryView, RepairReport, ViewModel
from .utils import to_int


class AccordionStore:
    """In-memory snapshot of the remote store plus the mutators that write to it.

    Every mutator finishes with a full reload, so ``view`` always reflects the
    server after a write. The whole dataset is refetched each time; fine for a
    personal note collection, not for large ones.
    """

    def __init__(
        self,
        api_url: str | None = None,
        *,
        config: AccordionConfig | None = None,
        client: RestClient | None = None,
    ) -> None:
        cfg = config or load_config()
        self.config = cfg
        self.client = client or RestClient(api_url or cfg.api_url, timeout_s=cfg.request_timeout_s)
        self.max_pinned = int(cfg.max_pinned)
        self.repair_orphans = bool(cfg.repair_orphans)
        self.default_author_color = cfg.default_author_color
        self._view = ViewModel()
        self.loaded = False
        self.load_error: str | None = None
        self.last_repair = RepairReport()

    @property
    def view(self) -> ViewModel:
        return self._view

    def load(self) -> bool:
        return store_load.load(self)

    def refresh(self) -> bool:
        return self.load()

    def close(self) -> None:
        self._view = ViewModel()
        self.loaded = False

    def filter(self, query: str) -> ViewModel:
        return store_views.filter_view(self._view, query)

    def pinned_first(self, query: str = "") -> ViewModel:
        return store_views.pinned_first(self.filter(query))

    def stats(self) -> dict[str, int]:
        return store_views.stats(self._view)

    def pinned_count(self) -> int:
        return sum(1 for category in self._view.categories if category.pinned)

    def find_accordion(self, accordion_id: int) -> Accordion | None:
        return store_views.find_accordion(self._view, to_int(accordion_id))

    def get_category(self, category_id: int) -> CategoryView | None:
        return store_views.find_category(self._view, to_int(category_id))

    def get_author(self, author_id: int) -> Author | None:
        return store_views.find_author(self._view, to_int(author_id))

    def create_category(
        self, name: str, *, description: str | None = None, pinned: bool = False
    ) -> Category:
        return store_categories.create_category(
            self, name, description=description, pinned=pinned
        )

    def update_category(
        self,
        category_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        pinned: bool | None = None,
    ) -> Category:
        return store_categories.update_category(
            self, category_id, name=name, description=description, pinned=pinned
        )

    def delete_category(self, category_id: int) -> int:
        return store_categories.delete_category(self, category_id)

    def toggle_pin(self, category_id: int) -> Category:
        return store_categories.toggle_pin(self, category_id)

    def create_accordion(
        self, *, title: str, content: str, category_id: int, author_id: int
    ) -> Accordion:
        return store_accordions.create_accordion(
            self, title=title, content=content, category_id=category_id, author_id=author_id
        )

    def create_accordion_in_new_category(
        self,
        *,
        category_name: str,
        title: str,
        content: str,
        author_id: int,
        description: str | None = None,
    ) -> Accordion:
        return store_accordions.create_accordion_in_new_category(
            self,
            category_name=category_name,
            title=title,
            content=content,
            author_id=author_id,
            description=description,
        )

    def update_accordion(
        self,
        accordion_id: int,
        *,
        title: str | None = None,
        content: str | None = None,
        category_id: int | None = None,
        author_id: int | None = None,
    ) -> Accordion:
        return store_accordions.update_accordion(
            self,
            accordion_id,
            title=title,
            content=content,
            category_id=category_id,
            author_id=author_id,
        )

    def delete_accordion(self, accordion_id: int) -> None:
        store_accordions.delete_accordion(self, accordion_id)

    def create_author(self, name: str, *, color: str | None = None) -> Author:
        return store_authors.create_author(self, name, color=color)

    def update_author(
        self, author_id: int, *, name: str | None = None, color: str | None = None
    ) -> Author:
        return store_authors.update_author(self, author_id, name=name, color=color)

    def delete_author(self, author_id: int) -> None:
        store_authors.delete_author(self, author_id)
