from __future__ import annotations

from dataclasses import replace

from .types import Accordion, Author, CategoryView, ViewModel


def filter_view(view: ViewModel, query: str) -> ViewModel:
    """Case-insensitive substring filter over category names and item text.

    A category survives when its name matches or when at least one of its
    accordions matches on title or content; only matching accordions are kept.
    """
    needle = query.strip().casefold()
    if not needle:
        return view
    categories: list[CategoryView] = []
    for category in view.categories:
        matches = [
            acc
            for acc in category.accordions
            if needle in acc.title.casefold() or needle in acc.content.casefold()
        ]
        if needle in category.name.casefold() or matches:
            categories.append(replace(category, accordions=matches))
    return ViewModel(categories=categories, authors=view.authors)


def pinned_first(view: ViewModel) -> ViewModel:
    ordered = sorted(view.categories, key=lambda category: not category.pinned)
    return ViewModel(categories=ordered, authors=view.authors)


def find_accordion(view: ViewModel, accordion_id: int) -> Accordion | None:
    for category in view.categories:
        for acc in category.accordions:
            if acc.id == accordion_id:
                return acc
    return None


def find_category(view: ViewModel, category_id: int) -> CategoryView | None:
    for category in view.categories:
        if category.id == category_id:
            return category
    return None


def find_author(view: ViewModel, author_id: int) -> Author | None:
    for author in view.authors:
        if author.id == author_id:
            return author
    return None


def stats(view: ViewModel) -> dict[str, int]:
    return {
        "categories": len(view.categories),
        "accordions": sum(len(category.accordions) for category in view.categories),
        "authors": len(view.authors),
        "pinned": sum(1 for category in view.categories if category.pinned),
    }
