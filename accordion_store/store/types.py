from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .utils import to_int


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


@dataclass
class Category:
    id: int
    name: str
    description: str | None = None
    pinned: bool = False
    created_at: str | None = None
    version: int = 0

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Category:
        return cls(
            id=to_int(data.get("id")),
            name=str(data.get("name") or ""),
            description=_optional_str(data.get("description")),
            pinned=data.get("pinned") is True,
            created_at=_optional_str(data.get("createdAt")),
            version=to_int(data.get("version")),
        )

    def to_wire(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "pinned": self.pinned,
            "version": self.version,
        }
        if self.description is not None:
            record["description"] = self.description
        if self.created_at is not None:
            record["createdAt"] = self.created_at
        return record


@dataclass
class Accordion:
    id: int
    title: str
    content: str
    category_id: int
    author_id: int
    created_at: str | None = None
    version: int = 0

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Accordion:
        return cls(
            id=to_int(data.get("id")),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            category_id=to_int(data.get("categoryId")),
            author_id=to_int(data.get("authorId")),
            created_at=_optional_str(data.get("createdAt")),
            version=to_int(data.get("version")),
        )

    def to_wire(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "categoryId": self.category_id,
            "authorId": self.author_id,
            "version": self.version,
        }
        if self.created_at is not None:
            record["createdAt"] = self.created_at
        return record


@dataclass
class Author:
    id: int
    name: str
    color: str
    created_at: str | None = None
    version: int = 0

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Author:
        return cls(
            id=to_int(data.get("id")),
            name=str(data.get("name") or ""),
            color=str(data.get("color") or ""),
            created_at=_optional_str(data.get("createdAt")),
            version=to_int(data.get("version")),
        )

    def to_wire(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "version": self.version,
        }
        if self.created_at is not None:
            record["createdAt"] = self.created_at
        return record


@dataclass
class CategoryView(Category):
    accordions: list[Accordion] = field(default_factory=list)

    def category(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            description=self.description,
            pinned=self.pinned,
            created_at=self.created_at,
            version=self.version,
        )


@dataclass
class ViewModel:
    categories: list[CategoryView] = field(default_factory=list)
    authors: list[Author] = field(default_factory=list)

    def accordions(self) -> list[Accordion]:
        return [acc for category in self.categories for acc in category.accordions]


@dataclass
class Orphan:
    accordion_id: int
    category_id: int
    author_id: int
    reason: str


@dataclass
class RepairReport:
    orphans: list[Orphan] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.orphans
