"""Record types returned by the access functions."""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Note:
    """A free-form note. ``created_at`` is assigned by the store."""

    id: int
    title: str
    content: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Note:
        return cls(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Product:
    """An inventory product. ``id`` is a UUID4 string assigned on create."""

    id: str
    name: str
    category: str
    quantity: int
    price: float
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Product:
        return cls(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            quantity=row["quantity"],
            price=row["price"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Category:
    """Product count for one category."""

    name: str
    count: int

    def to_dict(self) -> dict:
        return asdict(self)
