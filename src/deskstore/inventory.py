"""Product access functions for the inventory store."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from deskstore.errors import not_found, translate_errors
from deskstore.models import Category, Product
from deskstore.storage.connection import Database

logger = logging.getLogger(__name__)

_PRODUCT_COLUMNS = "id, name, category, quantity, price, created_at, updated_at"

PRODUCT_NOT_FOUND = "Product not found"


def _utcnow() -> str:
    # Fixed-width so stored timestamps sort lexicographically
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def create_product(
    db: Database, name: str, category: str, quantity: int, price: float
) -> Product:
    """Persist a new product with a fresh UUID and identical timestamps."""
    now = _utcnow()
    product = Product(
        id=str(uuid.uuid4()),
        name=name,
        category=category,
        quantity=quantity,
        price=price,
        created_at=now,
        updated_at=now,
    )
    with translate_errors(), db.transaction() as conn:
        conn.execute(
            "INSERT INTO products "
            "(id, name, category, quantity, price, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                product.id,
                product.name,
                product.category,
                product.quantity,
                product.price,
                product.created_at,
                product.updated_at,
            ),
        )
    logger.debug("Created product %s", product.id)
    return product


def list_products(db: Database, category: str | None = None) -> list[Product]:
    """Return products, newest first.

    With ``category``, only exact (case-sensitive) matches are returned,
    ordered by name.
    """
    with translate_errors(), db.transaction() as conn:
        if category is None:
            rows = conn.execute(
                f"SELECT {_PRODUCT_COLUMNS} FROM products "  # noqa: S608
                "ORDER BY created_at DESC"
            ).fetchall()
        else:
            rows = conn.execute(
                f"SELECT {_PRODUCT_COLUMNS} FROM products "  # noqa: S608
                "WHERE category = ? ORDER BY name",
                (category,),
            ).fetchall()
    return [Product.from_row(row) for row in rows]


def get_product(db: Database, product_id: str) -> Product:
    """Return the product with ``product_id``. Raises StoreError(NOT_FOUND) if absent."""
    with translate_errors(), db.transaction() as conn:
        row = conn.execute(
            f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = ?",  # noqa: S608
            (product_id,),
        ).fetchone()
    if row is None:
        raise not_found(PRODUCT_NOT_FOUND)
    return Product.from_row(row)


def list_categories(db: Database) -> list[Category]:
    """Return product counts per category, largest first."""
    with translate_errors(), db.transaction() as conn:
        rows = conn.execute(
            "SELECT category, COUNT(*) AS count FROM products "
            "GROUP BY category ORDER BY count DESC, category"
        ).fetchall()
    return [Category(name=row["category"], count=row["count"]) for row in rows]


def update_product(
    db: Database,
    product_id: str,
    name: str,
    category: str,
    quantity: int,
    price: float,
) -> None:
    """Rewrite every mutable field and refresh updated_at."""
    now = _utcnow()
    with translate_errors(), db.transaction() as conn:
        cursor = conn.execute(
            "UPDATE products SET name = ?, category = ?, quantity = ?, price = ?, "
            "updated_at = ? WHERE id = ?",
            (name, category, quantity, price, now, product_id),
        )
        updated = cursor.rowcount
    if updated == 0:
        raise not_found(PRODUCT_NOT_FOUND)
    logger.debug("Updated product %s", product_id)


def delete_product(db: Database, product_id: str) -> None:
    """Remove a product permanently."""
    with translate_errors(), db.transaction() as conn:
        cursor = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        deleted = cursor.rowcount
    if deleted == 0:
        raise not_found(PRODUCT_NOT_FOUND)
    logger.debug("Deleted product %s", product_id)
