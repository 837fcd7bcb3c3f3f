"""Database schema definition and initialization."""

from __future__ import annotations

import logging
import sqlite3

from deskstore.errors import ErrorKind, StoreError
from deskstore.storage.connection import Database

logger = logging.getLogger(__name__)

_NOTES_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS notes (
    id          INTEGER PRIMARY KEY,
    title       TEXT NOT NULL,
    content     TEXT NOT NULL,
    created_at  DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""

_INVENTORY_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS products (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    category    TEXT NOT NULL,
    quantity    INTEGER NOT NULL,
    price       REAL NOT NULL,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""

# Created after migrations so idx_products_category never targets a missing column
_INVENTORY_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_products_name ON products(name)",
    "CREATE INDEX IF NOT EXISTS idx_products_category ON products(category)",
    "CREATE INDEX IF NOT EXISTS idx_products_quantity ON products(quantity)",
    "CREATE INDEX IF NOT EXISTS idx_products_price ON products(price)",
    "CREATE INDEX IF NOT EXISTS idx_products_created_at ON products(created_at)",
)

DEFAULT_CATEGORY = "uncategorized"


def _migrate_products_add_category(conn: sqlite3.Connection) -> None:
    """Add the category column to a products table created without one."""
    columns = {row["name"] for row in conn.execute("PRAGMA table_info(products)")}
    if "category" in columns:
        return
    conn.execute(
        "ALTER TABLE products ADD COLUMN category TEXT NOT NULL "
        f"DEFAULT '{DEFAULT_CATEGORY}'"
    )
    logger.info("Migrated products table: added category column")


def init_notes_db(db: Database) -> None:
    """Create the notes table if it does not already exist."""
    with db.transaction() as conn:
        conn.executescript(_NOTES_SCHEMA_SQL)
    logger.info("Notes database initialized at %s", db.path)


def init_inventory_db(db: Database) -> None:
    """Create the products table and indexes if they do not already exist.

    The migration and index DDL share one explicit transaction, so a failed
    index leaves a legacy table unmigrated.
    """
    with db.transaction() as conn:
        conn.executescript(_INVENTORY_SCHEMA_SQL)
        conn.execute("BEGIN")
        _migrate_products_add_category(conn)
        for statement in _INVENTORY_INDEXES:
            conn.execute(statement)
    logger.info("Inventory database initialized at %s", db.path)


def _open(path: str, wal: bool, init) -> Database:
    try:
        db = Database(path, wal=wal)
    except sqlite3.Error as exc:
        raise StoreError(
            ErrorKind.STORAGE_UNAVAILABLE, f"Failed to open database {path}: {exc}", cause=exc
        ) from exc
    try:
        init(db)
    except sqlite3.Error as exc:
        db.close()
        raise StoreError(
            ErrorKind.STORAGE_UNAVAILABLE, f"Failed to initialize database {path}: {exc}", cause=exc
        ) from exc
    return db


def open_notes_db(path: str = "notes.db", *, wal: bool = False) -> Database:
    """Open the notes store and make sure its schema exists."""
    return _open(path, wal, init_notes_db)


def open_inventory_db(path: str = "inventory.db", *, wal: bool = False) -> Database:
    """Open the inventory store and make sure its schema and indexes exist."""
    return _open(path, wal, init_inventory_db)
