"""Storage layer — SQLite connection handle and schema management."""

from deskstore.storage.connection import Database
from deskstore.storage.schema import (
    init_inventory_db,
    init_notes_db,
    open_inventory_db,
    open_notes_db,
)

__all__ = [
    "Database",
    "init_inventory_db",
    "init_notes_db",
    "open_inventory_db",
    "open_notes_db",
]
