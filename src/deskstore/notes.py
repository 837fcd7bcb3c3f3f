"""Note access functions — one statement per call, run under the handle's lock."""

from __future__ import annotations

import logging

from deskstore.errors import not_found, translate_errors
from deskstore.models import Note
from deskstore.storage.connection import Database

logger = logging.getLogger(__name__)

_NOTE_COLUMNS = "id, title, content, created_at"


def create_note(db: Database, title: str, content: str) -> int:
    """Insert a note and return its newly assigned id."""
    with translate_errors(), db.transaction() as conn:
        cursor = conn.execute(
            "INSERT INTO notes (title, content) VALUES (?, ?)",
            (title, content),
        )
        note_id = cursor.lastrowid
    logger.debug("Created note %d", note_id)
    return note_id


def update_note(db: Database, note_id: int, title: str, content: str) -> int:
    """Overwrite a note's title and content. Returns the affected row count.

    Raises StoreError(NOT_FOUND) when no note has ``note_id``.
    """
    with translate_errors(), db.transaction() as conn:
        cursor = conn.execute(
            "UPDATE notes SET title = ?, content = ? WHERE id = ?",
            (title, content, note_id),
        )
        updated = cursor.rowcount
    if updated == 0:
        raise not_found("Note not found")
    return updated


def get_note(db: Database, note_id: int) -> Note | None:
    """Return the note with ``note_id``, or None if there is none."""
    with translate_errors(), db.transaction() as conn:
        row = conn.execute(
            f"SELECT {_NOTE_COLUMNS} FROM notes WHERE id = ?",  # noqa: S608
            (note_id,),
        ).fetchone()
    return Note.from_row(row) if row else None


def list_notes(db: Database) -> list[Note]:
    """Return every note in insertion order."""
    with translate_errors(), db.transaction() as conn:
        rows = conn.execute(
            f"SELECT {_NOTE_COLUMNS} FROM notes ORDER BY id"  # noqa: S608
        ).fetchall()
    return [Note.from_row(row) for row in rows]
