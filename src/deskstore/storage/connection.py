"""SQLite connection handle shared by the access functions."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Generator

logger = logging.getLogger(__name__)


class Database:
    """One SQLite connection guarded by one lock.

    Constructed explicitly at startup and passed into every access function.
    ``path`` may be ``":memory:"`` for an isolated throwaway store.
    """

    def __init__(self, path: str, *, wal: bool = False) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        if wal:
            try:
                self._conn.execute("PRAGMA journal_mode=WAL")
                self._conn.execute("PRAGMA synchronous=NORMAL")
            except sqlite3.Error:
                self._conn.close()
                raise
        logger.debug("Opened database %s (wal=%s)", path, wal)

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Hold the lock for the duration of the block.

        Commits on clean exit, rolls back on exception.
        """
        with self._lock:
            try:
                yield self._conn
                self._conn.commit()
            except BaseException:
                self._conn.rollback()
                raise

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.debug("Closed database %s", self.path)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Database({self.path!r})"
