"""Error kinds surfaced by the storage and command layers."""

from __future__ import annotations

import enum
import sqlite3
from contextlib import contextmanager
from typing import Generator


class ErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    INVALID_INPUT = "invalid_input"
    UNKNOWN = "unknown"


class StoreError(Exception):
    """A failure reported to the caller, tagged with a closed error kind.

    ``cause`` holds the underlying exception (usually a ``sqlite3.Error``)
    when there is one.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"StoreError({self.kind.name}, {self.message!r})"


def not_found(message: str) -> StoreError:
    return StoreError(ErrorKind.NOT_FOUND, message)


def classify(exc: sqlite3.Error) -> ErrorKind:
    """Map a sqlite3 exception to an error kind."""
    if isinstance(exc, sqlite3.IntegrityError):
        return ErrorKind.CONSTRAINT_VIOLATION
    if isinstance(exc, sqlite3.OperationalError):
        return ErrorKind.STORAGE_UNAVAILABLE
    return ErrorKind.UNKNOWN


@contextmanager
def translate_errors() -> Generator[None, None, None]:
    """Re-raise any sqlite3.Error inside the block as a StoreError.

    Values sqlite3 refuses to bind (integers outside 64 bits, strings with
    lone surrogates) become INVALID_INPUT.
    """
    try:
        yield
    except sqlite3.Error as exc:
        raise StoreError(classify(exc), str(exc), cause=exc) from exc
    except (OverflowError, UnicodeEncodeError) as exc:
        raise StoreError(ErrorKind.INVALID_INPUT, str(exc), cause=exc) from exc
