"""Command surface — maps the UI's named calls to access functions.

Each command validates its arguments with a pydantic model, calls exactly one
access function, and returns a JSON-ready payload. Failures propagate as
StoreError so callers can branch on ``kind``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deskstore import inventory, notes
from deskstore.errors import ErrorKind, StoreError
from deskstore.storage.connection import Database

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stores:
    """The two database handles owned by the running application."""

    notes: Database
    inventory: Database

    def close(self) -> None:
        self.notes.close()
        self.inventory.close()


Handler = Callable[[Stores, dict], Any]

_REGISTRY: dict[str, Handler] = {}


def register_command(name: str, handler: Handler) -> None:
    """Register a handler under a command name."""
    _REGISTRY[name] = handler


def get_command(name: str) -> Handler | None:
    """Look up a handler by command name. Returns None if not found."""
    return _REGISTRY.get(name)


def registered_commands() -> list[str]:
    """Return a sorted list of all registered command names."""
    return sorted(_REGISTRY)


def command(name: str) -> Callable[[Handler], Handler]:
    def decorator(handler: Handler) -> Handler:
        register_command(name, handler)
        return handler

    return decorator


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------
# SQLite INTEGER is a signed 64-bit value
SqliteInt = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class _Args(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NewNote(_Args):
    title: str
    content: str


class UpdateNote(_Args):
    id: SqliteInt
    title: str
    content: str


class NoteId(_Args):
    id: SqliteInt


class NewProduct(_Args):
    name: str
    category: str
    quantity: SqliteInt
    price: float


class UpdateProduct(NewProduct):
    id: str


class ProductId(_Args):
    id: str


class CategoryFilter(_Args):
    category: str | None = None


class CategoryName(_Args):
    category: str


class NoArgs(_Args):
    pass


def _parse(model: type[_Args], args: dict) -> Any:
    try:
        return model.model_validate(args)
    except ValidationError as exc:
        raise StoreError(ErrorKind.INVALID_INPUT, str(exc), cause=exc) from exc


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------
@command("create_note")
def _create_note(stores: Stores, args: dict) -> int:
    payload = _parse(NewNote, args)
    return notes.create_note(stores.notes, payload.title, payload.content)


@command("update_note")
def _update_note(stores: Stores, args: dict) -> int:
    payload = _parse(UpdateNote, args)
    return notes.update_note(stores.notes, payload.id, payload.title, payload.content)


@command("get_note")
def _get_note(stores: Stores, args: dict) -> dict | None:
    payload = _parse(NoteId, args)
    note = notes.get_note(stores.notes, payload.id)
    return note.to_dict() if note else None


@command("get_all_notes")
def _get_all_notes(stores: Stores, args: dict) -> list[dict]:
    _parse(NoArgs, args)
    return [note.to_dict() for note in notes.list_notes(stores.notes)]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@command("create_product")
def _create_product(stores: Stores, args: dict) -> dict:
    payload = _parse(NewProduct, args)
    product = inventory.create_product(
        stores.inventory, payload.name, payload.category, payload.quantity, payload.price
    )
    return product.to_dict()


@command("get_products")
def _get_products(stores: Stores, args: dict) -> list[dict]:
    payload = _parse(CategoryFilter, args)
    products = inventory.list_products(stores.inventory, category=payload.category)
    return [p.to_dict() for p in products]


@command("get_products_by_category")
def _get_products_by_category(stores: Stores, args: dict) -> list[dict]:
    payload = _parse(CategoryName, args)
    products = inventory.list_products(stores.inventory, category=payload.category)
    return [p.to_dict() for p in products]


@command("get_one_product")
def _get_one_product(stores: Stores, args: dict) -> dict:
    payload = _parse(ProductId, args)
    return inventory.get_product(stores.inventory, payload.id).to_dict()


@command("get_categories")
def _get_categories(stores: Stores, args: dict) -> list[dict]:
    _parse(NoArgs, args)
    return [c.to_dict() for c in inventory.list_categories(stores.inventory)]


@command("update_product")
def _update_product(stores: Stores, args: dict) -> None:
    payload = _parse(UpdateProduct, args)
    inventory.update_product(
        stores.inventory,
        payload.id,
        payload.name,
        payload.category,
        payload.quantity,
        payload.price,
    )


@command("delete_product")
def _delete_product(stores: Stores, args: dict) -> None:
    payload = _parse(ProductId, args)
    inventory.delete_product(stores.inventory, payload.id)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def dispatch(stores: Stores, name: str, args: dict | None = None) -> Any:
    """Run the command registered under ``name`` with ``args``.

    Raises StoreError(NOT_FOUND) for an unknown command name; any StoreError
    raised by the command is logged and re-raised unchanged.
    """
    handler = get_command(name)
    if handler is None:
        raise StoreError(ErrorKind.NOT_FOUND, f"Unknown command: {name}")
    try:
        return handler(stores, args or {})
    except StoreError as exc:
        logger.warning("Command %s failed (%s): %s", name, exc.kind.value, exc.message)
        raise
