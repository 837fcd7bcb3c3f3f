"""Tests for deskstore.commands — registry, validation, and dispatch."""

from __future__ import annotations

import logging

import pytest

from deskstore.commands import (
    _REGISTRY,
    Stores,
    dispatch,
    get_command,
    register_command,
    registered_commands,
)
from deskstore.errors import ErrorKind, StoreError
from deskstore.storage.schema import open_inventory_db, open_notes_db

EXPECTED_COMMANDS = [
    "create_note",
    "create_product",
    "delete_product",
    "get_all_notes",
    "get_categories",
    "get_note",
    "get_one_product",
    "get_products",
    "get_products_by_category",
    "update_note",
    "update_product",
]


@pytest.fixture()
def stores():
    s = Stores(notes=open_notes_db(":memory:"), inventory=open_inventory_db(":memory:"))
    yield s
    s.close()


class TestRegistry:
    def setup_method(self):
        self._original = dict(_REGISTRY)

    def teardown_method(self):
        _REGISTRY.clear()
        _REGISTRY.update(self._original)

    def test_all_commands_registered(self):
        assert registered_commands() == EXPECTED_COMMANDS

    def test_register_and_lookup(self):
        def handler(stores, args):
            return "pong"

        register_command("ping", handler)
        assert get_command("ping") is handler

    def test_lookup_unknown_returns_none(self):
        assert get_command("nonexistent") is None


class TestDispatchNotes:
    def test_create_get_list(self, stores):
        note_id = dispatch(stores, "create_note", {"title": "T", "content": "C"})
        assert isinstance(note_id, int)

        note = dispatch(stores, "get_note", {"id": note_id})
        assert note["title"] == "T"
        assert note["content"] == "C"

        notes = dispatch(stores, "get_all_notes")
        assert [n["id"] for n in notes] == [note_id]

    def test_get_missing_note_is_none(self, stores):
        assert dispatch(stores, "get_note", {"id": 12}) is None

    def test_update_note_returns_count(self, stores):
        note_id = dispatch(stores, "create_note", {"title": "T", "content": "C"})
        assert dispatch(stores, "update_note", {"id": note_id, "title": "U", "content": "D"}) == 1

    def test_update_missing_note_is_not_found(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "update_note", {"id": 5, "title": "U", "content": "D"})
        assert exc_info.value.kind is ErrorKind.NOT_FOUND


class TestDispatchProducts:
    def _create(self, stores, name, category):
        return dispatch(
            stores,
            "create_product",
            {"name": name, "category": category, "quantity": 2, "price": 3.5},
        )

    def test_create_and_get_one(self, stores):
        product = self._create(stores, "Widget", "Tools")
        assert product["created_at"] == product["updated_at"]
        assert dispatch(stores, "get_one_product", {"id": product["id"]}) == product

    def test_get_products_optional_filter(self, stores):
        self._create(stores, "b", "A")
        self._create(stores, "a", "A")
        self._create(stores, "c", "B")

        assert len(dispatch(stores, "get_products")) == 3
        filtered = dispatch(stores, "get_products", {"category": "A"})
        assert [p["name"] for p in filtered] == ["a", "b"]
        by_category = dispatch(stores, "get_products_by_category", {"category": "A"})
        assert by_category == filtered

    def test_get_categories(self, stores):
        self._create(stores, "x", "B")
        self._create(stores, "y", "A")
        self._create(stores, "z", "A")
        assert dispatch(stores, "get_categories") == [
            {"name": "A", "count": 2},
            {"name": "B", "count": 1},
        ]

    def test_update_and_delete(self, stores):
        product = self._create(stores, "Widget", "Tools")
        result = dispatch(
            stores,
            "update_product",
            {"id": product["id"], "name": "W2", "category": "Tools", "quantity": 9, "price": 1.0},
        )
        assert result is None
        assert dispatch(stores, "get_one_product", {"id": product["id"]})["quantity"] == 9

        assert dispatch(stores, "delete_product", {"id": product["id"]}) is None
        assert dispatch(stores, "get_products") == []

    def test_delete_missing_is_not_found(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "delete_product", {"id": "nope"})
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.message == "Product not found"


class TestValidation:
    def test_missing_field_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "create_note", {"title": "only title"})
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert "content" in exc_info.value.message

    def test_wrong_type_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(
                stores,
                "create_product",
                {"name": "W", "category": "T", "quantity": "lots", "price": 1.0},
            )
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_unexpected_field_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "get_all_notes", {"page": 2})
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_id_beyond_64_bits_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "get_note", {"id": 2**63})
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_smallest_64_bit_id_is_accepted(self, stores):
        assert dispatch(stores, "get_note", {"id": -(2**63)}) is None

    def test_quantity_beyond_64_bits_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(
                stores,
                "create_product",
                {"name": "W", "category": "T", "quantity": 2**63, "price": 1.0},
            )
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert dispatch(stores, "get_products") == []

    def test_lone_surrogate_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "create_note", {"title": "\ud800", "content": "c"})
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert dispatch(stores, "get_all_notes") == []

    def test_lone_surrogate_product_id_is_invalid_input(self, stores):
        with pytest.raises(StoreError) as exc_info:
            dispatch(stores, "get_one_product", {"id": "\udfff"})
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_invalid_input_touches_nothing(self, stores):
        with pytest.raises(StoreError):
            dispatch(stores, "create_product", {"name": "W"})
        assert dispatch(stores, "get_products") == []


def test_unknown_command(stores):
    with pytest.raises(StoreError) as exc_info:
        dispatch(stores, "drop_everything")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert "drop_everything" in exc_info.value.message


def test_failures_are_logged(stores, caplog):
    with caplog.at_level(logging.WARNING, logger="deskstore.commands"):
        with pytest.raises(StoreError):
            dispatch(stores, "get_one_product", {"id": "nope"})
    assert "get_one_product" in caplog.text
    assert "not_found" in caplog.text
