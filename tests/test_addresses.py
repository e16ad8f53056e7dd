"""Tests for customerbook.storage.addresses."""

from __future__ import annotations

import pytest

from customerbook.errors import InvalidInput, NotFound
from customerbook.storage import addresses, customers
from customerbook.storage.connection import get_connection
from customerbook.storage.schema import init_db


@pytest.fixture()
def conn(tmp_path):
    db_path = str(tmp_path / "test.db")
    init_db(db_path)
    with get_connection(db_path) as conn:
        yield conn


@pytest.fixture()
def customer_id(conn):
    customer_id, _ = customers.create_customer(conn, "Ada", "Lovelace", "555-0100")
    return customer_id


def test_create_and_list_round_trip(conn, customer_id):
    address_id = addresses.create_address(conn, customer_id, "12 MG Road", "Pune", "MH", "411001")
    assert addresses.list_addresses(conn, customer_id) == [{
        "id": address_id,
        "customer_id": customer_id,
        "address_details": "12 MG Road",
        "city": "Pune",
        "state": "MH",
        "pin_code": "411001",
    }]


@pytest.mark.parametrize("missing", ["address_details", "city", "state", "pin_code"])
def test_create_requires_every_field(conn, customer_id, missing):
    fields = {"address_details": "12 MG Road", "city": "Pune", "state": "MH", "pin_code": "411001"}
    fields[missing] = None
    with pytest.raises(InvalidInput, match="All address fields required"):
        addresses.create_address(conn, customer_id, **fields)


def test_create_for_unknown_customer(conn):
    with pytest.raises(NotFound, match="Customer not found"):
        addresses.create_address(conn, 999, "12 MG Road", "Pune", "MH", "411001")


def test_list_empty_for_customer_without_addresses(conn, customer_id):
    assert addresses.list_addresses(conn, customer_id) == []


def test_list_ordered_by_id(conn, customer_id):
    first = addresses.create_address(conn, customer_id, "A", "Pune", "MH", "1")
    second = addresses.create_address(conn, customer_id, "B", "Pune", "MH", "2")
    assert [r["id"] for r in addresses.list_addresses(conn, customer_id)] == [first, second]


def test_update_overwrites_fields(conn, customer_id):
    address_id = addresses.create_address(conn, customer_id, "12 MG Road", "Pune", "MH", "411001")
    addresses.update_address(conn, address_id, "7 Park St", "Kolkata", "WB", "700016")
    row = addresses.list_addresses(conn, customer_id)[0]
    assert (row["address_details"], row["city"], row["state"], row["pin_code"]) == (
        "7 Park St", "Kolkata", "WB", "700016",
    )


def test_update_requires_every_field(conn, customer_id):
    address_id = addresses.create_address(conn, customer_id, "12 MG Road", "Pune", "MH", "411001")
    with pytest.raises(InvalidInput):
        addresses.update_address(conn, address_id, "7 Park St", "", "WB", "700016")


def test_update_missing_id_is_silent_noop(conn):
    addresses.update_address(conn, 999, "7 Park St", "Kolkata", "WB", "700016")


def test_delete(conn, customer_id):
    address_id = addresses.create_address(conn, customer_id, "12 MG Road", "Pune", "MH", "411001")
    addresses.delete_address(conn, address_id)
    assert addresses.list_addresses(conn, customer_id) == []


def test_delete_missing_id_is_silent_noop(conn):
    addresses.delete_address(conn, 999)
