"""Address queries."""

from __future__ import annotations

import logging
import sqlite3

from customerbook.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("address_details", "city", "state", "pin_code")


def _require_address_fields(**fields) -> None:
    if not all(fields.get(name) for name in ADDRESS_FIELDS):
        raise InvalidInput("All address fields required")


def insert_address(
    conn: sqlite3.Connection,
    customer_id: int,
    address_details: str,
    city: str,
    state: str,
    pin_code: str,
) -> int:
    """Insert an address row without validating fields. Returns the new id.

    Raises NotFound when ``customer_id`` does not reference a customer.
    """
    try:
        cursor = conn.execute(
            "INSERT INTO addresses (customer_id, address_details, city, state, pin_code) "
            "VALUES (?, ?, ?, ?, ?)",
            (customer_id, address_details, city, state, pin_code),
        )
    except sqlite3.IntegrityError as exc:
        if "FOREIGN KEY" in str(exc):
            raise NotFound("Customer not found") from exc
        raise
    return cursor.lastrowid


def create_address(
    conn: sqlite3.Connection,
    customer_id: int,
    address_details: str | None,
    city: str | None,
    state: str | None,
    pin_code: str | None,
) -> int:
    """Add an address to a customer. Returns the new address id."""
    _require_address_fields(
        address_details=address_details, city=city, state=state, pin_code=pin_code,
    )
    address_id = insert_address(conn, customer_id, address_details, city, state, pin_code)
    logger.info("Added address %d for customer %d", address_id, customer_id)
    return address_id


def list_addresses(conn: sqlite3.Connection, customer_id: int) -> list[dict]:
    """Return every address of a customer, oldest first."""
    rows = conn.execute(
        "SELECT id, customer_id, address_details, city, state, pin_code "
        "FROM addresses WHERE customer_id = ? ORDER BY id",
        (customer_id,),
    ).fetchall()
    return [dict(r) for r in rows]


def update_address(
    conn: sqlite3.Connection,
    address_id: int,
    address_details: str | None,
    city: str | None,
    state: str | None,
    pin_code: str | None,
) -> None:
    """Overwrite all four fields of an address. A missing id is a no-op."""
    _require_address_fields(
        address_details=address_details, city=city, state=state, pin_code=pin_code,
    )
    conn.execute(
        "UPDATE addresses SET address_details = ?, city = ?, state = ?, pin_code = ? "
        "WHERE id = ?",
        (address_details, city, state, pin_code, address_id),
    )


def delete_address(conn: sqlite3.Connection, address_id: int) -> None:
    """Delete an address by id. A missing id is a no-op."""
    conn.execute("DELETE FROM addresses WHERE id = ?", (address_id,))
    logger.info("Deleted address %d", address_id)
