"""Customer queries.

Every function takes an open connection as its first argument; the caller
owns the transaction (see ``customerbook.storage.connection``).
"""

from __future__ import annotations

import logging
import sqlite3

from customerbook.errors import Conflict, InvalidInput, NotFound
from customerbook.storage.addresses import ADDRESS_FIELDS, insert_address
from customerbook.storage.schema import SQLITE_MAX_INTEGER

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
MAX_LIMIT = 100

# Columns of addresses that list_customers can filter on
_FILTER_COLUMNS = ("city", "state", "pin_code")


def _is_phone_conflict(exc: sqlite3.IntegrityError) -> bool:
    return "customers.phone_number" in str(exc)


def _require_customer_fields(first_name, last_name, phone_number) -> None:
    if not first_name or not last_name or not phone_number:
        raise InvalidInput("Name and phone required")


# ---------------------------------------------------------------------------
# create_customer
# ---------------------------------------------------------------------------
def create_customer(
    conn: sqlite3.Connection,
    first_name: str | None,
    last_name: str | None,
    phone_number: str | None,
    address: dict | None = None,
) -> tuple[int, bool]:
    """Insert a customer, plus an address when every address field is given.

    Returns ``(customer_id, address_attached)``. Raises InvalidInput when a
    name or the phone number is missing and Conflict when the phone number
    already belongs to another customer.
    """
    _require_customer_fields(first_name, last_name, phone_number)

    try:
        cursor = conn.execute(
            "INSERT INTO customers (first_name, last_name, phone_number) VALUES (?, ?, ?)",
            (first_name, last_name, phone_number),
        )
    except sqlite3.IntegrityError as exc:
        if _is_phone_conflict(exc):
            logger.warning("Rejected customer with duplicate phone number")
            raise Conflict("Phone number already exists") from exc
        raise
    customer_id = cursor.lastrowid

    address = address or {}
    attach = all(address.get(field) for field in ADDRESS_FIELDS)
    if attach:
        insert_address(conn, customer_id, **{f: address[f] for f in ADDRESS_FIELDS})

    logger.info("Created customer %d (address attached: %s)", customer_id, attach)
    return customer_id, attach


# ---------------------------------------------------------------------------
# update_customer
# ---------------------------------------------------------------------------
def update_customer(
    conn: sqlite3.Connection,
    customer_id: int,
    first_name: str | None,
    last_name: str | None,
    phone_number: str | None,
) -> None:
    """Overwrite a customer's names and phone number.

    Updating an id that does not exist changes nothing and is not an error.
    """
    _require_customer_fields(first_name, last_name, phone_number)

    try:
        conn.execute(
            "UPDATE customers SET first_name = ?, last_name = ?, phone_number = ? WHERE id = ?",
            (first_name, last_name, phone_number, customer_id),
        )
    except sqlite3.IntegrityError as exc:
        if _is_phone_conflict(exc):
            logger.warning("Rejected update of customer %d: duplicate phone number", customer_id)
            raise Conflict("Phone number already exists") from exc
        raise


# ---------------------------------------------------------------------------
# list_customers
# ---------------------------------------------------------------------------
def list_customers(
    conn: sqlite3.Connection,
    *,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    city: str | None = None,
    state: str | None = None,
    pin_code: str | None = None,
) -> list[dict]:
    """Return one page of customers, each with an ``address_count``.

    Filters match the joined address columns, so an active filter keeps only
    customers with at least one matching address and counts the joined rows
    that survive it.
    """
    if page < 1 or limit < 1:
        raise InvalidInput("page and limit must be positive integers")
    if limit > MAX_LIMIT:
        raise InvalidInput(f"limit must not exceed {MAX_LIMIT}")
    offset = (page - 1) * limit
    if offset > SQLITE_MAX_INTEGER:
        raise InvalidInput("page is out of range")

    values = {"city": city, "state": state, "pin_code": pin_code}
    conditions: list[str] = []
    params: list[object] = []
    for column in _FILTER_COLUMNS:
        if values[column]:
            # column names come from the fixed tuple above
            conditions.append(f"a.{column} = ?")
            params.append(values[column])

    where_clause = ""
    if conditions:
        where_clause = "WHERE " + " AND ".join(conditions)

    sql = (
        "SELECT c.id, c.first_name, c.last_name, c.phone_number, "
        "COUNT(a.id) AS address_count "
        "FROM customers c LEFT JOIN addresses a ON c.id = a.customer_id "
        f"{where_clause} "
        "GROUP BY c.id ORDER BY c.id LIMIT ? OFFSET ?"
    )
    rows = conn.execute(sql, [*params, limit, offset]).fetchall()
    return [dict(r) for r in rows]


# ---------------------------------------------------------------------------
# get_customer
# ---------------------------------------------------------------------------
def get_customer(conn: sqlite3.Connection, customer_id: int) -> dict:
    """Return a single customer row. Raises NotFound if absent."""
    row = conn.execute(
        "SELECT id, first_name, last_name, phone_number FROM customers WHERE id = ?",
        (customer_id,),
    ).fetchone()
    if row is None:
        raise NotFound("Customer not found")
    return dict(row)


# ---------------------------------------------------------------------------
# delete_customer
# ---------------------------------------------------------------------------
def delete_customer(conn: sqlite3.Connection, customer_id: int) -> None:
    """Delete a customer and every address it owns.

    Both statements run in the caller's transaction, so a failure leaves no
    orphaned addresses. Deleting an id that does not exist is not an error.
    """
    removed = conn.execute(
        "DELETE FROM addresses WHERE customer_id = ?", (customer_id,)
    ).rowcount
    conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
    logger.info("Deleted customer %d and %d address(es)", customer_id, removed)
