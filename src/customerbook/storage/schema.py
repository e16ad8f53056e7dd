"""Database schema definition and initialization."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from customerbook.storage.connection import get_connection

logger = logging.getLogger(__name__)

# Largest value an INTEGER column (and a bound parameter) can hold
SQLITE_MAX_INTEGER = 2**63 - 1

_SCHEMA_SQL = """\
-- Customers, one row per unique phone number
CREATE TABLE IF NOT EXISTS customers (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name      TEXT NOT NULL,
    last_name       TEXT NOT NULL,
    phone_number    TEXT NOT NULL UNIQUE
);

-- Postal addresses, each owned by exactly one customer
CREATE TABLE IF NOT EXISTS addresses (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    customer_id     INTEGER NOT NULL,
    address_details TEXT NOT NULL,
    city            TEXT NOT NULL,
    state           TEXT NOT NULL,
    pin_code        TEXT NOT NULL,
    FOREIGN KEY(customer_id) REFERENCES customers(id)
);

-- Indexes: addresses
CREATE INDEX IF NOT EXISTS idx_addresses_customer_id ON addresses(customer_id);
CREATE INDEX IF NOT EXISTS idx_addresses_city ON addresses(city);
CREATE INDEX IF NOT EXISTS idx_addresses_state ON addresses(state);
CREATE INDEX IF NOT EXISTS idx_addresses_pin_code ON addresses(pin_code);
"""


def init_db(database_path: str) -> None:
    """Create all tables and indexes if they do not already exist."""
    with get_connection(database_path) as conn:
        conn.executescript(_SCHEMA_SQL)
    logger.info("Database initialized at %s", database_path)


def prepare_database(seed_path: str | None, database_path: str) -> bool:
    """Copy a bundled seed database to ``database_path`` if it is not there yet.

    Serverless hosts ship the database read-only next to the code; requests
    must write to a copy in a writable location such as /tmp. Returns True
    when a copy was made.
    """
    if not seed_path:
        return False

    target = Path(database_path)
    if target.exists():
        return False

    source_path = Path(seed_path)
    if not source_path.is_file():
        logger.warning("Seed database not found at %s; starting empty", seed_path)
        return False

    target.parent.mkdir(parents=True, exist_ok=True)

    # Use SQLite backup API for a safe, consistent copy
    source = sqlite3.connect(str(source_path))
    try:
        dest = sqlite3.connect(str(target))
        try:
            source.backup(dest)
        finally:
            dest.close()
    finally:
        source.close()

    logger.info("Seed database copied from %s to %s", seed_path, database_path)
    return True
