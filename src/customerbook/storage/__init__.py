"""Storage layer — SQLite database access, schema management, and queries."""

from customerbook.storage.connection import get_connection
from customerbook.storage.schema import init_db, prepare_database

__all__ = ["get_connection", "init_db", "prepare_database"]
