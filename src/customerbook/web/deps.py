"""Request-scoped dependencies for the web API."""

from __future__ import annotations

import sqlite3
from typing import Generator

from fastapi import Request

from customerbook.storage.connection import get_connection


def get_db(request: Request) -> Generator[sqlite3.Connection, None, None]:
    """Yield a connection owned by the current request.

    The connection commits when the handler returns, rolls back when it
    raises, and is closed either way. Tests swap it out through
    ``app.dependency_overrides``.
    """
    with get_connection(request.app.state.database_path) as conn:
        yield conn
