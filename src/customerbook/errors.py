"""Domain errors raised by the data access layer.

Each error carries the HTTP status the web layer reports it with, so the
exception handlers in ``customerbook.web.app`` stay a single mapping.
"""

from __future__ import annotations


class CustomerBookError(Exception):
    """Base class for errors reported to API clients as ``{"error": message}``."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(CustomerBookError):
    """A required field is missing or empty, or a parameter is out of range."""

    status_code = 400


class Conflict(CustomerBookError):
    """The write would violate a uniqueness rule (duplicate phone number)."""

    status_code = 400


class NotFound(CustomerBookError):
    """The requested row does not exist."""

    status_code = 404
