"""API route handlers for the Customerbook web API."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from customerbook.storage import addresses, customers
from customerbook.storage.connection import get_connection
from customerbook.storage.schema import SQLITE_MAX_INTEGER
from customerbook.web.deps import get_db
from customerbook.web.models import (
    AddressCreatedResponse,
    AddressListResponse,
    AddressPayload,
    CustomerCreate,
    CustomerCreatedResponse,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
    ErrorResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()

# Highest page whose offset still fits a SQLite INTEGER at the largest limit
_MAX_PAGE = SQLITE_MAX_INTEGER // customers.MAX_LIMIT + 1

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid input or duplicate phone number"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Customer not found"}}


@health_router.get("/", response_model=MessageResponse)
def index() -> MessageResponse:
    """Report that the server is up, with the server's local time."""
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return MessageResponse(message=f"Server is running: {now}")


@health_router.get("/health")
def health(request: Request) -> JSONResponse:
    """Check that the customer database is reachable and its schema exists.

    Reports the number of stored customers; a missing file or an
    uninitialized database answers 503.
    """
    database_path = request.app.state.database_path
    try:
        with get_connection(database_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM customers").fetchone()[0]
        return JSONResponse({"status": "healthy", "database": "ok", "customers": count})
    except (sqlite3.Error, OSError) as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            {"status": "unhealthy", "database": "error", "detail": str(exc)},
            status_code=503,
        )


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
@router.post("/customers", response_model=CustomerCreatedResponse, responses=_BAD_REQUEST)
def create_customer(
    body: CustomerCreate,
    conn: sqlite3.Connection = Depends(get_db),
) -> CustomerCreatedResponse:
    customer_id, attached = customers.create_customer(
        conn,
        body.first_name,
        body.last_name,
        body.phone_number,
        address={
            "address_details": body.address_details,
            "city": body.city,
            "state": body.state,
            "pin_code": body.pin_code,
        },
    )
    message = "Customer + Address created" if attached else "Customer created (no address)"
    return CustomerCreatedResponse(message=message, customer_id=customer_id)


@router.get("/customers", response_model=CustomerListResponse, responses=_BAD_REQUEST)
def list_customers(
    page: int = Query(customers.DEFAULT_PAGE, ge=1, le=_MAX_PAGE),
    limit: int = Query(customers.DEFAULT_LIMIT, ge=1, le=customers.MAX_LIMIT),
    city: str | None = None,
    state: str | None = None,
    pin_code: str | None = None,
    conn: sqlite3.Connection = Depends(get_db),
) -> CustomerListResponse:
    rows = customers.list_customers(
        conn, page=page, limit=limit, city=city, state=state, pin_code=pin_code,
    )
    return CustomerListResponse(message="success", data=rows)


@router.get("/customers/{customer_id}", response_model=CustomerResponse, responses=_NOT_FOUND)
def get_customer(
    customer_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> CustomerResponse:
    return CustomerResponse(message="success", data=customers.get_customer(conn, customer_id))


@router.put("/customers/{customer_id}", response_model=MessageResponse, responses=_BAD_REQUEST)
def update_customer(
    body: CustomerUpdate,
    customer_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> MessageResponse:
    """Overwrite a customer. An unknown id succeeds without changing anything."""
    customers.update_customer(
        conn, customer_id, body.first_name, body.last_name, body.phone_number,
    )
    return MessageResponse(message="Customer updated")


@router.delete("/customers/{customer_id}", response_model=MessageResponse)
def delete_customer(
    customer_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> MessageResponse:
    """Delete a customer with its addresses. An unknown id still succeeds."""
    customers.delete_customer(conn, customer_id)
    return MessageResponse(message="Customer deleted")


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------
@router.post(
    "/customers/{customer_id}/addresses",
    response_model=AddressCreatedResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
def create_address(
    body: AddressPayload,
    customer_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> AddressCreatedResponse:
    """Add an address to a customer. An unknown customer answers 404."""
    address_id = addresses.create_address(
        conn, customer_id, body.address_details, body.city, body.state, body.pin_code,
    )
    return AddressCreatedResponse(message="Address added", address_id=address_id)


@router.get("/customers/{customer_id}/addresses", response_model=AddressListResponse)
def list_addresses(
    customer_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> AddressListResponse:
    return AddressListResponse(message="success", data=addresses.list_addresses(conn, customer_id))


@router.put(
    "/addresses/{address_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "An address field is missing"}},
)
def update_address(
    body: AddressPayload,
    address_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> MessageResponse:
    """Overwrite all four address fields; each is required. An unknown id still succeeds."""
    addresses.update_address(
        conn, address_id, body.address_details, body.city, body.state, body.pin_code,
    )
    return MessageResponse(message="Address updated")


@router.delete("/addresses/{address_id}", response_model=MessageResponse)
def delete_address(
    address_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER),
    conn: sqlite3.Connection = Depends(get_db),
) -> MessageResponse:
    addresses.delete_address(conn, address_id)
    return MessageResponse(message="Address deleted")
