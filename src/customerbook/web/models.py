"""Pydantic v2 request and response models for the Customerbook web API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Payload(BaseModel):
    # Clients send pin codes and phone numbers as JSON numbers too
    model_config = ConfigDict(coerce_numbers_to_str=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class CustomerCreate(_Payload):
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    address_details: str | None = None
    city: str | None = None
    state: str | None = None
    pin_code: str | None = None


class CustomerUpdate(_Payload):
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None


class AddressPayload(_Payload):
    address_details: str | None = None
    city: str | None = None
    state: str | None = None
    pin_code: str | None = None


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------
class Customer(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone_number: str


class CustomerListEntry(Customer):
    address_count: int


class Address(BaseModel):
    id: int
    customer_id: int
    address_details: str
    city: str
    state: str
    pin_code: str


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------
class MessageResponse(BaseModel):
    message: str


class CustomerCreatedResponse(MessageResponse):
    customer_id: int


class AddressCreatedResponse(MessageResponse):
    address_id: int


class CustomerListResponse(MessageResponse):
    data: list[CustomerListEntry]


class CustomerResponse(MessageResponse):
    data: Customer


class AddressListResponse(MessageResponse):
    data: list[Address]


class ErrorResponse(BaseModel):
    error: str
