"""Ticket Schemas — Pydantic models for ticket endpoints.

Invariants:
    - TicketCreate/TicketEdit: type, event, date stripped and non-empty; price ≥ 1
    - ResaleRequest.price is NOT bounded here: the resale engine owns the
      [1, root price] check so its error ordering holds (not found before price)
    - TicketResponse exposes every record field, lineage included

Design Decisions:
    - Field-level validators for side-effect-free transforms (strip)
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class _DescriptiveFields(BaseModel):
    type: str = Field(min_length=1, max_length=100)
    event: str = Field(min_length=1, max_length=200)
    date: str = Field(min_length=1, max_length=50)
    price: int = Field(ge=1)

    @field_validator("type", "event", "date")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class TicketCreate(_DescriptiveFields):
    """Mint request — the image is an opaque reference (path or URL)."""
    image: str = Field("", max_length=500)


class TicketEdit(_DescriptiveFields):
    """Owner edit — all four editable fields are required."""


class ResaleRequest(BaseModel):
    ticket_id: str = Field(min_length=1, max_length=64)
    price: int


class PurchaseRequest(BaseModel):
    ticket_id: str = Field(min_length=1, max_length=64)


class TicketResponse(BaseModel):
    """Public ticket record."""
    id: str
    type: str
    event: str
    date: str
    price: int
    image: str = ""
    owner: str
    created_at: datetime
    resale: bool = False
    sold: bool = False
    original_price: int | None = None
    original_owner: str | None = None
    previous_owner: str | None = None
    purchase_date: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("resale", "sold", mode="before")
    @classmethod
    def absent_flag_is_false(cls, v: bool | None) -> bool:
        return bool(v)


class ActionResponse(BaseModel):
    success: bool = True
    message: str
