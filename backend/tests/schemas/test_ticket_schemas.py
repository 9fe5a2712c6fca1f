"""Ticket schema validation — request bodies and the public record shape.

Invariants:
    - Descriptive fields are stripped and must not be blank
    - Mint/edit price is ≥ 1; resale price is left to the engine
    - Absent flags serialize as false
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.schemas.account import AccountCredentials, TopUpRequest
from app.schemas.ticket import ResaleRequest, TicketCreate, TicketEdit, TicketResponse

BODY = {"type": "VIP", "event": "Concert", "date": "2026-12-01", "price": 100}


# --- TicketCreate / TicketEdit -----------------------------------------------

def test_create_strips_text_and_defaults_image():
    ticket = TicketCreate(**{**BODY, "event": "  Concert  "})
    assert ticket.event == "Concert"
    assert ticket.image == ""


def test_create_rejects_blank_event():
    with pytest.raises(ValidationError):
        TicketCreate(**{**BODY, "event": "   "})


def test_create_rejects_zero_price():
    with pytest.raises(ValidationError):
        TicketCreate(**{**BODY, "price": 0})


def test_edit_requires_every_field():
    with pytest.raises(ValidationError):
        TicketEdit(type="VIP", event="Concert", price=10)


# --- ResaleRequest ------------------------------------------------------------

def test_resale_request_leaves_price_unbounded():
    assert ResaleRequest(ticket_id="T1", price=0).price == 0


def test_resale_request_coerces_numeric_string():
    assert ResaleRequest(ticket_id="T1", price="80").price == 80


# --- TicketResponse -----------------------------------------------------------

def test_response_treats_absent_sold_as_false():
    resp = TicketResponse(
        id="T1", type="VIP", event="Concert", date="2026-12-01", price=100,
        owner="alice", created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
        resale=False, sold=None,
    )
    assert resp.sold is False
    assert resp.original_price is None


# --- Accounts -----------------------------------------------------------------

def test_credentials_strip_username():
    assert AccountCredentials(username=" bob ", password="pw").username == "bob"


@pytest.mark.parametrize("amount", [0, -3])
def test_top_up_amount_must_be_positive(amount):
    with pytest.raises(ValidationError):
        TopUpRequest(amount=amount)
