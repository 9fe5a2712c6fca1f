"""Domain Types — verifies rich type definitions and state classification.

Tests:
    - NewType wrappers exist and are callable
    - Record shape constants stay consistent with each other
    - ticket_state() maps flag combinations to lifecycle states
"""

from app.core.domain_types import (
    DESCRIPTIVE_FIELDS, EDITABLE_FIELDS, MIN_PRICE, TICKET_FIELDS,
    Price, TicketId, TicketState, Username, ticket_state,
)


def test_identity_types_wrap_str():
    assert TicketId("T1") == "T1"
    assert Username("alice") == "alice"
    assert Price(5) == 5


def test_min_price_is_one():
    assert MIN_PRICE == 1


def test_editable_fields_are_descriptive_plus_price():
    assert EDITABLE_FIELDS == DESCRIPTIVE_FIELDS + ("price",)
    assert set(EDITABLE_FIELDS) <= set(TICKET_FIELDS)


def test_ticket_state_listed():
    assert ticket_state({"resale": True, "sold": False}) == TicketState.LISTED


def test_ticket_state_held():
    assert ticket_state({"resale": False, "sold": False}) == TicketState.HELD


def test_ticket_state_sold_wins_over_resale():
    assert ticket_state({"resale": True, "sold": True}) == TicketState.SOLD


def test_ticket_state_legacy_when_sold_absent():
    assert ticket_state({"resale": False}) == TicketState.LEGACY
    assert ticket_state({"resale": False, "sold": None}) == TicketState.LEGACY


def test_state_serializes_to_string():
    assert TicketState.LISTED.value == "listed"
