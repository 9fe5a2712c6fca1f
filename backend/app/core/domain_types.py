"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TicketId and Username wrap str; never pass raw strings through engine signatures
    - Price is an integer ≥ MIN_PRICE
    - TicketRecord is the store's unit of exchange (field name → value)
    - All record field names live in TICKET_FIELDS, no ad-hoc keys

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Records as plain dicts: the store is predicate-oriented, so records stay
      open mappings (ADR: store contract mirrors a document store)
"""

from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

TicketId = NewType("TicketId", str)
Username = NewType("Username", str)


# ─── Value Types ─────────────────────────────────────────────────

Price = NewType("Price", int)   # ≥ 1

MIN_PRICE: int = 1

TicketRecord = dict[str, Any]
Predicate = dict[str, Any]


# ─── Record Shape ────────────────────────────────────────────────

DESCRIPTIVE_FIELDS: tuple[str, ...] = ("type", "event", "date")
EDITABLE_FIELDS: tuple[str, ...] = ("type", "event", "date", "price")

TICKET_FIELDS: tuple[str, ...] = (
    "id", "type", "event", "date", "price", "image", "owner",
    "created_at", "resale", "sold",
    "original_price", "original_owner", "previous_owner",
    "purchase_date", "updated_at", "root_ticket_id",
)


# ─── Enums ───────────────────────────────────────────────────────

class TicketState(str, Enum):
    """Derived lifecycle state of a single record."""
    LISTED = "listed"       # resale=true, purchasable
    HELD = "held"           # resale=false, sold=false
    SOLD = "sold"           # sold=true, terminal
    LEGACY = "legacy"       # resale=false, sold flag absent


def ticket_state(record: TicketRecord) -> TicketState:
    """Classify a record by its flags."""
    if record.get("sold") is True:
        return TicketState.SOLD
    if record.get("resale") is True:
        return TicketState.LISTED
    if record.get("sold") is None:
        return TicketState.LEGACY
    return TicketState.HELD
