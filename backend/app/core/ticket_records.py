"""Ticket Records — pure eligibility checks and record builders for every hop.

Invariants:
    - Builders never mutate their input record (always copy)
    - Validation helpers raise ValidationError / NotFoundError BEFORE the shell mutates anything
    - Resale records keep the id; purchase records get a fresh id and inherit lineage
    - price is always an int ≥ MIN_PRICE on every record a builder returns

Design Decisions:
    - now/new_id passed in by the caller: builders stay deterministic and testable
    - Predicates built here, not in engines: one place defines "resaleable",
      "purchasable" and "editable" (ADR: single source of truth)
"""

from datetime import datetime

from app.core.domain_types import (
    DESCRIPTIVE_FIELDS, EDITABLE_FIELDS, MIN_PRICE, TICKET_FIELDS,
    TicketRecord,
)
from app.core.errors import ErrorContext, NotFoundError, ValidationError
from app.core.lineage import lineage_root_id


# ─── Predicates ──────────────────────────────────────────────────

def resaleable_predicate(ticket_id: str, owner: str) -> dict:
    return {"id": ticket_id, "owner": owner, "resale": False, "sold": False}


def listed_predicate(ticket_id: str) -> dict:
    return {"id": ticket_id, "resale": True}


def editable_predicate(ticket_id: str, owner: str) -> dict:
    return {"id": ticket_id, "owner": owner, "sold": False}


def owned_predicate(ticket_id: str, owner: str) -> dict:
    return {"id": ticket_id, "owner": owner}


# ─── Validation ──────────────────────────────────────────────────

def coerce_int(value: object, field: str = "price") -> int:
    """Accept ints and integer strings (form-encoded clients send strings)."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"{field.capitalize()} must be an integer", field)
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field.capitalize()} must be an integer", field)


def check_price(price: object, field: str = "price") -> int:
    """Coerce to int and enforce the ≥ 1 floor."""
    value = coerce_int(price, field)
    if value < MIN_PRICE:
        raise ValidationError("Price must be greater than 0", field)
    return value


def check_resale_price(new_price: int, root_price: int, ticket_id: str) -> None:
    """Cap first, floor second."""
    ctx = ErrorContext(ticket_id=ticket_id, operation="resell")
    if new_price > root_price:
        raise ValidationError(
            f"Resale price ({new_price}) cannot exceed original price ({root_price})",
            "price", ctx,
        )
    if new_price < MIN_PRICE:
        raise ValidationError("Price must be greater than 0", "price", ctx)


def check_purchase(
    ticket: TicketRecord, buyer: dict | None, seller: dict | None, caller: str,
) -> int:
    """Purchase preconditions after the listing lookup. Returns the price."""
    ctx = ErrorContext(
        username=caller, ticket_id=ticket["id"], operation="purchase",
    )
    if ticket["owner"] == caller:
        raise ValidationError("Cannot purchase your own ticket", None, ctx)
    if buyer is None:
        raise ValidationError("Invalid buyer. Please log in again.", None, ctx)
    if seller is None:
        raise ValidationError("Invalid seller for this ticket.", None, ctx)
    price = int(ticket["price"])
    if buyer["balance"] < price:
        raise ValidationError("Insufficient balance", None, ctx)
    return price


def check_edit_fields(fields: dict) -> dict:
    """All editable fields present; price normalised."""
    missing = [name for name in EDITABLE_FIELDS if fields.get(name) in (None, "")]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", missing[0],
        )
    cleaned = {name: fields[name] for name in DESCRIPTIVE_FIELDS}
    cleaned["price"] = check_price(fields["price"])
    return cleaned


def require_unsold(record: TicketRecord | None, ticket_id: str, operation: str) -> TicketRecord:
    if record is None or record.get("sold") is True:
        raise NotFoundError(
            f"Ticket not found or not available for {operation}",
            ErrorContext(ticket_id=ticket_id, operation=operation),
        )
    return record


# ─── Builders ────────────────────────────────────────────────────

def _clean(record: TicketRecord) -> TicketRecord:
    return {name: record.get(name) for name in TICKET_FIELDS}


def build_minted_record(
    owner: str, fields: dict, new_id: str, now: datetime,
) -> TicketRecord:
    """A fresh mint is listed immediately and carries no lineage."""
    record = _clean({})
    record.update(
        id=new_id,
        type=fields["type"],
        event=fields["event"],
        date=fields["date"],
        price=check_price(fields["price"]),
        image=fields.get("image") or "",
        owner=owner,
        created_at=now,
        resale=True,
        sold=False,
    )
    return record


def build_resale_record(
    ticket: TicketRecord, new_price: int, root_price: int, now: datetime,
) -> TicketRecord:
    """Same id, now listed, lineage pointing at the earliest known ancestor."""
    record = _clean(ticket)
    record.update(
        price=new_price,
        resale=True,
        sold=False,
        original_price=root_price,
        original_owner=ticket.get("original_owner") or ticket["owner"],
        root_ticket_id=lineage_root_id(ticket),
        created_at=now,
    )
    return record


def build_purchase_record(
    ticket: TicketRecord, buyer: str, new_id: str, now: datetime,
) -> TicketRecord:
    """Fresh id for the buyer; root price ceiling inherited from the listing."""
    record = _clean(ticket)
    record.update(
        id=new_id,
        owner=buyer,
        resale=False,
        sold=False,
        previous_owner=ticket["owner"],
        purchase_date=now,
        original_price=(
            ticket["original_price"]
            if ticket.get("original_price") is not None else ticket["price"]
        ),
        original_owner=ticket.get("original_owner") or ticket["owner"],
        root_ticket_id=lineage_root_id(ticket),
    )
    return record


def build_edited_record(
    ticket: TicketRecord, fields: dict, now: datetime,
) -> TicketRecord:
    record = _clean(ticket)
    record.update(fields)
    record["updated_at"] = now
    return record


def sold_fields() -> dict:
    return {"sold": True, "resale": False}
