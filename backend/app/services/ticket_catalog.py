"""Ticket Catalog — minting, listings, owned tickets and owner deletion.

Invariants:
    - Minting requires an existing owner account and price ≥ 1
    - Minted tickets are listed immediately (resale=true, sold=false)
    - Only the current owner can delete, and never a sold record (history is kept)
    - Deleting a listed record also clears any other listed record for that id

Design Decisions:
    - Listing reads go straight to the store: no caching, the store is the
      single source of truth for flags
"""

import logging
from typing import Callable
from datetime import datetime

from app.core.domain_types import TicketRecord
from app.core.errors import ErrorContext, NotFoundError, ValidationError
from app.core.repository_protocols import AccountLedger, TicketStore
from app.core.ticket_records import build_minted_record, owned_predicate
from app.services.record_stamps import new_ticket_id, utcnow

logger = logging.getLogger(__name__)


def _normalise_flags(record: TicketRecord) -> TicketRecord:
    return {**record, "resale": bool(record.get("resale")), "sold": bool(record.get("sold"))}


class TicketCatalog:
    """CRUD around ticket records that carries no lineage rules."""

    def __init__(
        self,
        store: TicketStore,
        ledger: AccountLedger,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_ticket_id,
    ):
        self.store = store
        self.ledger = ledger
        self.clock = clock
        self.id_factory = id_factory

    async def mint(self, owner: str, fields: dict) -> TicketRecord:
        if await self.ledger.find_account(owner) is None:
            raise ValidationError(
                "Invalid owner. Please log in again.", None,
                ErrorContext(username=owner, operation="mint"),
            )
        record = build_minted_record(owner, fields, self.id_factory(), self.clock())
        await self.store.insert(record)
        logger.info(
            "Ticket minted",
            extra={"ticket_id": record["id"], "username": owner, "price": record["price"]},
        )
        return record

    async def list_for_sale(self) -> list[TicketRecord]:
        return await self.store.find_many({"resale": True})

    async def list_owned(self, owner: str) -> list[TicketRecord]:
        return [_normalise_flags(r) for r in await self.store.find_many({"owner": owner})]

    async def delete(self, caller: str, ticket_id: str) -> None:
        ctx = ErrorContext(username=caller, ticket_id=ticket_id, operation="delete")
        ticket = await self.store.find_one(owned_predicate(ticket_id, caller))
        if ticket is None:
            raise NotFoundError("Ticket not found", ctx)
        if ticket.get("sold") is True:
            raise NotFoundError("Sold tickets cannot be deleted", ctx)

        if await self.store.delete_one(owned_predicate(ticket_id, caller)) == 0:
            raise NotFoundError("Ticket not found", ctx)
        if ticket.get("resale") is True:
            await self.store.delete_many({"id": ticket_id, "resale": True})

        logger.info(
            "Ticket deleted", extra={"ticket_id": ticket_id, "username": caller},
        )
