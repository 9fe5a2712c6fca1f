"""Edit Engine — in-place ticket edit with a delete/reinsert fallback.

Invariants:
    - Only the owner can edit, and never a sold record (NotFoundError, zero mutation)
    - type, event, date and price are all required; price ≥ 1
    - A record carrying lineage cannot be edited above its resolved root price
    - After success the id maps to exactly one record reflecting the edit

Design Decisions:
    - Narrow update filtered by {id, owner, sold=false} first; a stale or absent
      sold flag defeats that filter, so the fallback locates by {id, owner},
      deletes and reinserts under the same id, writing an explicit sold=false
    - A zero-row delete in the fallback is a lost race → ConflictError
"""

import logging
from typing import Callable
from datetime import datetime

from app.core.domain_types import TicketRecord
from app.core.errors import (
    ConflictError, ErrorContext, ExchangeError, NotFoundError, ValidationError,
)
from app.core.lineage import has_lineage
from app.core.repository_protocols import TicketStore
from app.core.ticket_records import (
    build_edited_record, check_edit_fields, editable_predicate,
    owned_predicate, require_unsold,
)
from app.services.interruptions import interrupted
from app.services.lineage_resolver import LineageResolver
from app.services.record_stamps import utcnow

logger = logging.getLogger(__name__)


class EditEngine:
    """Validates and applies owner edits to ticket records."""

    def __init__(
        self,
        store: TicketStore,
        resolver: LineageResolver | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.resolver = resolver or LineageResolver(store)
        self.clock = clock

    async def edit(self, caller: str, ticket_id: str, fields: dict) -> TicketRecord:
        """Apply {type, event, date, price} to ticket_id. Returns the edited record."""
        changes = check_edit_fields(fields)
        ctx = ErrorContext(username=caller, ticket_id=ticket_id, operation="edit")

        current = require_unsold(
            await self.store.find_one(owned_predicate(ticket_id, caller)),
            ticket_id, "editing",
        )
        await self._check_lineage_cap(current, changes["price"], ctx)

        now = self.clock()
        matched = await self.store.update_one(
            editable_predicate(ticket_id, caller), {**changes, "updated_at": now},
        )
        if matched:
            logger.info(
                "Ticket edited in place",
                extra={"ticket_id": ticket_id, "username": caller},
            )
            return build_edited_record(current, changes, now)

        return await self._move(caller, ticket_id, changes, now, ctx)

    async def _move(
        self, caller: str, ticket_id: str, changes: dict,
        now: datetime, ctx: ErrorContext,
    ) -> TicketRecord:
        """Fallback when the narrow filter misses: delete and reinsert."""
        predicate = owned_predicate(ticket_id, caller)
        old = require_unsold(await self.store.find_one(predicate), ticket_id, "editing")

        if await self.store.delete_one(predicate) == 0:
            raise ConflictError("Ticket changed while editing", ctx)

        edited = build_edited_record(old, changes, now)
        edited["sold"] = False
        try:
            await self.store.insert(edited)
        except ExchangeError:
            raise
        except Exception as e:
            raise interrupted("edit", "reinsert", ticket_id, caller, e) from e

        logger.info(
            "Ticket edited via reinsert",
            extra={"ticket_id": ticket_id, "username": caller, "step": "fallback"},
        )
        return edited

    async def _check_lineage_cap(
        self, record: TicketRecord, price: int, ctx: ErrorContext,
    ) -> None:
        if not has_lineage(record):
            return
        root_price = await self.resolver.resolve_root_price(record)
        if price > root_price:
            raise ValidationError(
                f"Price ({price}) cannot exceed original price ({root_price})",
                "price", ctx,
            )
