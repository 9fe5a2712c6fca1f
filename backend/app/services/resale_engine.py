"""Resale Engine — lists an owned ticket for resale as a delete+reinsert move.

Invariants:
    - Only a record {id, owner=caller, resale=false, sold=false} can be listed
    - new_price ∈ [1, resolved root price]; checked before any mutation
    - The id survives the move; exactly one live record remains, resale-flagged
    - Zero rows deleted ⇒ ConflictError (a concurrent request got there first)
    - A failure after the delete is logged and raised, never masked

Design Decisions:
    - Delete-then-insert instead of update: the store offers no conditional
      multi-field move, and the delete doubles as the race detector
    - Lingering unlisted duplicates for the same id/owner are swept after the
      delete so the listing is the only record left for that owner
"""

import logging
from typing import Callable
from datetime import datetime

from app.core.domain_types import TicketRecord
from app.core.errors import ConflictError, ErrorContext, ExchangeError, NotFoundError
from app.core.repository_protocols import TicketStore
from app.core.ticket_records import (
    build_resale_record, check_resale_price, coerce_int, resaleable_predicate,
)
from app.services.interruptions import interrupted
from app.services.lineage_resolver import LineageResolver
from app.services.record_stamps import utcnow

logger = logging.getLogger(__name__)


class ResaleEngine:
    """Validates and executes resale listings."""

    def __init__(
        self,
        store: TicketStore,
        resolver: LineageResolver | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.resolver = resolver or LineageResolver(store)
        self.clock = clock

    async def resell(
        self, caller: str, ticket_id: str, new_price: object,
    ) -> TicketRecord:
        """List ticket_id at new_price. Returns the new listing record."""
        predicate = resaleable_predicate(ticket_id, caller)
        ctx = ErrorContext(username=caller, ticket_id=ticket_id, operation="resell")

        ticket = await self.store.find_one(predicate)
        if ticket is None:
            raise NotFoundError(
                "Ticket not found or not available for resale", ctx,
            )

        price = coerce_int(new_price)
        root_price = await self.resolver.resolve_root_price(ticket)
        check_resale_price(price, root_price, ticket_id)

        deleted = await self.store.delete_one(predicate)
        if deleted == 0:
            logger.warning(
                "Resale lost a race: listing source already moved",
                extra={"ticket_id": ticket_id, "username": caller},
            )
            raise ConflictError("Ticket already listed, sold, or not found", ctx)

        try:
            swept = await self.store.delete_many(
                {"id": ticket_id, "owner": caller, "resale": False},
            )
            if swept:
                logger.warning(
                    "Removed %d duplicate unlisted record(s)", swept,
                    extra={"ticket_id": ticket_id, "count": swept},
                )
            listing = build_resale_record(ticket, price, root_price, self.clock())
            await self.store.insert(listing)
        except ExchangeError:
            raise
        except Exception as e:
            raise interrupted("resell", "reinsert", ticket_id, caller, e) from e

        logger.info(
            "Ticket listed for resale",
            extra={"ticket_id": ticket_id, "username": caller, "price": price},
        )
        return listing
