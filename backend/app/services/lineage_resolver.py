"""Lineage Resolver — resolves a ticket's root (mint-time) price from the store.

Invariants:
    - resolve_root_price NEVER raises for a broken chain: it returns the best-known price
    - Records without original_price are their own root (zero lookups)
    - root_ticket_id, when present and pointing at a lineage-free record, resolves in one lookup
    - The field-matched walk stops on a miss, on a repeated record, or at max_hops

Design Decisions:
    - Walk bookkeeping lives in core/lineage.LineageWalk; this class only feeds it
      store lookups (ADR: impureim sandwich)
    - Store exceptions propagate: a failing store is not a broken chain
"""

import logging

from app.core.domain_types import TicketRecord
from app.core.lineage import DEFAULT_MAX_HOPS, LineageWalk, has_lineage
from app.core.repository_protocols import TicketStore

logger = logging.getLogger(__name__)


class LineageResolver:
    """Computes the resale price ceiling for a ticket record."""

    def __init__(self, store: TicketStore, max_hops: int = DEFAULT_MAX_HOPS):
        self.store = store
        self.max_hops = max_hops

    async def resolve_root_price(self, record: TicketRecord) -> int:
        if not has_lineage(record):
            return record["price"]

        root = await self._explicit_root(record)
        if root is not None and not has_lineage(root):
            return root["price"]

        return await self._walk(record)

    async def _explicit_root(self, record: TicketRecord) -> TicketRecord | None:
        root_id = record.get("root_ticket_id")
        if not root_id or root_id == record.get("id"):
            return None
        return await self.store.find_one({"id": root_id})

    async def _walk(self, record: TicketRecord) -> int:
        walk = LineageWalk(record, self.max_hops)
        while not walk.done:
            ancestor = await self.store.find_one(walk.next_predicate())
            if not walk.advance(ancestor):
                break
        if walk.hops >= self.max_hops:
            logger.warning(
                "Lineage walk hit hop limit (%d), using best-known root price",
                self.max_hops, extra={"ticket_id": record.get("id")},
            )
        return walk.root_price
