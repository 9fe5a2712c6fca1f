"""Price Lineage — pure helpers for walking a ticket's resale chain back to its mint.

Invariants:
    - A record without original_price IS its own root
    - Ancestor lookups match on {owner, event, date, type, price} only (no parent key)
    - LineageWalk never raises: a miss, a repeat or the hop limit ends the walk
      and the best-known root price stands

Design Decisions:
    - Walk state as a small class, lookups done by the shell: core stays free of IO
      while the resolver in services/ owns the async store calls
    - root_ticket_id is the explicit reference written at every hop; the
      field-matched walk only runs for records that lack it (older data)
"""

from app.core.domain_types import TicketRecord


DEFAULT_MAX_HOPS: int = 64


def has_lineage(record: TicketRecord) -> bool:
    return record.get("original_price") is not None


def ancestor_predicate(record: TicketRecord) -> dict:
    """Field-matched lookup for the record one hop closer to the mint."""
    return {
        "owner": record.get("original_owner"),
        "event": record.get("event"),
        "date": record.get("date"),
        "type": record.get("type"),
        "price": record.get("original_price"),
    }


def lineage_root_id(record: TicketRecord) -> str | None:
    """Id of the mint record a new hop should point at."""
    return record.get("root_ticket_id") or record.get("id")


def _record_key(record: TicketRecord) -> tuple:
    return (
        record.get("id"), record.get("owner"),
        record.get("price"), record.get("original_price"),
    )


class LineageWalk:
    """Tracks the best-known root price while the shell feeds it ancestors."""

    def __init__(self, start: TicketRecord, max_hops: int = DEFAULT_MAX_HOPS):
        self.current = start
        self.max_hops = max_hops
        self.hops = 0
        self.root_price: int = (
            start["original_price"] if has_lineage(start) else start["price"]
        )
        self._seen: set[tuple] = {_record_key(start)}

    @property
    def done(self) -> bool:
        return (
            not has_lineage(self.current)
            or not self.current.get("original_owner")
            or self.hops >= self.max_hops
        )

    def next_predicate(self) -> dict:
        return ancestor_predicate(self.current)

    def advance(self, ancestor: TicketRecord | None) -> bool:
        """Step to ancestor. Returns False when the walk must stop."""
        if ancestor is None:
            return False
        key = _record_key(ancestor)
        if key in self._seen:
            return False
        self._seen.add(key)
        self.hops += 1
        self.current = ancestor
        if has_lineage(ancestor):
            self.root_price = ancestor["original_price"]
        return True
