"""SQL Ticket Store — predicate-oriented TicketStore over the tickets table.

Invariants:
    - Predicates are equality-only; a None value compiles to IS NULL
    - Unknown predicate/record fields raise ValueError (no silent column drops)
    - delete_one/update_one touch at most ONE row (lowest row_id wins)
    - autocommit=True commits after every primitive: no cross-record atomicity
    - Records leave the store as plain dicts keyed by TICKET_FIELDS

Design Decisions:
    - Record key "id" maps to column ticket_id; row_id never leaves the store
    - autocommit=False only flushes, so a request-level commit can wrap several
      primitives (transactional mode) without changing engine code
"""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import TICKET_FIELDS, Predicate, TicketRecord
from app.models.ticket import Ticket

_COLUMN_FOR_FIELD = {
    name: ("ticket_id" if name == "id" else name) for name in TICKET_FIELDS
}


def _column(field: str):
    try:
        return getattr(Ticket, _COLUMN_FOR_FIELD[field])
    except KeyError:
        raise ValueError(f"Unknown ticket field: {field}")


def _where(predicate: Predicate) -> list:
    clauses = []
    for field, value in predicate.items():
        column = _column(field)
        clauses.append(column.is_(None) if value is None else column == value)
    return clauses


def _to_record(row: Ticket) -> TicketRecord:
    return {
        field: getattr(row, column) for field, column in _COLUMN_FOR_FIELD.items()
    }


def _to_columns(fields: dict) -> dict:
    values = {}
    for field, value in fields.items():
        _column(field)
        values[_COLUMN_FOR_FIELD[field]] = value
    return values


class SqlTicketStore:
    """TicketStore implementation backed by an AsyncSession."""

    def __init__(self, db: AsyncSession, autocommit: bool = True):
        self.db = db
        self.autocommit = autocommit

    async def _persist(self) -> None:
        if self.autocommit:
            await self.db.commit()
        else:
            await self.db.flush()

    async def _first_row_id(self, predicate: Predicate) -> int | None:
        result = await self.db.execute(
            select(Ticket.row_id).where(*_where(predicate))
            .order_by(Ticket.row_id).limit(1),
        )
        return result.scalar_one_or_none()

    async def find_one(self, predicate: Predicate) -> TicketRecord | None:
        result = await self.db.execute(
            select(Ticket).where(*_where(predicate))
            .order_by(Ticket.row_id).limit(1)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _to_record(row) if row is not None else None

    async def find_many(self, predicate: Predicate) -> list[TicketRecord]:
        result = await self.db.execute(
            select(Ticket).where(*_where(predicate)).order_by(Ticket.row_id)
            .execution_options(populate_existing=True),
        )
        return [_to_record(row) for row in result.scalars().all()]

    async def insert(self, record: TicketRecord) -> None:
        values = {k: v for k, v in _to_columns(record).items() if v is not None}
        if record.get("sold") is None:
            values["sold"] = None
        self.db.add(Ticket(**values))
        await self._persist()

    async def delete_one(self, predicate: Predicate) -> int:
        row_id = await self._first_row_id(predicate)
        if row_id is None:
            return 0
        result = await self.db.execute(
            delete(Ticket).where(Ticket.row_id == row_id, *_where(predicate)),
        )
        await self._persist()
        return result.rowcount

    async def delete_many(self, predicate: Predicate) -> int:
        result = await self.db.execute(delete(Ticket).where(*_where(predicate)))
        await self._persist()
        return result.rowcount

    async def update_one(self, predicate: Predicate, fields: dict) -> int:
        row_id = await self._first_row_id(predicate)
        if row_id is None:
            return 0
        result = await self.db.execute(
            update(Ticket)
            .where(Ticket.row_id == row_id, *_where(predicate))
            .values(**_to_columns(fields)),
        )
        await self._persist()
        return result.rowcount
