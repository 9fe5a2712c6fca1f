"""Ticket ORM — one row per live or historical ticket record.

Invariants:
    - ticket_id is unique: a resale "move" deletes the row before reinserting the id
    - sold is NULLABLE: older rows may lack the flag, and sold = false does not match NULL
    - Lineage columns (original_price, original_owner, root_ticket_id) are optional
    - Sold rows are terminal history and are never reused

Design Decisions:
    - row_id surrogate key separate from ticket_id: delete+reinsert keeps the
      public id stable while the physical row changes
    - Event date kept as free text: it is descriptive and participates in
      lineage matching by exact equality
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Ticket(Base):
    """Ticket record — descriptive fields, ownership, flags and lineage."""
    __tablename__ = "tickets"

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True,
    )
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    event: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    owner: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    resale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sold: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Lineage
    original_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    original_owner: Mapped[str | None] = mapped_column(String(100), nullable=True)
    previous_owner: Mapped[str | None] = mapped_column(String(100), nullable=True)
    root_ticket_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    purchase_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
