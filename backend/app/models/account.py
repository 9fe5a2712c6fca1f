"""Account ORM — balance holder keyed by username.

Invariants:
    - username is unique and immutable
    - balance is a non-negative integer (CHECK constraint)
    - Accounts are never deleted; balance changes only through the ledger primitives

Design Decisions:
    - Integer surrogate key + unique username: the ledger addresses accounts by
      username only, the surrogate keeps joins cheap if tickets ever reference it
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Account(Base):
    """Account — identity plus spendable balance."""
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="accounts_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
