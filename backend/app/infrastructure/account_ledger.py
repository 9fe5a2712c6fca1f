"""SQL Account Ledger — balance primitives over the accounts table.

Invariants:
    - debit_balance is conditional: it matches only when balance >= amount,
      so a debit can never drive a balance negative
    - credit/debit return the matched row count (0 = account missing or underfunded)
    - Amounts must be positive; zero/negative amounts raise ValueError
    - autocommit=True commits after every primitive (same contract as SqlTicketStore)

Design Decisions:
    - Arithmetic done in SQL (balance = balance ± amount): two concurrent
      requests never overwrite each other's read-modify-write
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account


def _to_dict(account: Account) -> dict:
    return {
        "username": account.username,
        "password_hash": account.password_hash,
        "balance": account.balance,
        "created_at": account.created_at,
    }


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValueError(f"Ledger amount must be a positive integer, got {amount!r}")


class SqlAccountLedger:
    """AccountLedger implementation backed by an AsyncSession."""

    def __init__(self, db: AsyncSession, autocommit: bool = True):
        self.db = db
        self.autocommit = autocommit

    async def _persist(self) -> None:
        if self.autocommit:
            await self.db.commit()
        else:
            await self.db.flush()

    async def find_account(self, username: str) -> dict | None:
        result = await self.db.execute(
            select(Account).where(Account.username == username)
            .execution_options(populate_existing=True),
        )
        account = result.scalar_one_or_none()
        return _to_dict(account) if account is not None else None

    async def create_account(
        self, username: str, password_hash: str, balance: int,
    ) -> dict:
        account = Account(
            username=username, password_hash=password_hash, balance=balance,
        )
        self.db.add(account)
        await self._persist()
        return _to_dict(account)

    async def credit_balance(self, username: str, amount: int) -> int:
        _check_amount(amount)
        result = await self.db.execute(
            update(Account)
            .where(Account.username == username)
            .values(balance=Account.balance + amount)
            .execution_options(synchronize_session=False),
        )
        await self._persist()
        return result.rowcount

    async def debit_balance(self, username: str, amount: int) -> int:
        _check_amount(amount)
        result = await self.db.execute(
            update(Account)
            .where(Account.username == username, Account.balance >= amount)
            .values(balance=Account.balance - amount)
            .execution_options(synchronize_session=False),
        )
        await self._persist()
        return result.rowcount
