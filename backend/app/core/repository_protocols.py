"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - TicketStore offers single-record primitives only: no transaction, no session
    - Count-returning primitives are the only race signal engines receive
    - A predicate matches on equality per field; None matches an absent value

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      the engines in services/ orchestrate them around pure core helpers
"""

from typing import Protocol

from app.core.domain_types import Predicate, TicketRecord, Username


class TicketStore(Protocol):
    """Contract for ticket record persistence — implemented by shell."""
    async def find_one(self, predicate: Predicate) -> TicketRecord | None: ...
    async def find_many(self, predicate: Predicate) -> list[TicketRecord]: ...
    async def insert(self, record: TicketRecord) -> None: ...
    async def delete_one(self, predicate: Predicate) -> int: ...
    async def delete_many(self, predicate: Predicate) -> int: ...
    async def update_one(self, predicate: Predicate, fields: dict) -> int: ...


class AccountLedger(Protocol):
    """Contract for account balances — implemented by shell."""
    async def find_account(self, username: Username) -> dict | None: ...
    async def create_account(
        self, username: Username, password_hash: str, balance: int,
    ) -> dict: ...
    async def credit_balance(self, username: Username, amount: int) -> int: ...
    async def debit_balance(self, username: Username, amount: int) -> int: ...
