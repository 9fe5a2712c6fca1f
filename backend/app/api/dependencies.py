"""Route Dependencies — caller identity and per-request store/engine wiring.

Invariants:
    - Caller identity comes from the X-Username header (no authentication)
    - One ExchangeContext per request: store and ledger share the request's AsyncSession
    - In transactional mode primitives only flush; commit() is the single commit point

Design Decisions:
    - Engines built on demand from the context: routes stay one-liners and tests
      override get_db/get_settings instead of patching engines
"""

from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.infrastructure.account_ledger import SqlAccountLedger
from app.infrastructure.database import get_db
from app.infrastructure.ticket_store import SqlTicketStore
from app.services.account_service import AccountService
from app.services.edit_engine import EditEngine
from app.services.lineage_resolver import LineageResolver
from app.services.purchase_engine import PurchaseEngine
from app.services.resale_engine import ResaleEngine
from app.services.ticket_catalog import TicketCatalog


async def get_caller(x_username: str = Header(min_length=1, max_length=100)) -> str:
    return x_username.strip()


@dataclass
class ExchangeContext:
    db: AsyncSession
    settings: Settings
    tickets: SqlTicketStore
    accounts: SqlAccountLedger

    @property
    def resolver(self) -> LineageResolver:
        return LineageResolver(self.tickets, self.settings.lineage_max_hops)

    def resale_engine(self) -> ResaleEngine:
        return ResaleEngine(self.tickets, self.resolver)

    def purchase_engine(self) -> PurchaseEngine:
        return PurchaseEngine(self.tickets, self.accounts)

    def edit_engine(self) -> EditEngine:
        return EditEngine(self.tickets, self.resolver)

    def catalog(self) -> TicketCatalog:
        return TicketCatalog(self.tickets, self.accounts)

    def account_service(self) -> AccountService:
        return AccountService(self.accounts, self.settings.starting_balance)

    async def commit(self) -> None:
        if self.settings.transactional_mode:
            await self.db.commit()


async def get_exchange(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ExchangeContext:
    autocommit = not settings.transactional_mode
    return ExchangeContext(
        db=db,
        settings=settings,
        tickets=SqlTicketStore(db, autocommit=autocommit),
        accounts=SqlAccountLedger(db, autocommit=autocommit),
    )
