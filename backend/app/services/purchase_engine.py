"""Purchase Engine — moves funds buyer → seller and forks ownership to a fresh id.

Invariants:
    - All preconditions (listed, not own ticket, both accounts, funds) checked before step 1
    - Steps run in fixed order: debit buyer → credit seller → retire listing → mint buyer record
    - buyer.after + seller.after == buyer.before + seller.before whenever the sequence completes
    - The retired id is sold=true, resale=false and never purchasable again
    - The buyer's record has a fresh id and inherits the root price ceiling

Design Decisions:
    - Conditional debit (balance >= price): a concurrent spend surfaces as
      ConflictError before anything moved
    - Detected races after the debit are compensated by reversing the transfer;
      unexpected store failures are NOT compensated, they are logged with the
      last step reached and raised as InternalError
"""

import logging
from typing import Callable
from datetime import datetime

from app.core.domain_types import TicketRecord
from app.core.errors import (
    ConflictError, ErrorContext, ExchangeError, InternalError, NotFoundError,
)
from app.core.repository_protocols import AccountLedger, TicketStore
from app.core.ticket_records import (
    build_purchase_record, check_purchase, listed_predicate, sold_fields,
)
from app.services.interruptions import interrupted
from app.services.record_stamps import new_ticket_id, utcnow

logger = logging.getLogger(__name__)


class PurchaseEngine:
    """Validates and executes ticket purchases."""

    def __init__(
        self,
        store: TicketStore,
        ledger: AccountLedger,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_ticket_id,
    ):
        self.store = store
        self.ledger = ledger
        self.clock = clock
        self.id_factory = id_factory

    async def purchase(self, caller: str, ticket_id: str) -> TicketRecord:
        """Buy a listed ticket. Returns the buyer's new ticket record."""
        ctx = ErrorContext(username=caller, ticket_id=ticket_id, operation="purchase")

        ticket = await self.store.find_one(listed_predicate(ticket_id))
        if ticket is None:
            raise NotFoundError("Ticket not found or not available for sale", ctx)

        seller = ticket["owner"]
        buyer_account = await self.ledger.find_account(caller)
        seller_account = await self.ledger.find_account(seller)
        price = check_purchase(ticket, buyer_account, seller_account, caller)

        if await self.ledger.debit_balance(caller, price) == 0:
            logger.warning(
                "Purchase debit matched no funds; balance changed concurrently",
                extra={"ticket_id": ticket_id, "username": caller},
            )
            raise ConflictError("Balance changed during purchase; nothing was charged", ctx)

        step = "credit_seller"
        try:
            if await self.ledger.credit_balance(seller, price) == 0:
                await self._refund_buyer(caller, price, ticket_id)
                raise InternalError("Seller account unavailable; payment returned", ctx)

            step = "retire_listing"
            if await self.store.update_one(listed_predicate(ticket_id), sold_fields()) == 0:
                await self._reverse_transfer(caller, seller, price, ticket_id)
                raise ConflictError("Ticket was sold to another buyer; payment returned", ctx)

            step = "mint_buyer_record"
            new_ticket = build_purchase_record(
                ticket, caller, self.id_factory(), self.clock(),
            )
            await self.store.insert(new_ticket)
        except ExchangeError:
            raise
        except Exception as e:
            raise interrupted("purchase", step, ticket_id, caller, e) from e

        logger.info(
            "Ticket purchased",
            extra={
                "ticket_id": ticket_id, "new_ticket_id": new_ticket["id"],
                "username": caller, "price": price,
            },
        )
        return new_ticket

    async def _refund_buyer(self, buyer: str, price: int, ticket_id: str) -> None:
        await self.ledger.credit_balance(buyer, price)
        logger.error(
            "Seller credit failed, buyer refunded",
            extra={"ticket_id": ticket_id, "username": buyer, "step": "credit_seller"},
        )

    async def _reverse_transfer(
        self, buyer: str, seller: str, price: int, ticket_id: str,
    ) -> None:
        """Undo debit+credit after losing the listing to a concurrent buyer."""
        if await self.ledger.debit_balance(seller, price) == 0:
            logger.error(
                "Could not claw back %d from seller; buyer refund skipped", price,
                extra={"ticket_id": ticket_id, "username": buyer, "step": "retire_listing"},
            )
            raise InternalError(
                "Purchase conflict could not be fully reversed",
                ErrorContext(
                    username=buyer, ticket_id=ticket_id,
                    operation="purchase", step="retire_listing",
                ),
            )
        await self.ledger.credit_balance(buyer, price)
        logger.warning(
            "Listing taken concurrently, transfer reversed",
            extra={"ticket_id": ticket_id, "username": buyer, "step": "retire_listing"},
        )
