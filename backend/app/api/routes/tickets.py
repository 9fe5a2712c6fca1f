"""Ticket Routes — listing, minting, resale, purchase, edit and delete.

Invariants:
    - Caller identity from X-Username on every mutating route
    - Engines raise ExchangeError; the global handler maps kind → status code
    - ctx.commit() runs only after the engine returned (no-op outside transactional mode)

Design Decisions:
    - POST /resale and /buy keep ticket_id in the body (clients already send it there)
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import ExchangeContext, get_caller, get_exchange
from app.schemas.ticket import (
    ActionResponse, PurchaseRequest, ResaleRequest, TicketCreate,
    TicketEdit, TicketResponse,
)

router = APIRouter(prefix="/api/v1/tickets", tags=["tickets"])


@router.get("", response_model=list[TicketResponse])
async def list_for_sale(ctx: ExchangeContext = Depends(get_exchange)):
    """Every ticket currently listed for resale."""
    return await ctx.catalog().list_for_sale()


@router.get("/mine", response_model=list[TicketResponse])
async def list_mine(
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    """Every record owned by the caller, sold history included."""
    return await ctx.catalog().list_owned(caller)


@router.post(
    "", response_model=TicketResponse, status_code=status.HTTP_201_CREATED,
)
async def mint_ticket(
    body: TicketCreate,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    record = await ctx.catalog().mint(caller, body.model_dump())
    await ctx.commit()
    return record


@router.post("/resale", response_model=TicketResponse)
async def resell_ticket(
    body: ResaleRequest,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    listing = await ctx.resale_engine().resell(caller, body.ticket_id, body.price)
    await ctx.commit()
    return listing


@router.post("/buy", response_model=TicketResponse)
async def buy_ticket(
    body: PurchaseRequest,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    new_ticket = await ctx.purchase_engine().purchase(caller, body.ticket_id)
    await ctx.commit()
    return new_ticket


@router.put("/{ticket_id}", response_model=TicketResponse)
async def edit_ticket(
    ticket_id: str,
    body: TicketEdit,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    edited = await ctx.edit_engine().edit(caller, ticket_id, body.model_dump())
    await ctx.commit()
    return edited


@router.delete("/{ticket_id}", response_model=ActionResponse)
async def delete_ticket(
    ticket_id: str,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    await ctx.catalog().delete(caller, ticket_id)
    await ctx.commit()
    return ActionResponse(message="Ticket deleted successfully")
