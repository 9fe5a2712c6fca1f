"""Account Routes — register, login, balance and top-up.

Invariants:
    - Balance of an unknown caller reads as 0 (never 404)
    - Registration and login never echo the password or its hash
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import ExchangeContext, get_caller, get_exchange
from app.schemas.account import (
    AccountCredentials, AccountResponse, BalanceResponse, TopUpRequest,
)

router = APIRouter(prefix="/api/v1", tags=["accounts"])


@router.post(
    "/register", response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: AccountCredentials, ctx: ExchangeContext = Depends(get_exchange),
):
    account = await ctx.account_service().register(body.username, body.password)
    await ctx.commit()
    return account


@router.post("/login", response_model=AccountResponse)
async def login(
    body: AccountCredentials, ctx: ExchangeContext = Depends(get_exchange),
):
    return await ctx.account_service().login(body.username, body.password)


@router.get("/balance", response_model=BalanceResponse)
async def balance(
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    return BalanceResponse(balance=await ctx.account_service().balance(caller))


@router.post("/topup", response_model=BalanceResponse)
async def top_up(
    body: TopUpRequest,
    caller: str = Depends(get_caller),
    ctx: ExchangeContext = Depends(get_exchange),
):
    new_balance = await ctx.account_service().top_up(caller, body.amount)
    await ctx.commit()
    return BalanceResponse(balance=new_balance)
