from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk import actions
from ledgerdesk.api.deps import get_principal
from ledgerdesk.database import get_db
from ledgerdesk.schemas import AccountOut, ActionResult, AmountRequest, DailyStat, TransactionOut
from ledgerdesk.services.auth import Principal

router = APIRouter()


@router.get(
    "/account",
    response_model=ActionResult[AccountOut],
    summary="Get own account",
    description="Current balance and profile of the signed-in user.",
)
async def get_account(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.get_account(db, principal)


@router.get(
    "/transactions",
    response_model=ActionResult[list[TransactionOut]],
    summary="List own transactions",
    description="All deposit and withdrawal requests of the signed-in user, newest first.",
)
async def list_transactions(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.list_user_transactions(db, principal)


@router.get(
    "/transactions/stats",
    response_model=ActionResult[list[DailyStat]],
    summary="Daily deposit/withdraw totals",
    description="Approved and pending amounts per day over the statistics window.",
)
async def transaction_stats(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.user_transaction_stats(db, principal)


@router.post(
    "/transactions/deposit",
    response_model=ActionResult[TransactionOut],
    summary="Request a deposit",
    description="Create a pending deposit request. The balance changes only once an administrator approves it.",
)
async def create_deposit(
    body: AmountRequest,
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.create_deposit(db, principal, body.amount)


@router.post(
    "/transactions/withdraw",
    response_model=ActionResult[TransactionOut],
    summary="Request a withdrawal",
    description="Create a pending withdrawal request. Fails if the current balance does not cover the amount.",
)
async def create_withdrawal(
    body: AmountRequest,
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.create_withdrawal(db, principal, body.amount)
