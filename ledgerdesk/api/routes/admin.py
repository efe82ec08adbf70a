from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk import actions
from ledgerdesk.api.deps import get_principal
from ledgerdesk.database import get_db
from ledgerdesk.schemas import (
    AccountOut,
    ActionResult,
    AmountRequest,
    CreateAccountRequest,
    ReviewRequest,
    SystemStats,
    TransactionFilter,
    TransactionOut,
    UpdateProfileRequest,
)
from ledgerdesk.services.auth import Principal

router = APIRouter()


@router.get(
    "/transactions/pending",
    response_model=ActionResult[list[TransactionOut]],
    summary="Pending requests",
    description="All pending deposit and withdrawal requests across users, newest first.",
)
async def list_pending_transactions(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.list_pending_transactions(db, principal)


@router.get(
    "/transactions",
    response_model=ActionResult[list[TransactionOut]],
    summary="Search transactions",
    description="Filter by type, status, user and an inclusive creation-date range. 'all' disables a filter.",
)
async def list_transactions(
    type: str | None = Query(None, description="deposit, withdraw or all"),
    status: str | None = Query(None, description="pending, approved, rejected or all"),
    user_id: str | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None, description="Inclusive, whole day"),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    filters = TransactionFilter(
        type=type,
        status=status,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    )
    return await actions.list_transactions(db, principal, filters)


@router.post(
    "/transactions/{transaction_id}/review",
    response_model=ActionResult[TransactionOut],
    summary="Approve or reject a request",
    description="Approving applies the amount to the user's balance in the same database transaction.",
)
async def review_transaction(
    body: ReviewRequest,
    transaction_id: int = Path(..., description="Transaction id"),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.review_transaction(db, principal, transaction_id, body.decision)


@router.get("/users", response_model=ActionResult[list[AccountOut]], summary="List users")
async def list_users(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.list_accounts(db, principal)


@router.post("/users", response_model=ActionResult[AccountOut], summary="Create user account")
async def create_user(
    body: CreateAccountRequest,
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.create_account(
        db,
        principal,
        body.user_id,
        full_name=body.full_name,
        email=body.email,
        phone=body.phone,
    )


@router.patch("/users/{user_id}", response_model=ActionResult[AccountOut], summary="Update user profile")
async def update_user(
    body: UpdateProfileRequest,
    user_id: str = Path(..., description="User id"),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.update_profile(db, principal, user_id, body.full_name)


@router.post(
    "/users/{user_id}/recharge",
    response_model=ActionResult[AccountOut],
    summary="Recharge user account",
    description="Credit the account directly; recorded as an approved deposit.",
)
async def recharge_user(
    body: AmountRequest,
    user_id: str = Path(..., description="User id"),
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.recharge_account(db, principal, user_id, body.amount)


@router.get("/stats", response_model=ActionResult[SystemStats], summary="System statistics")
async def system_stats(
    principal: Principal | None = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await actions.system_stats(db, principal)
