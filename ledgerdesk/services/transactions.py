"""
Deposit and withdrawal requests, and the read-side listings over them.
Creating a request never touches the balance; see services.review for that.
"""
import enum
import logging
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Transaction, TransactionStatus, TransactionType
from ledgerdesk.repositories import account_repo, transaction_repo
from ledgerdesk.schemas import TransactionFilter
from ledgerdesk.services.auth import Principal, require_admin, require_principal
from ledgerdesk.services.errors import InsufficientBalanceError, InvalidInputError, NotFoundError
from ledgerdesk.services.money import format_amount, parse_amount

logger = logging.getLogger(__name__)

ALL = "all"

E = TypeVar("E", bound=enum.Enum)


def _optional_filter(enum_cls: type[E], value: str | None, label: str) -> E | None:
    if value in (None, "", ALL):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInputError(f"Unknown {label} filter: {value!r}") from None


class TransactionService:
    async def create_transaction(
        self,
        db: AsyncSession,
        principal: Principal | None,
        transaction_type: TransactionType | str,
        amount: object,
    ) -> Transaction:
        principal = require_principal(principal)
        try:
            transaction_type = TransactionType(transaction_type)
        except ValueError:
            raise InvalidInputError(f"Unknown transaction type: {transaction_type!r}") from None
        amount = parse_amount(amount)

        if transaction_type == TransactionType.WITHDRAW:
            # Advisory only: the review engine re-checks against the balance at approval time.
            balance = await account_repo.get_balance(db, principal.user_id)
            if balance is None:
                raise NotFoundError(f"Account {principal.user_id} not found")
            if balance < amount:
                raise InsufficientBalanceError(
                    f"Insufficient balance, current balance: {format_amount(balance)}"
                )
        elif await account_repo.get_by_user_id(db, principal.user_id) is None:
            raise NotFoundError(f"Account {principal.user_id} not found")

        tx = await transaction_repo.create(db, principal.user_id, transaction_type, amount)
        logger.info(
            "Created %s request %s for %s: %s",
            transaction_type.value,
            tx.id,
            principal.user_id,
            amount,
        )
        return tx

    async def create_deposit(self, db: AsyncSession, principal: Principal | None, amount: object) -> Transaction:
        return await self.create_transaction(db, principal, TransactionType.DEPOSIT, amount)

    async def create_withdrawal(self, db: AsyncSession, principal: Principal | None, amount: object) -> Transaction:
        return await self.create_transaction(db, principal, TransactionType.WITHDRAW, amount)

    async def list_user_transactions(self, db: AsyncSession, principal: Principal | None) -> list[Transaction]:
        principal = require_principal(principal)
        return await transaction_repo.search(db, user_id=principal.user_id)

    async def list_pending_transactions(self, db: AsyncSession, principal: Principal | None) -> list[Transaction]:
        require_admin(principal, "view pending transaction requests")
        return await transaction_repo.list_pending(db)

    async def list_transactions(
        self,
        db: AsyncSession,
        principal: Principal | None,
        filters: TransactionFilter | None = None,
    ) -> list[Transaction]:
        require_admin(principal, "view all transactions")
        filters = filters or TransactionFilter()
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            raise InvalidInputError("Start date must not be after end date")
        return await transaction_repo.search(
            db,
            transaction_type=_optional_filter(TransactionType, filters.type, "type"),
            status=_optional_filter(TransactionStatus, filters.status, "status"),
            user_id=None if filters.user_id in (None, "", ALL) else filters.user_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )


transaction_service = TransactionService()
