"""
Review engine: admin approval/rejection of pending requests.

The status change is a compare-and-swap on ``status = 'pending'`` and the
balance change is a conditional update; both run in the caller's database
transaction. The caller commits on success and rolls back on any error, so a
review either applies both or neither.
"""
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Account, ReviewDecision, Transaction, TransactionStatus, TransactionType
from ledgerdesk.repositories import account_repo, transaction_repo
from ledgerdesk.services.auth import Principal, require_admin
from ledgerdesk.services.errors import (
    InsufficientBalanceError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from ledgerdesk.services.money import format_amount, parse_amount

logger = logging.getLogger(__name__)


class ReviewService:
    async def _apply_to_balance(self, db: AsyncSession, tx: Transaction) -> None:
        account = await account_repo.lock_for_update(db, tx.user_id)
        if account is None:
            raise NotFoundError(f"Account {tx.user_id} not found")
        if tx.type == TransactionType.DEPOSIT:
            await account_repo.credit(db, tx.user_id, tx.amount)
            return
        # Authoritative check: the creation-time check may be stale by now.
        if not await account_repo.debit_if_sufficient(db, tx.user_id, tx.amount):
            balance = await account_repo.get_balance(db, tx.user_id)
            raise InsufficientBalanceError(
                f"Insufficient balance, current balance: {format_amount(balance or Decimal('0'))}"
            )

    async def review_transaction(
        self,
        db: AsyncSession,
        principal: Principal | None,
        transaction_id: int,
        decision: ReviewDecision | str,
    ) -> Transaction:
        reviewer = require_admin(principal, "review transaction requests")
        try:
            decision = ReviewDecision(decision)
        except ValueError:
            raise InvalidInputError(f"Invalid review decision: {decision!r}") from None

        tx = await transaction_repo.get_by_id(db, transaction_id)
        if tx is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        target = decision.target_status
        if not tx.status.can_transition_to(target):
            raise InvalidStateError(
                f"Transaction {transaction_id} cannot be reviewed, current status: {tx.status.value}"
            )

        # Claim the row first; a concurrent reviewer blocks here or sees zero rows.
        if not await transaction_repo.transition_if_pending(db, tx.id, target, reviewer.user_id):
            current = await transaction_repo.get_by_id(db, transaction_id)
            raise InvalidStateError(
                f"Transaction {transaction_id} cannot be reviewed, current status: "
                f"{current.status.value if current else 'unknown'}"
            )
        if decision is ReviewDecision.APPROVE:
            await self._apply_to_balance(db, tx)

        logger.info(
            "Transaction %s (%s %s for %s) %s by %s",
            tx.id,
            tx.type.value,
            tx.amount,
            tx.user_id,
            target.value,
            reviewer.user_id,
        )
        return await transaction_repo.get_by_id(db, transaction_id)

    async def recharge_account(
        self,
        db: AsyncSession,
        principal: Principal | None,
        user_id: str,
        amount: object,
    ) -> Account:
        """Admin top-up: an approved deposit and its credit, written together."""
        admin = require_admin(principal, "recharge user accounts")
        amount = parse_amount(amount)
        account = await account_repo.lock_for_update(db, user_id)
        if account is None:
            raise NotFoundError(f"Account {user_id} not found")
        tx = await transaction_repo.create(
            db,
            user_id,
            TransactionType.DEPOSIT,
            amount,
            status=TransactionStatus.APPROVED,
            reviewed_by=admin.user_id,
        )
        await account_repo.credit(db, user_id, amount)
        logger.info("Account %s recharged with %s by %s (transaction %s)", user_id, amount, admin.user_id, tx.id)
        return await account_repo.refresh(db, user_id)


review_service = ReviewService()
