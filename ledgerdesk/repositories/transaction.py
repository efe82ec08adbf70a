from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Transaction, TransactionStatus, TransactionType
from ledgerdesk.models.common import utcnow


def _money(value) -> Decimal:
    # SQLite aggregates NUMERIC columns as floats.
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class TransactionRepository:
    async def get_by_id(self, db: AsyncSession, transaction_id: int) -> Transaction | None:
        result = await db.execute(
            select(Transaction)
            .where(Transaction.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        user_id: str,
        transaction_type: TransactionType,
        amount: Decimal,
        status: TransactionStatus = TransactionStatus.PENDING,
        reviewed_by: str | None = None,
    ) -> Transaction:
        now = utcnow()
        tx = Transaction(
            user_id=user_id,
            type=transaction_type,
            amount=amount,
            status=status,
            reviewed_by=reviewed_by,
            created_at=now,
            updated_at=now,
        )
        db.add(tx)
        await db.flush()
        return tx

    async def transition_if_pending(
        self,
        db: AsyncSession,
        transaction_id: int,
        new_status: TransactionStatus,
        reviewed_by: str,
    ) -> bool:
        """
        Compare-and-swap on status: only a row still in "pending" is moved.
        Returns False when another reviewer got there first.
        """
        result = await db.execute(
            update(Transaction)
            .where(
                Transaction.id == transaction_id,
                Transaction.status == TransactionStatus.PENDING,
            )
            .values(status=new_status, reviewed_by=reviewed_by, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _filtered(
        self,
        transaction_type: TransactionType | None = None,
        status: TransactionStatus | None = None,
        user_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Select:
        stmt = select(Transaction)
        if transaction_type is not None:
            stmt = stmt.where(Transaction.type == transaction_type)
        if status is not None:
            stmt = stmt.where(Transaction.status == status)
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        if start_date is not None:
            stmt = stmt.where(Transaction.created_at >= _start_of_day(start_date))
        if end_date is not None:
            # End date is inclusive of the whole day.
            stmt = stmt.where(Transaction.created_at < _start_of_day(end_date + timedelta(days=1)))
        return stmt.order_by(Transaction.created_at.desc(), Transaction.id.desc())

    async def search(
        self,
        db: AsyncSession,
        transaction_type: TransactionType | None = None,
        status: TransactionStatus | None = None,
        user_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        stmt = self._filtered(transaction_type, status, user_id, start_date, end_date)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def list_pending(self, db: AsyncSession) -> list[Transaction]:
        return await self.search(db, status=TransactionStatus.PENDING)

    async def totals_by_type_and_status(
        self,
        db: AsyncSession,
    ) -> dict[tuple[TransactionType, TransactionStatus], tuple[int, Decimal]]:
        result = await db.execute(
            select(
                Transaction.type,
                Transaction.status,
                func.count(),
                func.coalesce(func.sum(Transaction.amount), 0),
            ).group_by(Transaction.type, Transaction.status)
        )
        return {
            (tx_type, status): (count, _money(total))
            for tx_type, status, count, total in result.all()
        }

    async def list_for_daily_stats(
        self,
        db: AsyncSession,
        since: date,
        user_id: str | None = None,
    ) -> list[tuple[TransactionType, Decimal, datetime]]:
        """(type, amount, created_at) of approved and pending transactions created on or after ``since``."""
        stmt = (
            select(Transaction.type, Transaction.amount, Transaction.created_at)
            .where(
                Transaction.status.in_([TransactionStatus.APPROVED, TransactionStatus.PENDING]),
                Transaction.created_at >= _start_of_day(since),
            )
            .order_by(Transaction.created_at)
        )
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        result = await db.execute(stmt)
        return [(t, a, c) for t, a, c in result.all()]


transaction_repo = TransactionRepository()
