"""Dashboard statistics for administrators and users."""
from datetime import date, timedelta, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.config import settings
from ledgerdesk.models import TransactionStatus, TransactionType
from ledgerdesk.models.common import utcnow
from ledgerdesk.repositories import account_repo, transaction_repo
from ledgerdesk.schemas import DailyStat, SystemStats
from ledgerdesk.services.auth import Principal, require_admin, require_principal

ZERO = Decimal("0.00")


class StatsService:
    def __init__(self, window_days: int | None = None):
        self.window_days = window_days

    @property
    def days(self) -> int:
        return self.window_days or settings.stats_window_days

    async def _daily_stats(self, db: AsyncSession, user_id: str | None, today: date | None = None) -> list[DailyStat]:
        today = today or utcnow().date()
        first_day = today - timedelta(days=self.days - 1)
        buckets = {
            first_day + timedelta(days=i): {TransactionType.DEPOSIT: ZERO, TransactionType.WITHDRAW: ZERO}
            for i in range(self.days)
        }
        rows = await transaction_repo.list_for_daily_stats(db, first_day, user_id=user_id)
        for tx_type, amount, created_at in rows:
            if created_at.tzinfo is not None:
                created_at = created_at.astimezone(timezone.utc)
            bucket = buckets.get(created_at.date())
            if bucket is not None:
                bucket[tx_type] += amount
        return [
            DailyStat(day=day, deposit=totals[TransactionType.DEPOSIT], withdraw=totals[TransactionType.WITHDRAW])
            for day, totals in buckets.items()
        ]

    async def system_stats(self, db: AsyncSession, principal: Principal | None) -> SystemStats:
        require_admin(principal, "view system statistics")
        totals = await transaction_repo.totals_by_type_and_status(db)

        def count(tx_type: TransactionType, status: TransactionStatus) -> int:
            return totals.get((tx_type, status), (0, ZERO))[0]

        def amount(tx_type: TransactionType, status: TransactionStatus) -> Decimal:
            return totals.get((tx_type, status), (0, ZERO))[1]

        pending_deposits = count(TransactionType.DEPOSIT, TransactionStatus.PENDING)
        pending_withdrawals = count(TransactionType.WITHDRAW, TransactionStatus.PENDING)
        return SystemStats(
            total_users=await account_repo.count(db),
            total_balance=await account_repo.total_balance(db),
            total_transactions=sum(c for c, _ in totals.values()),
            total_deposit=amount(TransactionType.DEPOSIT, TransactionStatus.APPROVED),
            total_withdraw=amount(TransactionType.WITHDRAW, TransactionStatus.APPROVED),
            pending_deposits=pending_deposits,
            pending_withdrawals=pending_withdrawals,
            pending_transactions=pending_deposits + pending_withdrawals,
            daily_stats=await self._daily_stats(db, user_id=None),
        )

    async def user_transaction_stats(self, db: AsyncSession, principal: Principal | None) -> list[DailyStat]:
        principal = require_principal(principal)
        return await self._daily_stats(db, user_id=principal.user_id)


stats_service = StatsService()
