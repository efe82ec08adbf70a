from decimal import Decimal
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Account, AccountRole
from ledgerdesk.models.account import MONEY


def _cents(expr):
    # SQLite evaluates NUMERIC arithmetic in REAL; round back to whole cents on every write and compare.
    return func.round(expr, 2, type_=MONEY)


class AccountRepository:
    async def get_by_user_id(self, db: AsyncSession, user_id: str) -> Account | None:
        result = await db.execute(select(Account).where(Account.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> Account | None:
        result = await db.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()

    async def refresh(self, db: AsyncSession, user_id: str) -> Account | None:
        """Re-read the row, overwriting any stale copy held in the session's identity map."""
        result = await db.execute(
            select(Account)
            .where(Account.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        user_id: str,
        role: AccountRole = AccountRole.USER,
        full_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> Account:
        account = Account(
            user_id=user_id,
            role=role,
            balance=Decimal("0.00"),
            full_name=full_name,
            email=email,
            phone=phone,
        )
        db.add(account)
        await db.flush()
        return account

    async def list_all(self, db: AsyncSession) -> list[Account]:
        result = await db.execute(
            select(Account).order_by(Account.created_at.desc(), Account.user_id)
        )
        return list(result.scalars().all())

    async def get_many(self, db: AsyncSession, user_ids: list[str]) -> dict[str, Account]:
        if not user_ids:
            return {}
        result = await db.execute(select(Account).where(Account.user_id.in_(set(user_ids))))
        return {a.user_id: a for a in result.scalars().all()}

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Account))
        return result.scalar_one()

    async def total_balance(self, db: AsyncSession) -> Decimal:
        result = await db.execute(select(func.coalesce(func.sum(Account.balance), 0)))
        # SQLite aggregates NUMERIC columns as floats.
        return Decimal(str(result.scalar_one() or 0)).quantize(Decimal("0.01"))

    async def get_balance(self, db: AsyncSession, user_id: str) -> Decimal | None:
        result = await db.execute(select(Account.balance).where(Account.user_id == user_id))
        return result.scalar_one_or_none()

    async def lock_for_update(self, db: AsyncSession, user_id: str) -> Account | None:
        """Row lock on backends that support it (no-op on SQLite, which locks the whole file on write)."""
        result = await db.execute(
            select(Account)
            .where(Account.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update_full_name(self, db: AsyncSession, user_id: str, full_name: str | None) -> bool:
        result = await db.execute(
            update(Account)
            .where(Account.user_id == user_id)
            .values(full_name=full_name)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def credit(self, db: AsyncSession, user_id: str, amount: Decimal) -> bool:
        result = await db.execute(
            update(Account)
            .where(Account.user_id == user_id)
            .values(balance=_cents(Account.balance + amount))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def debit_if_sufficient(self, db: AsyncSession, user_id: str, amount: Decimal) -> bool:
        """Decrement only when the committed balance covers ``amount``; False when it does not."""
        result = await db.execute(
            update(Account)
            .where(Account.user_id == user_id, _cents(Account.balance) >= amount)
            .values(balance=_cents(Account.balance - amount))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


account_repo = AccountRepository()
