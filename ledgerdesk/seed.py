"""ORM-based seed for SQLite and PostgreSQL compatibility."""
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Account, AccountRole
from ledgerdesk.services import account_service, review_service
from ledgerdesk.services.auth import Principal

ADMIN_ID = "admin"
SEED_USERS = [
    ("user_alice", "Alice", "alice.demo@example.com", Decimal("100.00")),
    ("user_bob", "Bob", "bob.demo@example.com", Decimal("80.00")),
]


async def run_seed(db: AsyncSession) -> str:
    """Seed the administrator and demo users. Idempotent. Returns status message."""
    r = await db.execute(select(Account).where(Account.user_id == ADMIN_ID).limit(1))
    if r.scalar_one_or_none() is not None:
        return "Already seeded"

    await account_service.register_account(
        db, ADMIN_ID, AccountRole.ADMIN, full_name="Administrator", email="admin@example.com"
    )
    admin = Principal(user_id=ADMIN_ID, role=AccountRole.ADMIN)
    for user_id, name, email, opening_balance in SEED_USERS:
        await account_service.register_account(db, user_id, full_name=name, email=email)
        # Opening balances go through the recharge path so each one has a matching deposit record.
        await review_service.recharge_account(db, admin, user_id, opening_balance)
    await db.flush()
    return "Seeded: admin, user_alice, user_bob with opening balances"
