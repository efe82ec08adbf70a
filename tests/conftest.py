from decimal import Decimal

import pytest_asyncio

from ledgerdesk import actions
from ledgerdesk.database import build_engine, build_sessionmaker, create_tables
from ledgerdesk.models import AccountRole, Transaction
from ledgerdesk.repositories import account_repo, transaction_repo
from ledgerdesk.services import account_service
from ledgerdesk.services.auth import Principal

ADMIN = Principal(user_id="admin-1", role=AccountRole.ADMIN)
SECOND_ADMIN = Principal(user_id="admin-2", role=AccountRole.ADMIN)
ALICE = Principal(user_id="alice", role=AccountRole.USER)
BOB = Principal(user_id="bob", role=AccountRole.USER)


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File-backed so that separate sessions really are separate connections.
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledgerdesk-test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    factory = build_sessionmaker(engine)
    async with factory() as session:
        await account_service.register_account(session, ADMIN.user_id, AccountRole.ADMIN, full_name="Admin One")
        await account_service.register_account(session, SECOND_ADMIN.user_id, AccountRole.ADMIN)
        await account_service.register_account(
            session, ALICE.user_id, full_name="Alice", email="alice@example.com", phone="555-0100"
        )
        await account_service.register_account(session, BOB.user_id, full_name="Bob", email="bob@example.com")
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def fund(db, user_id: str, amount: str) -> None:
    """Give an account an opening balance through the admin recharge path."""
    result = await actions.recharge_account(db, ADMIN, user_id, amount)
    assert result.success, result.error


async def balance_of(session_factory, user_id: str) -> Decimal:
    async with session_factory() as session:
        return await account_repo.get_balance(session, user_id)


async def load_transaction(session_factory, transaction_id: int) -> Transaction:
    async with session_factory() as session:
        return await transaction_repo.get_by_id(session, transaction_id)
