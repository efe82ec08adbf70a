"""
Action layer: the operation boundary between callers (HTTP routes, scripts)
and the services.

Every action runs in the caller's session as one unit of work. On success the
session is committed and the data is wrapped in ``ActionResult.ok``; on any
``LedgerError`` the session is rolled back and a failed envelope with its
human-readable message is returned. Database and unexpected errors are rolled
back too, logged with their traceback and reported with a generic message.
Nothing is raised past this boundary.
"""
import functools
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.config import settings
from ledgerdesk.models import Transaction
from ledgerdesk.repositories import account_repo
from ledgerdesk.schemas import (
    AccountOut,
    ActionResult,
    DailyStat,
    SystemStats,
    TodoOut,
    TransactionFilter,
    TransactionOut,
    UserSummary,
)
from ledgerdesk.services import (
    account_service,
    review_service,
    stats_service,
    todo_service,
    transaction_service,
)
from ledgerdesk.services.auth import Principal
from ledgerdesk.services.errors import LedgerError, StoreFailureError

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = ("password", "token", "secret")


def _format_value(key: str, value: Any) -> str:
    if any(s in key.lower() for s in SENSITIVE_KEYS):
        return "***"
    return repr(value)


def _format_args(args: tuple, kwargs: dict) -> str:
    parts = [repr(a) for a in args]
    parts.extend(f"{k}={_format_value(k, v)}" for k, v in kwargs.items())
    return ", ".join(parts) or "(no arguments)"


def server_action(name: str):
    """
    Wrap a service call into the envelope and commit/rollback discipline.
    Logging here only observes: the returned envelope is the same whatever
    ``action_log_level`` is.
    """

    def decorator(func: Callable[..., Awaitable[Any]]):
        @functools.wraps(func)
        async def wrapper(db: AsyncSession, *args, **kwargs) -> ActionResult:
            level = settings.action_log_level
            if level == "full":
                logger.info("[action] %s (%s) - args: %s", name, func.__name__, _format_args(args, kwargs))
            started = time.perf_counter()
            try:
                data = await func(db, *args, **kwargs)
                await db.commit()
            except LedgerError as e:
                await db.rollback()
                result = ActionResult.fail(str(e))
                outcome = e.kind
            except SQLAlchemyError:
                await db.rollback()
                logger.exception("[action] %s (%s) - store failure", name, func.__name__)
                result = ActionResult.fail(str(StoreFailureError()))
                outcome = StoreFailureError.kind
            except Exception:
                await db.rollback()
                logger.exception("[action] %s (%s) - unexpected error", name, func.__name__)
                result = ActionResult.fail("An unexpected error occurred, please try again later")
                outcome = "error"
            else:
                result = ActionResult.ok(data)
                outcome = "ok"
            duration_ms = (time.perf_counter() - started) * 1000
            if level == "minimal":
                logger.info("[action] %s (%s) - %s (%.1fms)", name, func.__name__, outcome, duration_ms)
            elif level == "full":
                logger.info(
                    "[action] %s (%s) - %s (%.1fms) - result: %s",
                    name,
                    func.__name__,
                    outcome,
                    duration_ms,
                    result.model_dump_json(),
                )
            return result

        return wrapper

    return decorator


async def _with_users(db: AsyncSession, transactions: list[Transaction]) -> list[TransactionOut]:
    """Attach the owner's contact details to each transaction, as the admin tables show them."""
    accounts = await account_repo.get_many(db, [tx.user_id for tx in transactions])
    out = []
    for tx in transactions:
        item = TransactionOut.model_validate(tx)
        account = accounts.get(tx.user_id)
        if account is not None:
            item.user = UserSummary.model_validate(account)
        out.append(item)
    return out


# -- user side ---------------------------------------------------------------


@server_action("Get account")
async def get_account(db: AsyncSession, principal: Principal | None) -> AccountOut:
    return AccountOut.model_validate(await account_service.get_account(db, principal))


@server_action("Create transaction request")
async def create_transaction(
    db: AsyncSession,
    principal: Principal | None,
    transaction_type: str,
    amount: object,
) -> TransactionOut:
    tx = await transaction_service.create_transaction(db, principal, transaction_type, amount)
    return TransactionOut.model_validate(tx)


@server_action("Create deposit request")
async def create_deposit(db: AsyncSession, principal: Principal | None, amount: object) -> TransactionOut:
    return TransactionOut.model_validate(await transaction_service.create_deposit(db, principal, amount))


@server_action("Create withdrawal request")
async def create_withdrawal(db: AsyncSession, principal: Principal | None, amount: object) -> TransactionOut:
    return TransactionOut.model_validate(await transaction_service.create_withdrawal(db, principal, amount))


@server_action("List user transactions")
async def list_user_transactions(db: AsyncSession, principal: Principal | None) -> list[TransactionOut]:
    transactions = await transaction_service.list_user_transactions(db, principal)
    return [TransactionOut.model_validate(tx) for tx in transactions]


@server_action("Get user transaction stats")
async def user_transaction_stats(db: AsyncSession, principal: Principal | None) -> list[DailyStat]:
    return await stats_service.user_transaction_stats(db, principal)


# -- admin side --------------------------------------------------------------


@server_action("List pending transaction requests")
async def list_pending_transactions(db: AsyncSession, principal: Principal | None) -> list[TransactionOut]:
    return await _with_users(db, await transaction_service.list_pending_transactions(db, principal))


@server_action("List all transactions")
async def list_transactions(
    db: AsyncSession,
    principal: Principal | None,
    filters: TransactionFilter | None = None,
) -> list[TransactionOut]:
    return await _with_users(db, await transaction_service.list_transactions(db, principal, filters))


@server_action("Review transaction request")
async def review_transaction(
    db: AsyncSession,
    principal: Principal | None,
    transaction_id: int,
    decision: str,
) -> TransactionOut:
    tx = await review_service.review_transaction(db, principal, transaction_id, decision)
    return (await _with_users(db, [tx]))[0]


@server_action("Recharge user account")
async def recharge_account(
    db: AsyncSession,
    principal: Principal | None,
    user_id: str,
    amount: object,
) -> AccountOut:
    return AccountOut.model_validate(await review_service.recharge_account(db, principal, user_id, amount))


@server_action("List all users")
async def list_accounts(db: AsyncSession, principal: Principal | None) -> list[AccountOut]:
    return [AccountOut.model_validate(a) for a in await account_service.list_accounts(db, principal)]


@server_action("Create user account")
async def create_account(
    db: AsyncSession,
    principal: Principal | None,
    user_id: str,
    full_name: str | None = None,
    email: str | None = None,
    phone: str | None = None,
) -> AccountOut:
    account = await account_service.create_account(
        db, principal, user_id, full_name=full_name, email=email, phone=phone
    )
    return AccountOut.model_validate(account)


@server_action("Update user profile")
async def update_profile(
    db: AsyncSession,
    principal: Principal | None,
    user_id: str,
    full_name: str | None,
) -> AccountOut:
    return AccountOut.model_validate(await account_service.update_profile(db, principal, user_id, full_name))


@server_action("Get system stats")
async def system_stats(db: AsyncSession, principal: Principal | None) -> SystemStats:
    return await stats_service.system_stats(db, principal)


# -- todos -------------------------------------------------------------------


@server_action("List todos")
async def list_todos(db: AsyncSession, principal: Principal | None) -> list[TodoOut]:
    return [TodoOut.model_validate(t) for t in await todo_service.list_todos(db, principal)]


@server_action("Add todo")
async def add_todo(db: AsyncSession, principal: Principal | None, title: str | None) -> TodoOut:
    return TodoOut.model_validate(await todo_service.add_todo(db, principal, title))


@server_action("Toggle todo")
async def toggle_todo(db: AsyncSession, principal: Principal | None, todo_id: int) -> TodoOut:
    return TodoOut.model_validate(await todo_service.toggle_todo(db, principal, todo_id))


@server_action("Delete todo")
async def delete_todo(db: AsyncSession, principal: Principal | None, todo_id: int) -> None:
    await todo_service.delete_todo(db, principal, todo_id)
