from ledgerdesk.schemas.envelope import ActionResult
from ledgerdesk.schemas.ledger import (
    AccountOut,
    AmountRequest,
    CreateAccountRequest,
    ReviewRequest,
    TransactionFilter,
    TransactionOut,
    UpdateProfileRequest,
    UserSummary,
)
from ledgerdesk.schemas.stats import DailyStat, SystemStats
from ledgerdesk.schemas.todo import TodoCreateRequest, TodoOut

__all__ = [
    "AccountOut",
    "ActionResult",
    "AmountRequest",
    "CreateAccountRequest",
    "DailyStat",
    "ReviewRequest",
    "SystemStats",
    "TodoCreateRequest",
    "TodoOut",
    "TransactionFilter",
    "TransactionOut",
    "UpdateProfileRequest",
    "UserSummary",
]
