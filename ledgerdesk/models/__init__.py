from ledgerdesk.models.account import Account, AccountRole
from ledgerdesk.models.todo import Todo
from ledgerdesk.models.transaction import (
    STATUS_TRANSITIONS,
    ReviewDecision,
    Transaction,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "Account",
    "AccountRole",
    "ReviewDecision",
    "STATUS_TRANSITIONS",
    "Todo",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
]
