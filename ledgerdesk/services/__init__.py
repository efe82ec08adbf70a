from ledgerdesk.services.accounts import account_service
from ledgerdesk.services.review import review_service
from ledgerdesk.services.stats import stats_service
from ledgerdesk.services.todos import todo_service
from ledgerdesk.services.transactions import transaction_service

__all__ = [
    "account_service",
    "review_service",
    "stats_service",
    "todo_service",
    "transaction_service",
]
