from ledgerdesk.repositories.account import account_repo
from ledgerdesk.repositories.todo import todo_repo
from ledgerdesk.repositories.transaction import transaction_repo

__all__ = ["account_repo", "todo_repo", "transaction_repo"]
