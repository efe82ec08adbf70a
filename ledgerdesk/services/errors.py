"""Error kinds raised by the services and turned into failed envelopes at the action boundary."""


class LedgerError(Exception):
    """Base class. ``str(exc)`` is the human-readable message shown to the caller."""

    kind = "ledger_error"


class UnauthenticatedError(LedgerError):
    kind = "unauthenticated"

    def __init__(self, message: str = "Not signed in or authentication failed"):
        super().__init__(message)


class ForbiddenError(LedgerError):
    kind = "forbidden"


class InvalidInputError(LedgerError):
    kind = "invalid_input"


class InvalidAmountError(InvalidInputError):
    kind = "invalid_amount"


class InsufficientBalanceError(LedgerError):
    kind = "insufficient_balance"


class NotFoundError(LedgerError):
    kind = "not_found"


class InvalidStateError(LedgerError):
    kind = "invalid_state"


class ConflictError(LedgerError):
    kind = "conflict"


class StoreFailureError(LedgerError):
    kind = "store_failure"

    def __init__(self, message: str = "A storage error occurred, please try again later"):
        super().__init__(message)
