"""Parsing of user-supplied currency amounts."""
from decimal import Decimal, InvalidOperation

from ledgerdesk.services.errors import InvalidAmountError

CENT = Decimal("0.01")
# Numeric(20, 2) holds 18 integer digits.
MAX_AMOUNT = Decimal("1e18")


def parse_amount(value: object) -> Decimal:
    """
    Turn request input into a positive two-decimal amount.
    Floats go through ``str`` so 0.1 stays 0.1 and not its binary expansion.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError("Amount is required and must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmountError("Amount must be a finite number")
    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than 0")
    if amount >= MAX_AMOUNT:
        raise InvalidAmountError("Amount is too large")
    if amount != amount.quantize(CENT):
        raise InvalidAmountError("Amount cannot have more than two decimal places")
    return amount.quantize(CENT)


def format_amount(amount: Decimal) -> str:
    return f"{amount.quantize(CENT):,.2f}"
