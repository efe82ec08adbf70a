from datetime import date, datetime
from decimal import Decimal
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from ledgerdesk.models import AccountRole, TransactionStatus, TransactionType


class AmountRequest(BaseModel):
    # Validated by the service so that bad input comes back in the envelope, not as a 422.
    amount: Any = Field(..., description="Positive amount with at most two decimal places")


class ReviewRequest(BaseModel):
    decision: str = Field(..., description="approve or reject")


class CreateAccountRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128, description="Identity provider user id")
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None


class UpdateProfileRequest(BaseModel):
    full_name: str | None = None


class TransactionFilter(BaseModel):
    """Omitted fields and the value "all" mean no filtering on that field."""

    type: str | None = Field(None, description="deposit, withdraw or all")
    status: str | None = Field(None, description="pending, approved, rejected or all")
    user_id: str | None = None
    start_date: date | None = None
    end_date: date | None = Field(None, description="Inclusive; covers the whole day")


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: AccountRole
    balance: Decimal
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    created_at: datetime


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    amount: Decimal
    type: TransactionType
    status: TransactionStatus
    reviewed_by: str | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary | None = None
