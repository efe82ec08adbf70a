from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerdesk.database import Base
from ledgerdesk.models.account import MONEY
from ledgerdesk.models.common import enum_column_type, utcnow

if TYPE_CHECKING:
    from ledgerdesk.models.account import Account


class TransactionType(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def can_transition_to(self, target: "TransactionStatus") -> bool:
        return target in STATUS_TRANSITIONS[self]

    @property
    def is_final(self) -> bool:
        return not STATUS_TRANSITIONS[self]


# Forward-only lifecycle: a transaction leaves "pending" exactly once.
STATUS_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.APPROVED, TransactionStatus.REJECTED}),
    TransactionStatus.APPROVED: frozenset(),
    TransactionStatus.REJECTED: frozenset(),
}


class ReviewDecision(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def target_status(self) -> TransactionStatus:
        if self is ReviewDecision.APPROVE:
            return TransactionStatus.APPROVED
        return TransactionStatus.REJECTED


class Transaction(Base):
    """Deposit or withdrawal request. Amount is always positive; ``type`` gives the sign."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("accounts.user_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        enum_column_type(TransactionType, "transaction_type"),
        nullable=False,
    )
    status: Mapped[TransactionStatus] = mapped_column(
        enum_column_type(TransactionStatus, "transaction_status"),
        nullable=False,
        default=TransactionStatus.PENDING,
    )
    reviewed_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    account: Mapped["Account"] = relationship(back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_status", "status"),
        Index("ix_transactions_type", "type"),
        Index("ix_transactions_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, user_id={self.user_id!r}, type={self.type.value}, "
            f"amount={self.amount}, status={self.status.value})"
        )
