from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import CheckConstraint, DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerdesk.database import Base
from ledgerdesk.models.common import enum_column_type, utcnow

if TYPE_CHECKING:
    from ledgerdesk.models.todo import Todo
    from ledgerdesk.models.transaction import Transaction

# Currency amounts: 18 integer digits, 2 fractional digits.
MONEY = Numeric(20, 2)


class AccountRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class Account(Base):
    """One row per user. ``balance`` is written only by the review engine."""

    __tablename__ = "accounts"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    role: Mapped[AccountRole] = mapped_column(
        enum_column_type(AccountRole, "account_role"),
        nullable=False,
        default=AccountRole.USER,
    )
    balance: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )

    transactions: Mapped[list["Transaction"]] = relationship(back_populates="account")
    todos: Mapped[list["Todo"]] = relationship(back_populates="account")

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    def __repr__(self) -> str:
        return f"Account(user_id={self.user_id!r}, role={self.role.value}, balance={self.balance})"
