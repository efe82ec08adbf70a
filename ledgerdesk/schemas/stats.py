from datetime import date
from decimal import Decimal
from pydantic import BaseModel


class DailyStat(BaseModel):
    day: date
    deposit: Decimal
    withdraw: Decimal


class SystemStats(BaseModel):
    total_users: int
    total_balance: Decimal
    total_transactions: int
    total_deposit: Decimal
    total_withdraw: Decimal
    pending_deposits: int
    pending_withdrawals: int
    pending_transactions: int
    daily_stats: list[DailyStat]
