"""Domain models for pm_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Account:
    id: int
    user_id: int
    account_name: str
    account_type: str        # AccountType value
    cash_balance: Decimal    # money, never negative
    is_default: bool
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def can_afford(self, amount: Decimal) -> bool:
        return self.cash_balance >= amount
