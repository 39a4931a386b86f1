"""Pydantic schemas for pm_account API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.pm_account.domain.models import Account
from src.pm_common.enums import AccountType
from src.pm_common.money import money_to_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateAccountRequest(BaseModel):
    user_id: int
    account_name: str = Field(..., min_length=1, max_length=100)
    account_type: AccountType


class DepositRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, decimal_places=4, description="Amount to deposit")
    description: str | None = Field(None, max_length=500)


class WithdrawRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, decimal_places=4, description="Amount to withdraw")
    description: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AccountResponse(BaseModel):
    account_id: int
    user_id: int
    account_name: str
    account_type: str
    cash_balance: Decimal
    cash_balance_display: str
    is_default: bool
    created_at: str

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(
            account_id=account.id,
            user_id=account.user_id,
            account_name=account.account_name,
            account_type=account.account_type,
            cash_balance=account.cash_balance,
            cash_balance_display=money_to_display(account.cash_balance),
            is_default=account.is_default,
            created_at=account.created_at.isoformat() if account.created_at else "",
        )


class AccountListResponse(BaseModel):
    items: list[AccountResponse]
    total: int


class BalanceResponse(BaseModel):
    account_id: int
    cash_balance: Decimal
    cash_balance_display: str


class CashMovementResponse(BaseModel):
    """Result of a deposit or withdrawal."""

    account_id: int
    account_name: str
    amount: Decimal
    previous_balance: Decimal
    new_balance: Decimal
    new_balance_display: str
    transaction_id: int
    timestamp: str

    @classmethod
    def from_result(
        cls, account: Account, amount: Decimal, previous: Decimal, trans_id: int, ts: str
    ) -> "CashMovementResponse":
        return cls(
            account_id=account.id,
            account_name=account.account_name,
            amount=amount,
            previous_balance=previous,
            new_balance=account.cash_balance,
            new_balance_display=money_to_display(account.cash_balance),
            transaction_id=trans_id,
            timestamp=ts,
        )
