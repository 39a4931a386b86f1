"""Pydantic schemas for the transaction history API."""

from decimal import Decimal

from pydantic import BaseModel

from src.pm_common.money import money_to_display
from src.pm_transaction.domain.models import Transaction


class TransactionItem(BaseModel):
    transaction_id: int
    user_id: int
    account_id: int
    order_id: int | None
    type: str
    date: str  # ISO8601 string
    symbol: str | None
    asset_name: str | None
    quantity: Decimal | None
    price_per_share: Decimal | None
    amount: Decimal
    amount_display: str
    description: str | None
    is_inflow: bool

    @classmethod
    def from_domain(cls, t: Transaction) -> "TransactionItem":
        return cls(
            transaction_id=t.id,
            user_id=t.user_id,
            account_id=t.account_id,
            order_id=t.order_id,
            type=t.trans_type,
            date=t.date.isoformat() if t.date else "",
            symbol=t.symbol,
            asset_name=t.asset_name,
            quantity=t.units,
            price_per_share=t.price_per_unit,
            amount=t.cost,
            amount_display=money_to_display(t.cost),
            description=t.description,
            is_inflow=t.is_inflow,
        )


class TransactionSummary(BaseModel):
    total_deposits: Decimal
    total_withdrawals: Decimal
    total_buys: Decimal
    total_sells: Decimal


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    summary: TransactionSummary
    next_cursor: str | None
    has_more: bool
