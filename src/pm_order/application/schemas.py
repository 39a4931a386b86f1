# src/pm_order/application/schemas.py
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.pm_common.enums import BuySell, OrderType
from src.pm_common.money import money_to_display
from src.pm_order.domain.models import Order


class PlaceOrderRequest(BaseModel):
    user_id: int
    account_id: int
    symbol: str = Field(..., min_length=1, max_length=16)
    buy_sell: BuySell
    order_type: OrderType
    qty: Decimal
    price: Decimal | None = None
    description: str | None = Field(None, max_length=255)

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        v = v.strip().upper()
        if not v or " " in v:
            raise ValueError("symbol must be a single ticker")
        return v


class UpdateOrderRequest(BaseModel):
    qty: Decimal | None = None
    order_type: OrderType | None = None
    limit_price: Decimal | None = None


class OrderResponse(BaseModel):
    order_id: int
    user_id: int
    account_id: int
    asset_id: int
    symbol: str
    description: str | None = None
    buy_sell: str
    order_type: str
    qty: Decimal
    unit_price: Decimal
    limit_price: Decimal | None = None
    amount: Decimal
    order_status: str
    confirmation_status: str
    order_date: datetime
    settlement_date: date
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            order_id=order.id,
            user_id=order.user_id,
            account_id=order.account_id,
            asset_id=order.asset_id,
            symbol=order.symbol,
            description=order.description,
            buy_sell=order.buy_sell.value,
            order_type=order.order_type.value,
            qty=order.qty,
            unit_price=order.unit_price,
            limit_price=order.limit_price,
            amount=order.amount,
            order_status=order.order_status.value,
            confirmation_status=order.confirmation_status.value,
            order_date=order.order_date,
            settlement_date=order.settlement_date,
            updated_at=order.updated_at,
        )


class OrderPreview(BaseModel):
    """What the trade does to the account if it is confirmed at the quoted price."""

    account_name: str
    estimated_total: Decimal
    estimated_total_display: str
    account_balance: Decimal
    balance_after_trade: Decimal
    balance_after_trade_display: str


class PlaceOrderResponse(BaseModel):
    order: OrderResponse
    preview: OrderPreview
    message: str


class CancelOrderResponse(BaseModel):
    order_id: int
    order_status: str
    confirmation_status: str
    message: str


class ConfirmOrderResponse(BaseModel):
    order: OrderResponse
    new_balance: Decimal
    new_balance_display: str
    message: str

    @classmethod
    def from_result(cls, order: Order, new_balance: Decimal) -> "ConfirmOrderResponse":
        verb = "Bought" if order.is_buy else "Sold"
        return cls(
            order=OrderResponse.from_domain(order),
            new_balance=new_balance,
            new_balance_display=money_to_display(new_balance),
            message=f"{verb} {order.qty.normalize():f} {order.symbol} "
            f"for {money_to_display(order.amount)}",
        )


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    next_cursor: str | None
    has_more: bool
