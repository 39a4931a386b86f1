"""Order domain model — pure dataclasses, no SQLAlchemy dependency.

The lifecycle is tracked by two orthogonal fields, order_status and
confirmation_status, held together in one OrderState. Only the pairs in
VALID_STATES can be constructed.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from src.pm_common.enums import BuySell, ConfirmationStatus, OrderStatus, OrderType
from src.pm_common.errors import OrderStateError

_MODIFIABLE = frozenset({OrderStatus.PLACED, OrderStatus.UNDER_REVIEW})
_TERMINAL = frozenset({OrderStatus.CANCELLED, OrderStatus.EXECUTED})

VALID_STATES: frozenset[tuple[OrderStatus, ConfirmationStatus]] = frozenset({
    (OrderStatus.PLACED, ConfirmationStatus.PENDING),
    (OrderStatus.UNDER_REVIEW, ConfirmationStatus.PENDING),
    (OrderStatus.CANCELLED, ConfirmationStatus.PENDING),
    (OrderStatus.CANCELLED, ConfirmationStatus.REJECTED),
    (OrderStatus.EXECUTED, ConfirmationStatus.CONFIRMED),
})


@dataclass(frozen=True)
class OrderState:
    order_status: OrderStatus
    confirmation_status: ConfirmationStatus

    def __post_init__(self) -> None:
        if (self.order_status, self.confirmation_status) not in VALID_STATES:
            raise ValueError(
                f"Unreachable order state: ({self.order_status.value}, "
                f"{self.confirmation_status.value})"
            )

    @classmethod
    def initial(cls) -> "OrderState":
        return cls(OrderStatus.PLACED, ConfirmationStatus.PENDING)

    @property
    def is_modifiable(self) -> bool:
        return self.order_status in _MODIFIABLE

    @property
    def is_terminal(self) -> bool:
        return self.order_status in _TERMINAL

    @property
    def is_pending(self) -> bool:
        return self.confirmation_status == ConfirmationStatus.PENDING

    @property
    def can_confirm(self) -> bool:
        return self.is_pending and not self.is_terminal

    def __str__(self) -> str:
        return f"{self.order_status.value}/{self.confirmation_status.value}"


@dataclass
class Order:
    id: int
    user_id: int
    account_id: int
    asset_id: int
    symbol: str
    buy_sell: BuySell
    order_type: OrderType
    qty: Decimal
    unit_price: Decimal
    amount: Decimal
    state: OrderState
    order_date: datetime
    settlement_date: date
    limit_price: Decimal | None = None
    description: str | None = None
    updated_at: datetime | None = None

    @property
    def order_status(self) -> OrderStatus:
        return self.state.order_status

    @property
    def confirmation_status(self) -> ConfirmationStatus:
        return self.state.confirmation_status

    @property
    def is_buy(self) -> bool:
        return self.buy_sell == BuySell.BUY

    # -- transitions -------------------------------------------------------

    def ensure_modifiable(self, operation: str) -> None:
        if not self.state.is_modifiable:
            raise OrderStateError(self.id, operation, str(self.state))

    def mark_updated(self) -> None:
        """Any modification sends the order back for confirmation."""
        self.ensure_modifiable("updated")
        self.state = OrderState(self.state.order_status, ConfirmationStatus.PENDING)

    def mark_cancelled(self) -> None:
        self.ensure_modifiable("cancelled")
        self.state = OrderState(OrderStatus.CANCELLED, self.state.confirmation_status)

    def ensure_confirmable(self) -> None:
        if not self.state.can_confirm:
            raise OrderStateError(self.id, "confirmed", str(self.state))

    def mark_confirmed(self) -> None:
        self.ensure_confirmable()
        self.state = OrderState(OrderStatus.EXECUTED, ConfirmationStatus.CONFIRMED)

    def mark_rejected(self) -> None:
        """Rejection is terminal: the order is closed without settlement."""
        if not self.state.is_pending:
            raise OrderStateError(self.id, "rejected", str(self.state))
        self.state = OrderState(OrderStatus.CANCELLED, ConfirmationStatus.REJECTED)
