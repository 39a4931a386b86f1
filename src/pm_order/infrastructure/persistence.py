# src/pm_order/infrastructure/persistence.py
"""OrderRepository — raw SQL persistence implementation."""
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.enums import BuySell, ConfirmationStatus, OrderStatus, OrderType
from src.pm_common.errors import InternalError
from src.pm_order.domain.models import Order, OrderState

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, user_id, account_id, asset_id, symbol, description,
    buy_sell, order_type, qty, unit_price, limit_price, amount,
    order_status, confirmation_status, order_date, settlement_date, updated_at
"""

_INSERT_ORDER_SQL = text(f"""
    INSERT INTO orders (user_id, account_id, asset_id, symbol, description,
        buy_sell, order_type, qty, unit_price, limit_price, amount,
        order_status, confirmation_status, order_date, settlement_date)
    VALUES (:user_id, :account_id, :asset_id, :symbol, :description,
        :buy_sell, :order_type, :qty, :unit_price, :limit_price, :amount,
        :order_status, :confirmation_status, :order_date, :settlement_date)
    RETURNING {_SELECT_COLUMNS}
""")

_UPDATE_ORDER_SQL = text(f"""
    UPDATE orders
    SET order_type = :order_type, qty = :qty, limit_price = :limit_price,
        amount = :amount, order_status = :order_status,
        confirmation_status = :confirmation_status, updated_at = NOW()
    WHERE id = :id
    RETURNING {_SELECT_COLUMNS}
""")

_GET_ORDER_BY_ID_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE id = :id
""")

_GET_ORDER_FOR_UPDATE_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE id = :id
    FOR UPDATE
""")

_LIST_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE user_id = :user_id
      AND (CAST(:order_status AS TEXT) IS NULL OR order_status = :order_status)
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < :cursor_id)
    ORDER BY id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_order(row: Any) -> Order:
    """Convert a DB result row to an Order domain object."""
    try:
        state = OrderState(
            OrderStatus(row.order_status), ConfirmationStatus(row.confirmation_status)
        )
    except ValueError as e:
        raise InternalError(f"Order {row.id} has an invalid stored state: {e}") from e
    return Order(
        id=row.id,
        user_id=row.user_id,
        account_id=row.account_id,
        asset_id=row.asset_id,
        symbol=row.symbol,
        description=row.description,
        buy_sell=BuySell(row.buy_sell),
        order_type=OrderType(row.order_type),
        qty=Decimal(row.qty),
        unit_price=Decimal(row.unit_price),
        limit_price=Decimal(row.limit_price) if row.limit_price is not None else None,
        amount=Decimal(row.amount),
        state=state,
        order_date=row.order_date,
        settlement_date=row.settlement_date,
        updated_at=row.updated_at,
    )


def _mutable_params(order: Order) -> dict[str, Any]:
    return {
        "order_type": order.order_type.value,
        "qty": order.qty,
        "limit_price": order.limit_price,
        "amount": order.amount,
        "order_status": order.order_status.value,
        "confirmation_status": order.confirmation_status.value,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL."""

    async def insert(self, db: AsyncSession, order: Order) -> Order:
        row = (
            await db.execute(
                _INSERT_ORDER_SQL,
                {
                    "user_id": order.user_id,
                    "account_id": order.account_id,
                    "asset_id": order.asset_id,
                    "symbol": order.symbol,
                    "description": order.description,
                    "buy_sell": order.buy_sell.value,
                    "unit_price": order.unit_price,
                    "order_date": order.order_date,
                    "settlement_date": order.settlement_date,
                    **_mutable_params(order),
                },
            )
        ).fetchone()
        return _row_to_order(row)

    async def get_by_id(self, db: AsyncSession, order_id: int) -> Order | None:
        row = (await db.execute(_GET_ORDER_BY_ID_SQL, {"id": order_id})).fetchone()
        return _row_to_order(row) if row else None

    async def get_for_update(self, db: AsyncSession, order_id: int) -> Order | None:
        row = (await db.execute(_GET_ORDER_FOR_UPDATE_SQL, {"id": order_id})).fetchone()
        return _row_to_order(row) if row else None

    async def update(self, db: AsyncSession, order: Order) -> Order:
        row = (
            await db.execute(_UPDATE_ORDER_SQL, {"id": order.id, **_mutable_params(order)})
        ).fetchone()
        if row is None:
            raise InternalError(f"Order {order.id} vanished under lock")
        return _row_to_order(row)

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: int,
        order_status: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Order]:
        rows = (
            await db.execute(
                _LIST_ORDERS_SQL,
                {
                    "user_id": user_id,
                    "order_status": order_status,
                    "cursor_id": cursor_id,
                    "limit": limit,
                },
            )
        ).fetchall()
        return [_row_to_order(r) for r in rows]
