"""TransactionRepository — raw SQL, append-only.

Called from account and order services within the caller's transaction.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import InternalError
from src.pm_transaction.domain.models import Transaction

_INSERT_SQL = text("""
    INSERT INTO transactions
        (user_id, account_id, asset_id, order_id, trans_type,
         units, price_per_unit, cost, description)
    VALUES
        (:user_id, :account_id, :asset_id, :order_id, :trans_type,
         :units, :price_per_unit, :cost, :description)
    RETURNING id, user_id, account_id, asset_id, order_id, trans_type,
              units, price_per_unit, cost, description, date
""")

_SELECT_COLUMNS = """
    t.id, t.user_id, t.account_id, t.asset_id, t.order_id, t.trans_type,
    t.units, t.price_per_unit, t.cost, t.description, t.date,
    a.ticker AS symbol, a.name AS asset_name
"""

_LIST_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM transactions t
    LEFT JOIN assets a ON a.id = t.asset_id
    WHERE t.user_id = :user_id
      AND (CAST(:account_id AS BIGINT) IS NULL OR t.account_id = :account_id)
      AND (CAST(:trans_type AS TEXT) IS NULL OR t.trans_type = :trans_type)
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR t.id < :cursor_id)
    ORDER BY t.id DESC
    LIMIT :limit
""")


def _opt_decimal(value: Any) -> Decimal | None:
    return None if value is None else Decimal(value)


def _row_to_transaction(row: Any) -> Transaction:
    return Transaction(
        id=row.id,
        user_id=row.user_id,
        account_id=row.account_id,
        trans_type=row.trans_type,
        cost=Decimal(row.cost),
        asset_id=row.asset_id,
        order_id=row.order_id,
        units=_opt_decimal(row.units),
        price_per_unit=_opt_decimal(row.price_per_unit),
        description=row.description,
        date=row.date,
        symbol=getattr(row, "symbol", None),
        asset_name=getattr(row, "asset_name", None),
    )


class TransactionRepository:
    """Concrete implementation of TransactionRepositoryProtocol using raw SQL."""

    async def append(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        account_id: int,
        trans_type: str,
        cost: Decimal,
        description: str,
        asset_id: int | None = None,
        order_id: int | None = None,
        units: Decimal | None = None,
        price_per_unit: Decimal | None = None,
    ) -> Transaction:
        result = await db.execute(
            _INSERT_SQL,
            {
                "user_id": user_id,
                "account_id": account_id,
                "asset_id": asset_id,
                "order_id": order_id,
                "trans_type": trans_type,
                "units": units,
                "price_per_unit": price_per_unit,
                "cost": cost,
                "description": description,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows — this should never happen")
        return _row_to_transaction(row)

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: int,
        account_id: int | None,
        trans_type: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Transaction]:
        result = await db.execute(
            _LIST_SQL,
            {
                "user_id": user_id,
                "account_id": account_id,
                "trans_type": trans_type,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        return [_row_to_transaction(row) for row in result.fetchall()]
