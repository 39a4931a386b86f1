"""PositionRepository — raw SQL persistence for the position book.

Rows with zero units are never written: a closing change deletes the row
(the table also carries CHECK (units > 0)).

Transaction ownership: the caller holds the transaction; get_for_update takes
a row lock that lasts until it commits.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import InternalError
from src.pm_position.domain.cost_basis import PositionChange
from src.pm_position.domain.models import Position

_COLUMNS = """
    id, user_id, asset_id, units, avg_cost_per_unit, investment_amount,
    created_at, updated_at
"""

_GET_FOR_UPDATE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM positions
    WHERE user_id = :user_id AND asset_id = :asset_id
    FOR UPDATE
""")

# A concurrent first buy of the same asset makes this return no row
_INSERT_IF_ABSENT_SQL = text(f"""
    INSERT INTO positions (user_id, asset_id, units, avg_cost_per_unit, investment_amount)
    VALUES (:user_id, :asset_id, :units, :avg_cost_per_unit, :investment_amount)
    ON CONFLICT (user_id, asset_id) DO NOTHING
    RETURNING {_COLUMNS}
""")

_UPDATE_SQL = text(f"""
    UPDATE positions
    SET units = :units,
        avg_cost_per_unit = :avg_cost_per_unit,
        investment_amount = :investment_amount,
        updated_at = NOW()
    WHERE id = :id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM positions WHERE id = :id")

_READ_COLUMNS = """
    p.id, p.user_id, p.asset_id, p.units, p.avg_cost_per_unit, p.investment_amount,
    p.created_at, p.updated_at,
    a.ticker AS symbol, a.name AS asset_name, a.asset_class
"""

_LIST_SQL = text(f"""
    SELECT {_READ_COLUMNS}
    FROM positions p
    JOIN assets a ON a.id = p.asset_id
    WHERE p.user_id = :user_id
    ORDER BY a.ticker
""")

_GET_BY_SYMBOL_SQL = text(f"""
    SELECT {_READ_COLUMNS}
    FROM positions p
    JOIN assets a ON a.id = p.asset_id
    WHERE p.user_id = :user_id AND a.ticker = UPPER(:symbol)
""")


def _row_to_position(row: Any) -> Position:
    return Position(
        id=row.id,
        user_id=row.user_id,
        asset_id=row.asset_id,
        units=Decimal(row.units),
        avg_cost_per_unit=Decimal(row.avg_cost_per_unit),
        investment_amount=Decimal(row.investment_amount),
        symbol=getattr(row, "symbol", None),
        asset_name=getattr(row, "asset_name", None),
        asset_class=getattr(row, "asset_class", None),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _change_params(change: PositionChange) -> dict[str, Decimal]:
    return {
        "units": change.units,
        "avg_cost_per_unit": change.avg_cost_per_unit,
        "investment_amount": change.investment_amount,
    }


class PositionRepository:
    """Concrete implementation of PositionRepositoryProtocol using raw SQL."""

    async def get_for_update(
        self, db: AsyncSession, user_id: int, asset_id: int
    ) -> Position | None:
        row = (
            await db.execute(_GET_FOR_UPDATE_SQL, {"user_id": user_id, "asset_id": asset_id})
        ).fetchone()
        return _row_to_position(row) if row else None

    async def insert_if_absent(
        self, db: AsyncSession, user_id: int, asset_id: int, change: PositionChange
    ) -> Position | None:
        if change.closes_position:
            raise InternalError("Refusing to insert a zero-unit position")
        row = (
            await db.execute(
                _INSERT_IF_ABSENT_SQL,
                {"user_id": user_id, "asset_id": asset_id, **_change_params(change)},
            )
        ).fetchone()
        return _row_to_position(row) if row else None

    async def update(
        self, db: AsyncSession, position_id: int, change: PositionChange
    ) -> Position:
        if change.closes_position:
            raise InternalError("Refusing to store a zero-unit position; delete it instead")
        row = (
            await db.execute(_UPDATE_SQL, {"id": position_id, **_change_params(change)})
        ).fetchone()
        if row is None:
            raise InternalError(f"Position {position_id} vanished under lock")
        return _row_to_position(row)

    async def delete(self, db: AsyncSession, position_id: int) -> None:
        await db.execute(_DELETE_SQL, {"id": position_id})

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Position]:
        rows = (await db.execute(_LIST_SQL, {"user_id": user_id})).fetchall()
        return [_row_to_position(r) for r in rows]

    async def get_by_symbol(
        self, db: AsyncSession, user_id: int, symbol: str
    ) -> Position | None:
        row = (
            await db.execute(_GET_BY_SYMBOL_SQL, {"user_id": user_id, "symbol": symbol})
        ).fetchone()
        return _row_to_position(row) if row else None
