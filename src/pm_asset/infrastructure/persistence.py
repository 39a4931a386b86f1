"""AssetCatalog — concrete implementation of AssetCatalogProtocol.

All queries use raw text() SQL (no ORM). Tickers are matched case-insensitively
and stored upper-case.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_asset.domain.models import Asset

_LOOKUP_SQL = text("""
    SELECT id, ticker, name, asset_class
    FROM assets
    WHERE ticker = UPPER(:ticker)
""")

_LIST_SQL = text("""
    SELECT id, ticker, name, asset_class
    FROM assets
    WHERE CAST(:asset_class AS TEXT) IS NULL OR asset_class = CAST(:asset_class AS TEXT)
    ORDER BY ticker
""")


def _row_to_asset(row: Any) -> Asset:
    return Asset(
        id=row.id,
        ticker=row.ticker,
        name=row.name,
        asset_class=row.asset_class,
    )


class AssetCatalog:
    async def lookup_by_symbol(self, db: AsyncSession, ticker: str) -> Asset | None:
        row = (await db.execute(_LOOKUP_SQL, {"ticker": ticker.strip()})).fetchone()
        return _row_to_asset(row) if row else None

    async def list_assets(
        self, db: AsyncSession, asset_class: str | None
    ) -> list[Asset]:
        rows = (await db.execute(_LIST_SQL, {"asset_class": asset_class})).fetchall()
        return [_row_to_asset(r) for r in rows]
