"""Asset catalog Protocol — read-only reference lookups.

Unit tests inject a mock that conforms to this Protocol.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_asset.domain.models import Asset


class AssetCatalogProtocol(Protocol):
    async def lookup_by_symbol(self, db: AsyncSession, ticker: str) -> Asset | None: ...

    async def list_assets(
        self, db: AsyncSession, asset_class: str | None
    ) -> list[Asset]: ...
