"""AssetApplicationService — read-only; no commit/rollback needed."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_asset.application.schemas import AssetListResponse, AssetResponse
from src.pm_asset.domain.repository import AssetCatalogProtocol
from src.pm_asset.infrastructure.persistence import AssetCatalog
from src.pm_common.errors import AssetNotFoundError


class AssetApplicationService:
    def __init__(self, catalog: AssetCatalogProtocol | None = None) -> None:
        self._catalog: AssetCatalogProtocol = catalog or AssetCatalog()

    async def list_assets(
        self, db: AsyncSession, asset_class: str | None
    ) -> AssetListResponse:
        assets = await self._catalog.list_assets(db, asset_class)
        return AssetListResponse(
            items=[AssetResponse.from_domain(a) for a in assets],
            total=len(assets),
        )

    async def get_asset(self, db: AsyncSession, symbol: str) -> AssetResponse:
        asset = await self._catalog.lookup_by_symbol(db, symbol)
        if asset is None:
            raise AssetNotFoundError(symbol)
        return AssetResponse.from_domain(asset)
