"""Pydantic schemas for pm_asset API."""

from pydantic import BaseModel

from src.pm_asset.domain.models import Asset


class AssetResponse(BaseModel):
    asset_id: int
    ticker: str
    name: str
    asset_class: str

    @classmethod
    def from_domain(cls, asset: Asset) -> "AssetResponse":
        return cls(
            asset_id=asset.id,
            ticker=asset.ticker,
            name=asset.name,
            asset_class=asset.asset_class,
        )


class AssetListResponse(BaseModel):
    items: list[AssetResponse]
    total: int
