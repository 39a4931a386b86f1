"""pm_asset REST API — catalog lookups."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_asset.application.service import AssetApplicationService
from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/assets", tags=["assets"])

_service = AssetApplicationService()


@router.get("")
async def list_assets(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    asset_class: str | None = Query(None, description="Filter by asset class"),
) -> ApiResponse:
    data = await _service.list_assets(db, asset_class)
    return success_response(data.model_dump(), request)


@router.get("/{symbol}")
async def get_asset(
    symbol: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_asset(db, symbol)
    return success_response(data.model_dump(), request)
