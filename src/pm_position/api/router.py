"""Positions REST API — 2 endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_position.application.service import PositionApplicationService

router = APIRouter(prefix="/positions", tags=["positions"])

_service = PositionApplicationService()


@router.get("")
async def list_positions(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    user_id: int = Query(..., description="Owner of the positions"),
) -> ApiResponse:
    data = await _service.list_positions(db, user_id)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{symbol}")
async def get_position(
    symbol: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    user_id: int = Query(..., description="Owner of the position"),
) -> ApiResponse:
    data = await _service.get_position(db, user_id, symbol)
    return success_response(data.model_dump(mode="json"), request)
