"""Transaction history REST API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/transactions", tags=["transactions"])

_service = TransactionApplicationService()


@router.get("")
async def list_transactions(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    user_id: int = Query(..., description="Owner of the transactions"),
    account_id: int | None = Query(None, description="Filter by account"),
    type: str | None = Query(None, description="BUY, SELL, DEPOSIT, WITHDRAW or 'all'"),
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(50, ge=1, le=200, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_transactions(db, user_id, account_id, type, cursor, limit)
    return success_response(data.model_dump(mode="json"), request)
