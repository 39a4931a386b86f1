# src/pm_order/api/router.py
"""pm_order REST API — order lifecycle endpoints. Caller identity is passed explicitly."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_order.application.schemas import PlaceOrderRequest, UpdateOrderRequest
from src.pm_order.application.service import OrderLifecycleService

router = APIRouter(prefix="/orders", tags=["orders"])

_service = OrderLifecycleService()


@router.post("", status_code=201)
async def place_order(
    body: PlaceOrderRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.place_order(db, body)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{order_id}/update")
async def update_order(
    order_id: int,
    body: UpdateOrderRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_order(db, order_id, body)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.cancel_order(db, order_id)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{order_id}/confirm")
async def confirm_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.confirm_order(db, order_id)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{order_id}/reject")
async def reject_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.reject_order(db, order_id)
    return success_response(data.model_dump(mode="json"), request)


@router.get("")
async def list_orders(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    user_id: int = Query(..., description="Owner of the orders"),
    status: str | None = Query(None, description="Filter by order status"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    cursor: str | None = Query(None, description="Pagination cursor"),
) -> ApiResponse:
    data = await _service.list_orders(db, user_id, status, limit, cursor)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{order_id}")
async def get_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_order(db, order_id)
    return success_response(data.model_dump(mode="json"), request)
