"""pm_user REST API — create, get, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_user.application.schemas import CreateUserRequest
from src.pm_user.application.service import UserService

router = APIRouter(prefix="/users", tags=["users"])

_service = UserService()


@router.post("", status_code=201)
async def create_user(
    body: CreateUserRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_user(body, db)
    return success_response(data.model_dump(), request)


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_user(user_id, db)
    return success_response(data.model_dump(), request)


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_user(user_id, db)
    return success_response({"user_id": user_id, "deleted": True}, request)
