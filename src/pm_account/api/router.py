"""pm_account REST API — 5 endpoints. Caller identity is passed explicitly."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.application.schemas import (
    CreateAccountRequest,
    DepositRequest,
    WithdrawRequest,
)
from src.pm_account.application.service import AccountApplicationService
from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/accounts", tags=["accounts"])

_service = AccountApplicationService()


@router.post("", status_code=201)
async def create_account(
    body: CreateAccountRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_account(db, body)
    return success_response(data.model_dump(mode="json"), request)


@router.get("")
async def list_accounts(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    user_id: int = Query(..., description="Owner of the accounts"),
) -> ApiResponse:
    data = await _service.list_accounts(db, user_id)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/{account_id}/balance")
async def get_balance(
    account_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, account_id)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{account_id}/deposit")
async def deposit(
    account_id: int,
    body: DepositRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(db, account_id, body.amount, body.description)
    return success_response(data.model_dump(mode="json"), request)


@router.post("/{account_id}/withdraw")
async def withdraw(
    account_id: int,
    body: WithdrawRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.withdraw(db, account_id, body.amount, body.description)
    return success_response(data.model_dump(mode="json"), request)
