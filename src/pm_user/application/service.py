"""User service: create, get, delete.

Deleting a user relies on ON DELETE CASCADE to remove its accounts,
positions, orders and transactions in the same statement.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.domain.repository import AccountRepositoryProtocol
from src.pm_account.infrastructure.persistence import AccountRepository
from src.pm_common.enums import AccountType
from src.pm_common.errors import UsernameExistsError, UserNotFoundError
from src.pm_user.application.schemas import CreateUserRequest, UserResponse
from src.pm_user.infrastructure.db_models import UserModel

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_NAME = "Brokerage"


def _to_response(user: UserModel, default_account_id: int | None = None) -> UserResponse:
    return UserResponse(
        user_id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        created_at=user.created_at.isoformat() if user.created_at else "",
        default_account_id=default_account_id,
    )


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    def __init__(self, account_repo: AccountRepositoryProtocol | None = None) -> None:
        self._account_repo: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def create_user(self, req: CreateUserRequest, db: AsyncSession) -> UserResponse:
        """Create a user and its default brokerage account in one transaction."""
        async with db.begin():
            result = await db.execute(
                select(UserModel).where(
                    (UserModel.username == req.username) | (UserModel.email == req.email)
                )
            )
            if result.scalars().first() is not None:
                raise UsernameExistsError()

            user = UserModel(name=req.name, username=req.username, email=str(req.email))
            db.add(user)
            await db.flush()  # Get user.id without committing
            await db.refresh(user)

            account = await self._account_repo.create_account(
                db, user.id, DEFAULT_ACCOUNT_NAME, AccountType.BROKERAGE.value, is_default=True
            )
        logger.info("User created: user=%d default_account=%d", user.id, account.id)
        return _to_response(user, account.id)

    async def get_user(self, user_id: int, db: AsyncSession) -> UserResponse:
        user = await db.get(UserModel, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return _to_response(user)

    async def delete_user(self, user_id: int, db: AsyncSession) -> None:
        async with db.begin():
            result = await db.execute(
                delete(UserModel).where(UserModel.id == user_id).returning(UserModel.id)
            )
            if result.scalar_one_or_none() is None:
                raise UserNotFoundError(user_id)
        logger.info("User deleted (cascade): user=%d", user_id)
