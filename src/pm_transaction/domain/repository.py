"""TransactionRepository Protocol — append and read only, never update."""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_transaction.domain.models import Transaction


class TransactionRepositoryProtocol(Protocol):
    async def append(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        account_id: int,
        trans_type: str,
        cost: Decimal,
        description: str,
        asset_id: int | None = None,
        order_id: int | None = None,
        units: Decimal | None = None,
        price_per_unit: Decimal | None = None,
    ) -> Transaction: ...

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: int,
        account_id: int | None,
        trans_type: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Transaction]: ...
