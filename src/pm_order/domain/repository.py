# src/pm_order/domain/repository.py
"""OrderRepository Protocol — interface contract for the order store."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_order.domain.models import Order


class OrderRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, order: Order) -> Order: ...

    async def get_by_id(self, db: AsyncSession, order_id: int) -> Order | None: ...

    async def get_for_update(self, db: AsyncSession, order_id: int) -> Order | None: ...

    async def update(self, db: AsyncSession, order: Order) -> Order: ...

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: int,
        order_status: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Order]: ...
