"""PositionRepository Protocol — interface contract for the position book."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_position.domain.cost_basis import PositionChange
from src.pm_position.domain.models import Position


class PositionRepositoryProtocol(Protocol):
    async def get_for_update(
        self, db: AsyncSession, user_id: int, asset_id: int
    ) -> Position | None: ...

    async def insert_if_absent(
        self, db: AsyncSession, user_id: int, asset_id: int, change: PositionChange
    ) -> Position | None: ...

    async def update(
        self, db: AsyncSession, position_id: int, change: PositionChange
    ) -> Position: ...

    async def delete(self, db: AsyncSession, position_id: int) -> None: ...

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Position]: ...

    async def get_by_symbol(
        self, db: AsyncSession, user_id: int, symbol: str
    ) -> Position | None: ...
