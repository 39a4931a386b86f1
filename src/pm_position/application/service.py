"""PositionApplicationService — read access to the position book.

Aggregation and risk reports live outside this service; they consume the
same rows through these reads.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import PositionNotFoundError
from src.pm_common.money import ZERO
from src.pm_position.application.schemas import PositionListResponse, PositionResponse
from src.pm_position.domain.repository import PositionRepositoryProtocol
from src.pm_position.infrastructure.persistence import PositionRepository


class PositionApplicationService:
    def __init__(self, repo: PositionRepositoryProtocol | None = None) -> None:
        self._repo: PositionRepositoryProtocol = repo or PositionRepository()

    async def list_positions(self, db: AsyncSession, user_id: int) -> PositionListResponse:
        positions = await self._repo.list_by_user(db, user_id)
        return PositionListResponse(
            items=[PositionResponse.from_domain(p) for p in positions],
            total=len(positions),
            total_invested=sum((p.investment_amount for p in positions), ZERO),
        )

    async def get_position(
        self, db: AsyncSession, user_id: int, symbol: str
    ) -> PositionResponse:
        pos = await self._repo.get_by_symbol(db, user_id, symbol)
        if pos is None:
            raise PositionNotFoundError(symbol)
        return PositionResponse.from_domain(pos)
