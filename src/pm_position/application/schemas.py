"""Pydantic schemas for positions API."""

from decimal import Decimal

from pydantic import BaseModel

from src.pm_common.money import money_to_display
from src.pm_position.domain.models import Position


class PositionResponse(BaseModel):
    position_id: int
    asset_id: int
    symbol: str | None
    asset_name: str | None
    asset_class: str | None
    units: Decimal
    avg_cost_per_unit: Decimal
    investment_amount: Decimal
    investment_amount_display: str

    @classmethod
    def from_domain(cls, p: Position) -> "PositionResponse":
        return cls(
            position_id=p.id,
            asset_id=p.asset_id,
            symbol=p.symbol,
            asset_name=p.asset_name,
            asset_class=p.asset_class,
            units=p.units,
            avg_cost_per_unit=p.avg_cost_per_unit,
            investment_amount=p.investment_amount,
            investment_amount_display=money_to_display(p.investment_amount),
        )


class PositionListResponse(BaseModel):
    items: list[PositionResponse]
    total: int
    total_invested: Decimal
