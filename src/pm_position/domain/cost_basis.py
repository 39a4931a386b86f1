"""Weighted-average cost basis math for Buy and Sell settlement.

Pure functions over Decimal; persistence applies the returned PositionChange.

Buy:  units' = units + qty
      investment' = investment + amount
      avg' = investment' / units'          (order-independent)
Sell: units' = units - qty
      investment' = investment * units' / units
      avg' = avg                           (unchanged on partial sells)
A change with units' == 0 means the row must be deleted.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.pm_common.errors import InsufficientSharesError
from src.pm_common.money import ZERO, to_avg_cost, to_money, to_qty
from src.pm_position.domain.models import Position


@dataclass(frozen=True)
class PositionChange:
    units: Decimal
    avg_cost_per_unit: Decimal
    investment_amount: Decimal

    @property
    def closes_position(self) -> bool:
        return self.units == ZERO


def apply_buy(
    current: Position | None, qty: Decimal, unit_price: Decimal, amount: Decimal
) -> PositionChange:
    if qty <= ZERO:
        raise ValueError(f"Buy quantity must be positive, got {qty}")
    if current is None:
        return PositionChange(
            units=to_qty(qty),
            avg_cost_per_unit=to_avg_cost(unit_price),
            investment_amount=to_money(amount),
        )
    new_units = to_qty(current.units + qty)
    new_investment = to_money(current.investment_amount + amount)
    return PositionChange(
        units=new_units,
        avg_cost_per_unit=to_avg_cost(new_investment / new_units),
        investment_amount=new_investment,
    )


def apply_sell(current: Position, qty: Decimal) -> PositionChange:
    if qty <= ZERO:
        raise ValueError(f"Sell quantity must be positive, got {qty}")
    if current.units < qty:
        raise InsufficientSharesError(qty, current.units)
    new_units = to_qty(current.units - qty)
    if new_units == ZERO:
        return PositionChange(
            units=ZERO,
            avg_cost_per_unit=current.avg_cost_per_unit,
            investment_amount=ZERO,
        )
    # investment * (1 - qty/units), without rounding the proportion first
    new_investment = to_money(current.investment_amount * new_units / current.units)
    return PositionChange(
        units=new_units,
        avg_cost_per_unit=current.avg_cost_per_unit,
        investment_amount=new_investment,
    )
