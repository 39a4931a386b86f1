"""Unit tests for weighted-average cost basis math."""

from decimal import Decimal

import pytest

from src.pm_common.errors import InsufficientSharesError
from src.pm_common.money import order_amount
from src.pm_position.domain.cost_basis import PositionChange, apply_buy, apply_sell
from src.pm_position.domain.models import Position


def _position(units: str, avg: str, investment: str) -> Position:
    return Position(
        id=1,
        user_id=1,
        asset_id=1,
        units=Decimal(units),
        avg_cost_per_unit=Decimal(avg),
        investment_amount=Decimal(investment),
    )


def _as_position(change: PositionChange) -> Position:
    return _position(str(change.units), str(change.avg_cost_per_unit), str(change.investment_amount))


class TestApplyBuy:
    def test_first_buy(self) -> None:
        change = apply_buy(None, Decimal("10"), Decimal("50"), Decimal("500"))
        assert change == PositionChange(Decimal("10"), Decimal("50"), Decimal("500"))

    def test_adds_to_existing(self) -> None:
        change = apply_buy(_position("10", "50", "500"), Decimal("10"), Decimal("70"), Decimal("700"))
        assert change.units == Decimal("20")
        assert change.investment_amount == Decimal("1200")
        assert change.avg_cost_per_unit == Decimal("60")

    @pytest.mark.parametrize("fills", [
        [("10", "50"), ("5", "80")],
        [("1", "10"), ("2", "20"), ("3", "30")],
        [("0.5", "101.25"), ("1.25", "99.5"), ("7", "100.0001")],
    ])
    def test_average_is_independent_of_split(self, fills) -> None:
        current = None
        for qty, price in fills:
            q, p = Decimal(qty), Decimal(price)
            change = apply_buy(current, q, p, order_amount(q, p))
            current = _as_position(change)
        total_units = sum(Decimal(q) for q, _ in fills)
        total_cost = sum(order_amount(Decimal(q), Decimal(p)) for q, p in fills)
        assert current.units == total_units
        assert abs(current.avg_cost_per_unit - total_cost / total_units) < Decimal("1e-8")

    def test_non_positive_qty(self) -> None:
        with pytest.raises(ValueError):
            apply_buy(None, Decimal("0"), Decimal("50"), Decimal("0"))


class TestApplySell:
    def test_partial_sell_keeps_average(self) -> None:
        change = apply_sell(_position("10", "50", "500"), Decimal("4"))
        assert change.units == Decimal("6")
        assert change.avg_cost_per_unit == Decimal("50")
        assert change.investment_amount == Decimal("300")
        assert not change.closes_position

    def test_investment_shrinks_by_proportion_sold(self) -> None:
        current = _position("3", "33.33333333", "100")
        change = apply_sell(current, Decimal("1"))
        assert change.investment_amount == Decimal("66.6667")

    def test_full_sell_closes(self) -> None:
        change = apply_sell(_position("6", "50", "300"), Decimal("6"))
        assert change.closes_position
        assert change.investment_amount == Decimal("0")

    def test_oversell(self) -> None:
        with pytest.raises(InsufficientSharesError) as exc_info:
            apply_sell(_position("10", "50", "500"), Decimal("10.00000001"))
        assert exc_info.value.code == 5003

    def test_non_positive_qty(self) -> None:
        with pytest.raises(ValueError):
            apply_sell(_position("10", "50", "500"), Decimal("-1"))
