"""Decimal arithmetic utilities for money and share quantities.

All prices, amounts, balances and quantities use Decimal. No float.
Scales must match the NUMERIC columns in the migrations:
  - money:     NUMERIC(24, 4)
  - quantity:  NUMERIC(24, 8)
  - avg cost:  NUMERIC(24, 8)
"""

from decimal import ROUND_HALF_EVEN, Decimal

MONEY_QUANT = Decimal("0.0001")
QTY_QUANT = Decimal("0.00000001")
AVG_COST_QUANT = Decimal("0.00000001")

ZERO = Decimal("0")


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize to money scale (4 places, banker's rounding)."""
    return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_EVEN)


def to_qty(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(QTY_QUANT, rounding=ROUND_HALF_EVEN)


def to_avg_cost(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(AVG_COST_QUANT, rounding=ROUND_HALF_EVEN)


def order_amount(qty: Decimal, unit_price: Decimal) -> Decimal:
    """amount = qty * unit_price, at money scale."""
    return to_money(qty * unit_price)


def has_at_most_places(value: Decimal, places: int) -> bool:
    """True when ``value`` needs no more than ``places`` fractional digits."""
    exponent = value.normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return False  # NaN / Infinity
    return -exponent <= places


def money_to_display(value: Decimal) -> str:
    """Convert money to display string: 6500 -> '$6,500.00', -12 -> '-$12.00'."""
    rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
