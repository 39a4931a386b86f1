"""Order input rules — pure checks raising AppError subclasses.

Quantities carry at most 8 fractional digits, prices at most 4 (the scales of
the NUMERIC columns they are stored in).
"""

from decimal import Decimal

from src.pm_common.enums import OrderType
from src.pm_common.errors import InvalidOrderTypeError, NoChangesError, ValidationError
from src.pm_common.money import ZERO, has_at_most_places, order_amount
from src.pm_order.domain.models import Order

QTY_PLACES = 8
PRICE_PLACES = 4


def check_qty(qty: Decimal) -> None:
    """Raise ValidationError unless qty is a positive number with <= 8 decimals."""
    if not qty.is_finite() or qty <= ZERO:
        raise ValidationError(f"quantity must be greater than 0, got {qty}")
    if not has_at_most_places(qty, QTY_PLACES):
        raise ValidationError(f"quantity {qty} has more than {QTY_PLACES} decimal places")


def check_price(price: Decimal, field: str = "price") -> None:
    if not price.is_finite() or price <= ZERO:
        raise ValidationError(f"{field} must be greater than 0, got {price}")
    if not has_at_most_places(price, PRICE_PLACES):
        raise ValidationError(f"{field} {price} has more than {PRICE_PLACES} decimal places")


def check_amount(amount: Decimal) -> None:
    """qty * unit_price must still be worth something once rounded to money scale."""
    if amount <= ZERO:
        raise ValidationError(f"order amount rounds to {amount}; increase the quantity")


def check_placement_price(order_type: OrderType, price: Decimal | None) -> None:
    """Limit orders need a price; Market Open may carry one."""
    if price is None:
        if order_type == OrderType.LIMIT:
            raise ValidationError("Limit orders require a price")
        return
    check_price(price)


def apply_modification(
    order: Order,
    qty: Decimal | None,
    order_type: OrderType | None,
    limit_price: Decimal | None,
) -> None:
    """Apply an update in place and send the order back for confirmation.

    Only supplied fields change. Switching to Market Open clears limit_price;
    a limit_price is accepted only when the effective order type is Limit.
    amount is recomputed from the stored unit_price.
    """
    order.ensure_modifiable("updated")
    if qty is None and order_type is None and limit_price is None:
        raise NoChangesError()

    amount = order.amount
    if qty is not None:
        check_qty(qty)
        amount = order_amount(qty, order.unit_price)
        check_amount(amount)
    effective_type = order_type or order.order_type
    if limit_price is not None:
        if effective_type != OrderType.LIMIT:
            raise InvalidOrderTypeError(
                f"Limit price can only be set on Limit orders, not {effective_type.value}"
            )
        check_price(limit_price, "limit_price")

    if qty is not None:
        order.qty = qty
        order.amount = amount
    if order_type is not None:
        order.order_type = order_type
        if order_type == OrderType.MARKET_OPEN:
            order.limit_price = None
    if limit_price is not None:
        order.limit_price = limit_price
    order.mark_updated()
