"""Buy / Sell settlement steps run inside the confirm transaction.

The caller has already locked the order and account rows (in that order);
the position row is locked here, last. Every write goes through the caller's
session so a failure anywhere rolls all of them back together.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.domain.models import Account
from src.pm_account.domain.repository import AccountRepositoryProtocol
from src.pm_common.enums import TransactionType
from src.pm_common.errors import InsufficientFundsError, InternalError, NoHoldingsError
from src.pm_order.domain.models import Order
from src.pm_position.domain.cost_basis import apply_buy, apply_sell
from src.pm_position.domain.repository import PositionRepositoryProtocol
from src.pm_transaction.domain.repository import TransactionRepositoryProtocol

logger = logging.getLogger(__name__)


def _describe(order: Order) -> str:
    if order.description:
        return order.description
    verb = "Buy" if order.is_buy else "Sell"
    return f"{verb} {order.qty.normalize():f} shares of {order.symbol}"


async def settle_buy(
    db: AsyncSession,
    order: Order,
    account: Account,
    accounts: AccountRepositoryProtocol,
    positions: PositionRepositoryProtocol,
    transactions: TransactionRepositoryProtocol,
) -> Account:
    """Debit cash, grow the position, log a BUY. Returns the debited account."""
    if not account.can_afford(order.amount):
        raise InsufficientFundsError(order.amount, account.cash_balance)
    debited = await accounts.debit(db, account.id, order.amount)
    if debited is None:
        raise InsufficientFundsError(order.amount, account.cash_balance)

    position = await positions.get_for_update(db, order.user_id, order.asset_id)
    if position is None:
        created = await positions.insert_if_absent(
            db,
            order.user_id,
            order.asset_id,
            apply_buy(None, order.qty, order.unit_price, order.amount),
        )
        if created is None:
            # Lost the first-buy race; the winner's row is committed now
            position = await positions.get_for_update(db, order.user_id, order.asset_id)
            if position is None:
                raise InternalError(
                    f"Position for user {order.user_id} asset {order.asset_id} "
                    "conflicted on insert but cannot be read"
                )
            logger.info("First-buy race on order %d; merging into position %d", order.id, position.id)
    if position is not None:
        await positions.update(
            db, position.id, apply_buy(position, order.qty, order.unit_price, order.amount)
        )

    await transactions.append(
        db,
        user_id=order.user_id,
        account_id=account.id,
        trans_type=TransactionType.BUY.value,
        cost=order.amount,
        description=_describe(order),
        asset_id=order.asset_id,
        order_id=order.id,
        units=order.qty,
        price_per_unit=order.unit_price,
    )
    return debited


async def settle_sell(
    db: AsyncSession,
    order: Order,
    account: Account,
    accounts: AccountRepositoryProtocol,
    positions: PositionRepositoryProtocol,
    transactions: TransactionRepositoryProtocol,
) -> Account:
    """Shrink or close the position, credit proceeds, log a SELL."""
    position = await positions.get_for_update(db, order.user_id, order.asset_id)
    if position is None:
        raise NoHoldingsError(order.symbol)
    change = apply_sell(position, order.qty)

    credited = await accounts.credit(db, account.id, order.amount)
    if credited is None:
        raise InternalError(f"Account {account.id} vanished under lock")

    if change.closes_position:
        await positions.delete(db, position.id)
    else:
        await positions.update(db, position.id, change)

    await transactions.append(
        db,
        user_id=order.user_id,
        account_id=account.id,
        trans_type=TransactionType.SELL.value,
        cost=order.amount,
        description=_describe(order),
        asset_id=order.asset_id,
        order_id=order.id,
        units=order.qty,
        price_per_unit=order.unit_price,
    )
    return credited
