# src/pm_order/application/service.py
"""OrderLifecycleService — place / update / cancel / confirm / reject.

Each mutating operation is one transaction. Confirm locks
order → account → position (always in that order) and either commits every
settlement write or none of them.
"""
import logging

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pm_account.domain.repository import AccountRepositoryProtocol
from src.pm_account.infrastructure.persistence import AccountRepository
from src.pm_asset.domain.repository import AssetCatalogProtocol
from src.pm_asset.infrastructure.persistence import AssetCatalog
from src.pm_common.database import is_lock_conflict, set_lock_timeout
from src.pm_common.datetime_utils import settlement_date, utc_now
from src.pm_common.enums import BuySell, OrderStatus, OrderType
from src.pm_common.errors import (
    AccountNotFoundError,
    AssetNotFoundError,
    InsufficientFundsError,
    OrderNotFoundError,
    SettlementConflictError,
    ValidationError,
)
from src.pm_common.money import money_to_display, order_amount, to_money
from src.pm_common.pagination import cursor_decode, cursor_encode
from src.pm_order.application.schemas import (
    CancelOrderResponse,
    ConfirmOrderResponse,
    OrderListResponse,
    OrderPreview,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    UpdateOrderRequest,
)
from src.pm_order.application.settlement import settle_buy, settle_sell
from src.pm_order.domain.models import Order, OrderState
from src.pm_order.domain.repository import OrderRepositoryProtocol
from src.pm_order.domain.rules import (
    apply_modification,
    check_amount,
    check_placement_price,
    check_qty,
)
from src.pm_order.infrastructure.persistence import OrderRepository
from src.pm_position.domain.repository import PositionRepositoryProtocol
from src.pm_position.infrastructure.persistence import PositionRepository
from src.pm_pricing.domain.oracle import PriceOracleProtocol
from src.pm_pricing.infrastructure.http_oracle import get_price_oracle
from src.pm_transaction.domain.repository import TransactionRepositoryProtocol
from src.pm_transaction.infrastructure.persistence import TransactionRepository

logger = logging.getLogger(__name__)


class OrderLifecycleService:
    def __init__(
        self,
        order_repo: OrderRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        position_repo: PositionRepositoryProtocol | None = None,
        trans_repo: TransactionRepositoryProtocol | None = None,
        catalog: AssetCatalogProtocol | None = None,
        oracle: PriceOracleProtocol | None = None,
    ) -> None:
        self._orders: OrderRepositoryProtocol = order_repo or OrderRepository()
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._positions: PositionRepositoryProtocol = position_repo or PositionRepository()
        self._transactions: TransactionRepositoryProtocol = trans_repo or TransactionRepository()
        self._catalog: AssetCatalogProtocol = catalog or AssetCatalog()
        self._oracle = oracle

    def _get_oracle(self) -> PriceOracleProtocol:
        if self._oracle is None:
            self._oracle = get_price_oracle()
        return self._oracle

    # ------------------------------------------------------------------
    # place
    # ------------------------------------------------------------------

    async def place_order(self, db: AsyncSession, req: PlaceOrderRequest) -> PlaceOrderResponse:
        check_qty(req.qty)
        check_placement_price(req.order_type, req.price)

        async with db.begin():
            asset = await self._catalog.lookup_by_symbol(db, req.symbol)
            if asset is None:
                raise AssetNotFoundError(req.symbol)
            account = await self._accounts.get_account(db, req.account_id)
            if account is None or account.user_id != req.user_id:
                raise AccountNotFoundError(req.account_id)

        # Outside any transaction: the oracle has its own timeout
        if req.price is not None:
            unit_price = req.price
        elif asset.is_cash:
            unit_price = to_money(1)
        else:
            unit_price = await self._get_oracle().get_reference_price(asset.ticker)

        amount = order_amount(req.qty, unit_price)
        check_amount(amount)
        if req.buy_sell == BuySell.BUY and not account.can_afford(amount):
            raise InsufficientFundsError(amount, account.cash_balance)

        now = utc_now()
        draft = Order(
            id=0,
            user_id=req.user_id,
            account_id=account.id,
            asset_id=asset.id,
            symbol=asset.ticker,
            description=req.description,
            buy_sell=req.buy_sell,
            order_type=req.order_type,
            qty=req.qty,
            unit_price=unit_price,
            limit_price=req.price if req.order_type == OrderType.LIMIT else None,
            amount=amount,
            state=OrderState.initial(),
            order_date=now,
            settlement_date=settlement_date(now, settings.SETTLEMENT_DAYS),
        )
        async with db.begin():
            order = await self._orders.insert(db, draft)

        logger.info(
            "Order placed: order=%d user=%d %s %s %s @ %s amount=%s",
            order.id, order.user_id, order.buy_sell.value, order.qty,
            order.symbol, order.unit_price, order.amount,
        )
        if order.is_buy:
            after = account.cash_balance - amount
        else:
            after = account.cash_balance + amount
        return PlaceOrderResponse(
            order=OrderResponse.from_domain(order),
            preview=OrderPreview(
                account_name=account.account_name,
                estimated_total=amount,
                estimated_total_display=money_to_display(amount),
                account_balance=account.cash_balance,
                balance_after_trade=after,
                balance_after_trade_display=money_to_display(after),
            ),
            message=f"Order placed for {order.qty.normalize():f} {order.symbol}; "
            "awaiting confirmation",
        )

    # ------------------------------------------------------------------
    # update / cancel / reject
    # ------------------------------------------------------------------

    async def _locked_order(self, db: AsyncSession, order_id: int) -> Order:
        order = await self._orders.get_for_update(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def update_order(
        self, db: AsyncSession, order_id: int, req: UpdateOrderRequest
    ) -> OrderResponse:
        async with db.begin():
            order = await self._locked_order(db, order_id)
            apply_modification(order, req.qty, req.order_type, req.limit_price)
            order = await self._orders.update(db, order)
        logger.info(
            "Order updated: order=%d qty=%s type=%s limit=%s state=%s",
            order.id, order.qty, order.order_type.value, order.limit_price, order.state,
        )
        return OrderResponse.from_domain(order)

    async def cancel_order(self, db: AsyncSession, order_id: int) -> CancelOrderResponse:
        async with db.begin():
            order = await self._locked_order(db, order_id)
            order.mark_cancelled()
            order = await self._orders.update(db, order)
        logger.info("Order cancelled: order=%d", order.id)
        return CancelOrderResponse(
            order_id=order.id,
            order_status=order.order_status.value,
            confirmation_status=order.confirmation_status.value,
            message="Order cancelled",
        )

    async def reject_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        async with db.begin():
            order = await self._locked_order(db, order_id)
            order.mark_rejected()
            order = await self._orders.update(db, order)
        logger.info("Order rejected: order=%d state=%s", order.id, order.state)
        return OrderResponse.from_domain(order)

    # ------------------------------------------------------------------
    # confirm
    # ------------------------------------------------------------------

    async def confirm_order(self, db: AsyncSession, order_id: int) -> ConfirmOrderResponse:
        try:
            async with db.begin():
                await set_lock_timeout(db, settings.SETTLEMENT_LOCK_TIMEOUT_MS)
                order = await self._locked_order(db, order_id)
                order.ensure_confirmable()
                account = await self._accounts.get_account_for_update(db, order.account_id)
                if account is None:
                    raise AccountNotFoundError(order.account_id)

                settle = settle_buy if order.is_buy else settle_sell
                account = await settle(
                    db, order, account, self._accounts, self._positions, self._transactions
                )
                order.mark_confirmed()
                order = await self._orders.update(db, order)
        except DBAPIError as e:
            if is_lock_conflict(e):
                logger.warning("Settlement conflict on order %d: %s", order_id, e.orig)
                raise SettlementConflictError(order_id) from e
            raise

        logger.info(
            "Order confirmed: order=%d %s %s %s amount=%s balance=%s",
            order.id, order.buy_sell.value, order.qty, order.symbol,
            order.amount, account.cash_balance,
        )
        return ConfirmOrderResponse.from_result(order, account.cash_balance)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        order = await self._orders.get_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderResponse.from_domain(order)

    async def list_orders(
        self,
        db: AsyncSession,
        user_id: int,
        status: str | None,
        limit: int,
        cursor: str | None,
    ) -> OrderListResponse:
        if status is not None and status not in {s.value for s in OrderStatus}:
            raise ValidationError(f"unknown order status {status}")
        orders = await self._orders.list_by_user(
            db, user_id, status, cursor_decode(cursor), limit + 1
        )
        has_more = len(orders) > limit
        page = orders[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return OrderListResponse(
            items=[OrderResponse.from_domain(o) for o in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
