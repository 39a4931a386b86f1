"""Unit-test fixtures: a mock session and in-memory repositories.

The in-memory repositories follow the SQL statements they stand in for
(conditional debit, ON CONFLICT DO NOTHING insert, delete-on-close) so the
lifecycle service can be driven end to end without PostgreSQL. Reads return
copies; only explicit writes change stored state.
"""

from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pm_account.domain.models import Account
from src.pm_asset.domain.models import Asset
from src.pm_common.errors import PriceUnavailableError
from src.pm_order.application.service import OrderLifecycleService
from src.pm_order.domain.models import Order
from src.pm_position.domain.cost_basis import PositionChange
from src.pm_position.domain.models import Position
from src.pm_transaction.domain.models import Transaction

ASSETS = {
    "AAPL": Asset(id=1, ticker="AAPL", name="Apple Inc.", asset_class="Stock"),
    "SPY": Asset(id=2, ticker="SPY", name="SPDR S&P 500 ETF Trust", asset_class="ETF"),
    "CASH": Asset(id=3, ticker="CASH", name="Cash", asset_class="Cash"),
}


class InMemoryAccounts:
    def __init__(self) -> None:
        self.rows: dict[int, Account] = {}

    def seed(self, account_id: int, user_id: int, cash: str) -> Account:
        self.rows[account_id] = Account(
            id=account_id,
            user_id=user_id,
            account_name="Brokerage",
            account_type="brokerage",
            cash_balance=Decimal(cash),
            is_default=True,
            version=0,
        )
        return self.rows[account_id]

    async def create_account(self, db, user_id, account_name, account_type, is_default=False):
        new_id = max(self.rows, default=0) + 1
        first = not any(a.user_id == user_id for a in self.rows.values())
        self.rows[new_id] = Account(
            id=new_id,
            user_id=user_id,
            account_name=account_name,
            account_type=account_type,
            cash_balance=Decimal("0"),
            is_default=is_default or first,
            version=0,
        )
        return replace(self.rows[new_id])

    async def get_account(self, db, account_id):
        row = self.rows.get(account_id)
        return replace(row) if row else None

    get_account_for_update = get_account

    async def list_accounts(self, db, user_id):
        return [replace(a) for a in self.rows.values() if a.user_id == user_id]

    async def credit(self, db, account_id, amount):
        row = self.rows.get(account_id)
        if row is None:
            return None
        row.cash_balance += amount
        row.version += 1
        return replace(row)

    async def debit(self, db, account_id, amount):
        row = self.rows.get(account_id)
        if row is None or row.cash_balance < amount:
            return None
        row.cash_balance -= amount
        row.version += 1
        return replace(row)


class InMemoryPositions:
    def __init__(self) -> None:
        self.rows: dict[tuple[int, int], Position] = {}
        self._next_id = 1

    def find(self, user_id: int, symbol: str) -> Position | None:
        return self.rows.get((user_id, ASSETS[symbol].id))

    async def get_for_update(self, db, user_id, asset_id):
        row = self.rows.get((user_id, asset_id))
        return replace(row) if row else None

    async def insert_if_absent(self, db, user_id, asset_id, change: PositionChange):
        if (user_id, asset_id) in self.rows:
            return None
        row = Position(
            id=self._next_id,
            user_id=user_id,
            asset_id=asset_id,
            units=change.units,
            avg_cost_per_unit=change.avg_cost_per_unit,
            investment_amount=change.investment_amount,
        )
        self._next_id += 1
        self.rows[(user_id, asset_id)] = row
        return replace(row)

    def _key(self, position_id: int) -> tuple[int, int]:
        return next(k for k, p in self.rows.items() if p.id == position_id)

    async def update(self, db, position_id, change: PositionChange):
        assert change.units > 0, "zero-unit rows must be deleted"
        row = self.rows[self._key(position_id)]
        row.units = change.units
        row.avg_cost_per_unit = change.avg_cost_per_unit
        row.investment_amount = change.investment_amount
        return replace(row)

    async def delete(self, db, position_id):
        del self.rows[self._key(position_id)]

    async def list_by_user(self, db, user_id):
        return [replace(p) for (u, _), p in self.rows.items() if u == user_id]

    async def get_by_symbol(self, db, user_id, symbol):
        asset = ASSETS.get(symbol.upper())
        row = self.rows.get((user_id, asset.id)) if asset else None
        return replace(row) if row else None


class InMemoryOrders:
    def __init__(self) -> None:
        self.rows: dict[int, Order] = {}

    async def insert(self, db, order: Order):
        stored = replace(order, id=len(self.rows) + 1, updated_at=datetime.now(UTC))
        self.rows[stored.id] = stored
        return replace(stored)

    async def get_by_id(self, db, order_id):
        row = self.rows.get(order_id)
        return replace(row) if row else None

    get_for_update = get_by_id

    async def update(self, db, order: Order):
        self.rows[order.id] = replace(order, updated_at=datetime.now(UTC))
        return replace(self.rows[order.id])

    async def list_by_user(self, db, user_id, order_status, cursor_id, limit):
        rows = sorted(
            (o for o in self.rows.values() if o.user_id == user_id),
            key=lambda o: o.id,
            reverse=True,
        )
        if order_status is not None:
            rows = [o for o in rows if o.order_status.value == order_status]
        if cursor_id is not None:
            rows = [o for o in rows if o.id < cursor_id]
        return [replace(o) for o in rows[:limit]]


class InMemoryTransactions:
    def __init__(self) -> None:
        self.rows: list[Transaction] = []

    async def append(self, db, *, user_id, account_id, trans_type, cost, description,
                     asset_id=None, order_id=None, units=None, price_per_unit=None):
        if order_id is not None:
            # partial unique index on order_id
            assert all(t.order_id != order_id for t in self.rows)
        row = Transaction(
            id=len(self.rows) + 1,
            user_id=user_id,
            account_id=account_id,
            trans_type=trans_type,
            cost=cost,
            asset_id=asset_id,
            order_id=order_id,
            units=units,
            price_per_unit=price_per_unit,
            description=description,
            date=datetime.now(UTC),
        )
        self.rows.append(row)
        return row

    async def list_by_user(self, db, user_id, account_id, trans_type, cursor_id, limit):
        rows = [t for t in reversed(self.rows) if t.user_id == user_id]
        return rows[:limit]


class InMemoryCatalog:
    async def lookup_by_symbol(self, db, ticker):
        return ASSETS.get(ticker.upper())

    async def list_assets(self, db, asset_class):
        return list(ASSETS.values())


class StaticOracle:
    def __init__(self, prices: dict[str, str] | None = None) -> None:
        self.prices = {k: Decimal(v) for k, v in (prices or {}).items()}
        self.calls: list[str] = []

    async def get_reference_price(self, symbol: str) -> Decimal:
        self.calls.append(symbol)
        if symbol not in self.prices:
            raise PriceUnavailableError(symbol, "no quote")
        return self.prices[symbol]


class Book:
    """All in-memory stores plus a service wired to them."""

    def __init__(self) -> None:
        self.accounts = InMemoryAccounts()
        self.positions = InMemoryPositions()
        self.orders = InMemoryOrders()
        self.transactions = InMemoryTransactions()
        self.oracle = StaticOracle({"AAPL": "50", "SPY": "400"})
        self.service = OrderLifecycleService(
            order_repo=self.orders,
            account_repo=self.accounts,
            position_repo=self.positions,
            trans_repo=self.transactions,
            catalog=InMemoryCatalog(),
            oracle=self.oracle,
        )

    @property
    def cash(self) -> Decimal:
        return self.accounts.rows[1].cash_balance


@pytest.fixture
def db() -> MagicMock:
    """Session double: `async with db.begin()` works and execute is awaitable."""
    session = MagicMock()
    session.execute = AsyncMock(return_value=MagicMock())
    return session


@pytest.fixture
def book() -> Book:
    """User 1 with account 1 holding $1,000 cash."""
    b = Book()
    b.accounts.seed(1, user_id=1, cash="1000")
    return b
