"""Unit tests for the read-side services: positions, transactions, assets."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.pm_asset.application.service import AssetApplicationService
from src.pm_common.errors import AssetNotFoundError, PositionNotFoundError, ValidationError
from src.pm_common.pagination import cursor_decode
from src.pm_position.application.service import PositionApplicationService
from src.pm_position.domain.models import Position
from src.pm_transaction.application.service import TransactionApplicationService, summarize
from src.pm_transaction.domain.models import Transaction


def _txn(txn_id: int, trans_type: str, cost: str) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=1,
        account_id=1,
        trans_type=trans_type,
        cost=Decimal(cost),
        date=datetime.now(UTC),
    )


class TestPositions:
    async def test_list_with_total_invested(self, db) -> None:
        repo = AsyncMock()
        repo.list_by_user.return_value = [
            Position(1, 1, 1, Decimal("10"), Decimal("50"), Decimal("500"), symbol="AAPL"),
            Position(2, 1, 2, Decimal("2"), Decimal("400"), Decimal("800"), symbol="SPY"),
        ]
        result = await PositionApplicationService(repo=repo).list_positions(db, 1)

        assert result.total == 2
        assert result.total_invested == Decimal("1300")
        assert result.items[0].investment_amount_display == "$500.00"

    async def test_empty_book(self, db) -> None:
        repo = AsyncMock()
        repo.list_by_user.return_value = []
        result = await PositionApplicationService(repo=repo).list_positions(db, 1)
        assert result.total_invested == Decimal("0")

    async def test_get_missing_position(self, db) -> None:
        repo = AsyncMock()
        repo.get_by_symbol.return_value = None
        with pytest.raises(PositionNotFoundError):
            await PositionApplicationService(repo=repo).get_position(db, 1, "AAPL")


class TestTransactions:
    def test_summarize(self) -> None:
        summary = summarize([
            _txn(1, "DEPOSIT", "1000"),
            _txn(2, "BUY", "500"),
            _txn(3, "SELL", "240"),
            _txn(4, "WITHDRAW", "40"),
            _txn(5, "DEPOSIT", "10"),
        ])
        assert summary.total_deposits == Decimal("1010")
        assert summary.total_buys == Decimal("500")
        assert summary.total_sells == Decimal("240")
        assert summary.total_withdrawals == Decimal("40")

    async def test_type_all_means_no_filter(self, db) -> None:
        repo = AsyncMock()
        repo.list_by_user.return_value = []
        await TransactionApplicationService(repo=repo).list_transactions(
            db, 1, None, "all", None, 20
        )
        assert repo.list_by_user.call_args.args[3] is None

    async def test_type_is_case_insensitive(self, db) -> None:
        repo = AsyncMock()
        repo.list_by_user.return_value = []
        await TransactionApplicationService(repo=repo).list_transactions(
            db, 1, None, "buy", None, 20
        )
        assert repo.list_by_user.call_args.args[3] == "BUY"

    async def test_unknown_type(self, db) -> None:
        with pytest.raises(ValidationError):
            await TransactionApplicationService(repo=AsyncMock()).list_transactions(
                db, 1, None, "DIVIDEND", None, 20
            )

    async def test_pagination(self, db) -> None:
        repo = AsyncMock()
        repo.list_by_user.return_value = [_txn(i, "DEPOSIT", "1") for i in (9, 8, 7)]
        result = await TransactionApplicationService(repo=repo).list_transactions(
            db, 1, None, None, None, 2
        )
        assert [t.transaction_id for t in result.items] == [9, 8]
        assert result.has_more is True
        assert cursor_decode(result.next_cursor) == 8
        assert repo.list_by_user.call_args.args[5] == 3


class TestAssets:
    async def test_unknown_symbol(self, db) -> None:
        catalog = AsyncMock()
        catalog.lookup_by_symbol.return_value = None
        with pytest.raises(AssetNotFoundError) as exc_info:
            await AssetApplicationService(catalog=catalog).get_asset(db, "ZZZ")
        assert exc_info.value.code == 3001
