"""Unit tests for pm_common: money helpers, cursors, errors, response envelope."""

from datetime import UTC, datetime
from types import SimpleNamespace
from decimal import Decimal

import pytest

from src.pm_common import errors
from src.pm_common.datetime_utils import settlement_date
from src.pm_common.money import (
    has_at_most_places,
    money_to_display,
    order_amount,
    to_money,
)
from src.pm_common.pagination import cursor_decode, cursor_encode
from src.pm_common.response import error_response, success_response


class TestMoney:
    def test_bankers_rounding(self) -> None:
        assert to_money(Decimal("0.00005")) == Decimal("0.0000")
        assert to_money(Decimal("0.00015")) == Decimal("0.0002")

    def test_order_amount(self) -> None:
        assert order_amount(Decimal("0.333"), Decimal("10.01")) == Decimal("3.3333")

    @pytest.mark.parametrize("value,places,expected", [
        ("1.25", 2, True),
        ("1.250", 2, True),
        ("1.251", 2, False),
        ("100", 0, True),
        ("NaN", 4, False),
    ])
    def test_has_at_most_places(self, value, places, expected) -> None:
        assert has_at_most_places(Decimal(value), places) is expected

    @pytest.mark.parametrize("value,expected", [
        ("6500", "$6,500.00"),
        ("0", "$0.00"),
        ("-12", "-$12.00"),
        ("1234567.891", "$1,234,567.89"),
    ])
    def test_display(self, value, expected) -> None:
        assert money_to_display(Decimal(value)) == expected


class TestSettlementDate:
    def test_t_plus_2_crosses_month(self) -> None:
        assert settlement_date(datetime(2026, 1, 30, 15, tzinfo=UTC), 2).isoformat() == "2026-02-01"


class TestCursor:
    def test_roundtrip(self) -> None:
        assert cursor_decode(cursor_encode(12345)) == 12345

    @pytest.mark.parametrize("cursor", [None, "", "not-base64!", "e30="])
    def test_garbage_decodes_to_none(self, cursor) -> None:
        assert cursor_decode(cursor) is None


class TestErrors:
    @pytest.mark.parametrize("exc,kind,code,status", [
        (errors.ValidationError("x"), "ValidationError", 4001, 422),
        (errors.PriceUnavailableError("AAPL", "down"), "PriceUnavailable", 4002, 422),
        (errors.InvalidOrderTypeError("x"), "InvalidOrderType", 4003, 422),
        (errors.NoChangesError(), "NoChanges", 4005, 422),
        (errors.OrderNotFoundError(1), "NotFound", 4004, 404),
        (errors.AccountNotFoundError(1), "NotFound", 2002, 404),
        (errors.AssetNotFoundError("X"), "NotFound", 3001, 404),
        (errors.PositionNotFoundError("X"), "NotFound", 5002, 404),
        (errors.UserNotFoundError(1), "NotFound", 1004, 404),
        (errors.OrderStateError(1, "confirmed", "Cancelled/pending_confirmation"), "InvalidState", 4006, 409),
        (errors.InsufficientFundsError(1, 0), "InsufficientFunds", 2001, 422),
        (errors.NoHoldingsError("X"), "NoHoldings", 5001, 422),
        (errors.InsufficientSharesError(2, 1), "InsufficientShares", 5003, 422),
        (errors.SettlementConflictError(1), "SettlementConflict", 9003, 409),
        (errors.InternalError(), "InternalError", 9002, 500),
    ])
    def test_taxonomy(self, exc, kind, code, status) -> None:
        assert isinstance(exc, errors.AppError)
        assert (exc.kind, exc.code, exc.http_status) == (kind, code, status)

    def test_message_carries_state(self) -> None:
        exc = errors.OrderStateError(5, "confirmed", "Executed/confirmed")
        assert str(exc) == "Order 5 in state Executed/confirmed cannot be confirmed"


class TestResponse:
    def test_success(self) -> None:
        resp = success_response({"a": 1})
        assert resp.code == 0
        assert resp.kind is None
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(4006, "nope", "InvalidState")
        assert resp.data is None
        assert resp.kind == "InvalidState"

    def test_request_id_comes_from_request_state(self) -> None:
        request = SimpleNamespace(state=SimpleNamespace(request_id="req_abc"))
        assert success_response({}, request).request_id == "req_abc"
        assert error_response(4001, "bad", "ValidationError", request).request_id == "req_abc"

    def test_request_without_id_gets_a_fresh_one(self) -> None:
        request = SimpleNamespace(state=SimpleNamespace())
        assert success_response({}, request).request_id.startswith("req_")
