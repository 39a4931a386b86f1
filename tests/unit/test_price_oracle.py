"""Unit tests for HttpPriceOracle against an httpx.MockTransport."""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.pm_common.errors import PriceUnavailableError
from src.pm_pricing.infrastructure.http_oracle import HttpPriceOracle


def _oracle(handler, use_cache: bool = False) -> HttpPriceOracle:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpPriceOracle(
        base_url="http://quotes.test/api/stock/",
        client=client,
        use_cache=use_cache,
    )


def _quote(price: object) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": {"symbol": "AAPL", "price": price}})


class TestFetch:
    async def test_returns_price_at_money_scale(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _quote(187.123456)

        price = await _oracle(handler).get_reference_price("aapl")

        assert price == Decimal("187.1235")
        assert seen[0].url.path == "/api/stock/quote"
        assert seen[0].url.params["symbol"] == "AAPL"

    async def test_cash_is_one_without_network(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await _oracle(handler).get_reference_price("CASH") == Decimal("1")

    @pytest.mark.parametrize("price", [0, -3, None, "abc", "NaN", "0.00004"])
    async def test_bad_price(self, price) -> None:
        oracle = _oracle(lambda request: _quote(price))
        with pytest.raises(PriceUnavailableError) as exc_info:
            await oracle.get_reference_price("AAPL")
        assert exc_info.value.code == 4002

    async def test_service_reports_failure(self) -> None:
        oracle = _oracle(
            lambda request: httpx.Response(200, json={"success": False, "error": "unknown symbol"})
        )
        with pytest.raises(PriceUnavailableError, match="unknown symbol"):
            await oracle.get_reference_price("ZZZ")

    async def test_http_error_status(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(503))
        with pytest.raises(PriceUnavailableError, match="503"):
            await oracle.get_reference_price("AAPL")

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(PriceUnavailableError, match="timed out"):
            await _oracle(handler).get_reference_price("AAPL")

    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(PriceUnavailableError, match="unreachable"):
            await _oracle(handler).get_reference_price("AAPL")

    async def test_invalid_json(self) -> None:
        oracle = _oracle(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(PriceUnavailableError, match="invalid JSON"):
            await oracle.get_reference_price("AAPL")


class TestCache:
    async def test_cache_hit_skips_request(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = "99.5000"

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with patch(
            "src.pm_pricing.infrastructure.http_oracle.get_redis",
            AsyncMock(return_value=redis),
        ):
            price = await _oracle(handler, use_cache=True).get_reference_price("AAPL")

        assert price == Decimal("99.5")
        redis.get.assert_awaited_once_with("price:ref:AAPL")

    async def test_miss_fetches_and_stores(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = None

        with patch(
            "src.pm_pricing.infrastructure.http_oracle.get_redis",
            AsyncMock(return_value=redis),
        ):
            oracle = _oracle(lambda request: _quote(10), use_cache=True)
            price = await oracle.get_reference_price("AAPL")

        assert price == Decimal("10")
        redis.set.assert_awaited_once_with("price:ref:AAPL", "10.0000", ex=oracle.cache_ttl)

    async def test_redis_outage_degrades_to_uncached(self) -> None:
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")
        redis.set.side_effect = RedisConnectionError("down")

        with patch(
            "src.pm_pricing.infrastructure.http_oracle.get_redis",
            AsyncMock(return_value=redis),
        ):
            price = await _oracle(lambda request: _quote(12.5), use_cache=True).get_reference_price(
                "AAPL"
            )

        assert price == Decimal("12.5")
