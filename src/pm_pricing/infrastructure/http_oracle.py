"""HTTP client for the external quote service.

GET {PRICE_ORACLE_URL}/quote?symbol=XYZ is expected to answer
    {"success": true, "data": {"price": 123.45, ...}}
Successful quotes are cached in Redis for PRICE_CACHE_TTL_SECONDS; a Redis
outage only disables the cache, it never blocks a lookup.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
from redis.exceptions import RedisError

from config.settings import settings
from src.pm_common.errors import PriceUnavailableError
from src.pm_common.money import to_money
from src.pm_common.redis_client import get_redis

logger = logging.getLogger(__name__)

CASH_SYMBOL = "CASH"
_CACHE_KEY = "price:ref:{symbol}"


def _extract_price(symbol: str, payload: Any) -> Decimal:
    if not isinstance(payload, dict) or payload.get("success") is False:
        detail = payload.get("error") if isinstance(payload, dict) else None
        raise PriceUnavailableError(symbol, detail or "quote service reported failure")
    data = payload.get("data")
    raw = data.get("price") if isinstance(data, dict) else None
    if raw is None:
        raise PriceUnavailableError(symbol, "quote has no price")
    try:
        # str() first so floats from JSON keep their printed value
        price = Decimal(str(raw))
    except InvalidOperation:
        raise PriceUnavailableError(symbol, f"unparsable price {raw!r}") from None
    if not price.is_finite():
        raise PriceUnavailableError(symbol, f"non-finite price {raw!r}")
    price = to_money(price)
    if price <= 0:
        raise PriceUnavailableError(symbol, f"non-positive price {raw!r}")
    return price


class HttpPriceOracle:
    """Reference-price lookup with a short-lived Redis cache.

    Usage:
        oracle = HttpPriceOracle()
        price = await oracle.get_reference_price("AAPL")
        await oracle.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        cache_ttl: int | None = None,
        client: httpx.AsyncClient | None = None,
        use_cache: bool = True,
    ) -> None:
        self.base_url = (base_url or settings.PRICE_ORACLE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PRICE_ORACLE_TIMEOUT_SECONDS
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.PRICE_CACHE_TTL_SECONDS
        self.use_cache = use_cache
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_reference_price(self, symbol: str) -> Decimal:
        symbol = symbol.upper()
        if symbol == CASH_SYMBOL:
            return Decimal("1.0000")

        cached = await self._cache_get(symbol)
        if cached is not None:
            return cached

        price = await self._fetch(symbol)
        await self._cache_set(symbol, price)
        return price

    async def _fetch(self, symbol: str) -> Decimal:
        try:
            response = await self._get_client().get(
                f"{self.base_url}/quote", params={"symbol": symbol}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException:
            logger.warning("Quote request timed out: symbol=%s", symbol)
            raise PriceUnavailableError(symbol, "quote service timed out") from None
        except httpx.HTTPStatusError as e:
            logger.warning("Quote service error: symbol=%s status=%d", symbol, e.response.status_code)
            raise PriceUnavailableError(
                symbol, f"quote service returned {e.response.status_code}"
            ) from None
        except httpx.HTTPError as e:
            logger.warning("Quote service unreachable: symbol=%s error=%s", symbol, e)
            raise PriceUnavailableError(symbol, "quote service unreachable") from None
        except ValueError:
            raise PriceUnavailableError(symbol, "quote service returned invalid JSON") from None
        return _extract_price(symbol, payload)

    async def _cache_get(self, symbol: str) -> Decimal | None:
        if not self.use_cache:
            return None
        try:
            redis = await get_redis()
            raw = await redis.get(_CACHE_KEY.format(symbol=symbol))
        except RedisError as e:
            logger.warning("Price cache read failed, bypassing: %s", e)
            return None
        return Decimal(raw) if raw else None

    async def _cache_set(self, symbol: str, price: Decimal) -> None:
        if not self.use_cache or self.cache_ttl <= 0:
            return
        try:
            redis = await get_redis()
            await redis.set(_CACHE_KEY.format(symbol=symbol), str(price), ex=self.cache_ttl)
        except RedisError as e:
            logger.warning("Price cache write failed: %s", e)


_default_oracle: HttpPriceOracle | None = None


def get_price_oracle() -> HttpPriceOracle:
    """Module-level singleton shared by request handlers."""
    global _default_oracle  # noqa: PLW0603
    if _default_oracle is None:
        _default_oracle = HttpPriceOracle()
    return _default_oracle


async def close_price_oracle() -> None:
    global _default_oracle  # noqa: PLW0603
    if _default_oracle is not None:
        await _default_oracle.close()
        _default_oracle = None
