"""Price oracle Protocol — the engine's only view of market prices.

Implementations must raise PriceUnavailableError rather than return a
placeholder when no trustworthy price is available.
"""

from decimal import Decimal
from typing import Protocol


class PriceOracleProtocol(Protocol):
    async def get_reference_price(self, symbol: str) -> Decimal: ...
