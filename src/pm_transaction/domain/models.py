"""Transaction log domain model — immutable, append-only."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:
    id: int                              # BIGSERIAL
    user_id: int
    account_id: int
    trans_type: str                      # TransactionType value
    cost: Decimal                        # money moved, always positive
    asset_id: int | None = None          # None for DEPOSIT / WITHDRAW
    order_id: int | None = None          # set for BUY / SELL
    units: Decimal | None = None
    price_per_unit: Decimal | None = None
    description: str | None = None
    date: datetime | None = None
    symbol: str | None = None            # joined from assets on read
    asset_name: str | None = None

    @property
    def is_inflow(self) -> bool:
        """Cash flows into the account (SELL proceeds, DEPOSIT)."""
        return self.trans_type in ("SELL", "DEPOSIT")
