"""Domain models for pm_position — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Position:
    """A user's aggregate holding in one asset (single weighted-average lot)."""

    id: int
    user_id: int
    asset_id: int
    units: Decimal               # always > 0 for a stored row
    avg_cost_per_unit: Decimal   # unit-weighted purchase price of unsold units
    investment_amount: Decimal   # remaining cost basis, shrinks on partial sells
    symbol: str | None = None    # joined from assets on read
    asset_name: str | None = None
    asset_class: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
