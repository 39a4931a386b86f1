"""Domain models for pm_asset — pure dataclasses, no business logic."""

from dataclasses import dataclass

CASH_ASSET_CLASS = "Cash"


@dataclass(frozen=True)
class Asset:
    id: int
    ticker: str
    name: str
    asset_class: str   # Stock, ETF, Bond, Cash, ...

    @property
    def is_cash(self) -> bool:
        return self.asset_class == CASH_ASSET_CLASS
