"""UTC datetime utilities."""

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def settlement_date(order_date: datetime, days: int) -> date:
    """Calendar-day settlement: order date + ``days`` (T+2 by default)."""
    return (order_date + timedelta(days=days)).date()
