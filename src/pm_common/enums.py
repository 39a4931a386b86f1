"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class BuySell(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class OrderType(str, Enum):
    MARKET_OPEN = "Market Open"
    LIMIT = "Limit"


class OrderStatus(str, Enum):
    PLACED = "Placed"
    UNDER_REVIEW = "Under Review"
    CANCELLED = "Cancelled"
    EXECUTED = "Executed"


class ConfirmationStatus(str, Enum):
    PENDING = "pending_confirmation"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class TransactionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    BROKERAGE = "brokerage"
