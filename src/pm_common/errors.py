"""Unified error codes and custom exceptions.

Every error carries a numeric ``code`` and a stable ``kind`` so callers can
branch on the failure without parsing the message.

Error code ranges:
  1xxx: User
  2xxx: Account
  3xxx: Asset / Pricing
  4xxx: Order
  5xxx: Position
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    kind: str = "AppError"

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- Kinds shared across modules ---

class ValidationError(AppError):
    kind = "ValidationError"

    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Invalid request: {detail}", 422)


class NotFoundError(AppError):
    kind = "NotFound"


class InvalidStateError(AppError):
    kind = "InvalidState"


class InsufficientFundsError(AppError):
    kind = "InsufficientFunds"

    def __init__(self, required: object, available: object) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: required {required}, available {available}",
            422,
        )


# --- 1xxx: User ---

class UsernameExistsError(AppError):
    kind = "Conflict"

    def __init__(self) -> None:
        super().__init__(1001, "Username or email already exists", 409)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__(1004, f"User not found: {user_id}", 404)


# --- 2xxx: Account ---

class AccountNotFoundError(NotFoundError):
    def __init__(self, account_id: int) -> None:
        super().__init__(2002, f"Account not found: {account_id}", 404)


# --- 3xxx: Asset / Pricing ---

class AssetNotFoundError(NotFoundError):
    def __init__(self, symbol: str) -> None:
        super().__init__(3001, f"Asset with ticker {symbol} not found", 404)


class PriceUnavailableError(AppError):
    kind = "PriceUnavailable"

    def __init__(self, symbol: str, detail: str) -> None:
        super().__init__(4002, f"Reference price unavailable for {symbol}: {detail}", 422)


# --- 4xxx: Order ---

class InvalidOrderTypeError(AppError):
    kind = "InvalidOrderType"

    def __init__(self, detail: str) -> None:
        super().__init__(4003, detail, 422)


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


class NoChangesError(AppError):
    kind = "NoChanges"

    def __init__(self) -> None:
        super().__init__(4005, "No update fields provided", 422)


class OrderStateError(InvalidStateError):
    def __init__(self, order_id: int, operation: str, state: str) -> None:
        super().__init__(4006, f"Order {order_id} in state {state} cannot be {operation}", 409)


# --- 5xxx: Position ---

class NoHoldingsError(AppError):
    kind = "NoHoldings"

    def __init__(self, symbol: str) -> None:
        super().__init__(5001, f"No holdings found for {symbol}", 422)


class PositionNotFoundError(NotFoundError):
    def __init__(self, symbol: str) -> None:
        super().__init__(5002, f"Position not found: {symbol}", 404)


class InsufficientSharesError(AppError):
    kind = "InsufficientShares"

    def __init__(self, required: object, available: object) -> None:
        super().__init__(
            5003,
            f"Insufficient shares: required {required}, available {available}",
            422,
        )


# --- 9xxx: System ---

class InternalError(AppError):
    kind = "InternalError"

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class SettlementConflictError(AppError):
    """Settlement transaction lost a lock race; safe for the client to retry."""

    kind = "SettlementConflict"

    def __init__(self, order_id: int) -> None:
        super().__init__(
            9003,
            f"Settlement of order {order_id} conflicted with a concurrent update; retry",
            409,
        )
