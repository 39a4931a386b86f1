"""AccountApplicationService — thin composition layer.

Combines repository calls with schema transformations.
Deposit and withdraw use `async with db.begin()` so the balance change and its
transaction-log row land together. Reads run without explicit transaction.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.application.schemas import (
    AccountListResponse,
    AccountResponse,
    BalanceResponse,
    CashMovementResponse,
    CreateAccountRequest,
)
from src.pm_account.domain.repository import AccountRepositoryProtocol
from src.pm_account.infrastructure.persistence import AccountRepository
from src.pm_common.enums import TransactionType
from src.pm_common.errors import AccountNotFoundError, InsufficientFundsError
from src.pm_common.money import money_to_display, to_money
from src.pm_transaction.domain.repository import TransactionRepositoryProtocol
from src.pm_transaction.infrastructure.persistence import TransactionRepository

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        trans_repo: TransactionRepositoryProtocol | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._trans_repo: TransactionRepositoryProtocol = trans_repo or TransactionRepository()

    async def create_account(
        self, db: AsyncSession, req: CreateAccountRequest
    ) -> AccountResponse:
        async with db.begin():
            account = await self._repo.create_account(
                db, req.user_id, req.account_name, req.account_type.value
            )
        logger.info(
            "Account created: account=%d user=%d default=%s",
            account.id, account.user_id, account.is_default,
        )
        return AccountResponse.from_domain(account)

    async def list_accounts(self, db: AsyncSession, user_id: int) -> AccountListResponse:
        accounts = await self._repo.list_accounts(db, user_id)
        return AccountListResponse(
            items=[AccountResponse.from_domain(a) for a in accounts],
            total=len(accounts),
        )

    async def get_balance(self, db: AsyncSession, account_id: int) -> BalanceResponse:
        account = await self._repo.get_account(db, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return BalanceResponse(
            account_id=account.id,
            cash_balance=account.cash_balance,
            cash_balance_display=money_to_display(account.cash_balance),
        )

    async def deposit(
        self,
        db: AsyncSession,
        account_id: int,
        amount: Decimal,
        description: str | None = None,
    ) -> CashMovementResponse:
        amount = to_money(amount)
        async with db.begin():
            account = await self._repo.credit(db, account_id, amount)
            if account is None:
                raise AccountNotFoundError(account_id)
            entry = await self._trans_repo.append(
                db,
                user_id=account.user_id,
                account_id=account.id,
                trans_type=TransactionType.DEPOSIT.value,
                cost=amount,
                description=description or "Cash deposit",
            )
        logger.info("Deposit: account=%d amount=%s balance=%s", account_id, amount, account.cash_balance)
        return CashMovementResponse.from_result(
            account,
            amount,
            account.cash_balance - amount,
            entry.id,
            entry.date.isoformat() if entry.date else "",
        )

    async def withdraw(
        self,
        db: AsyncSession,
        account_id: int,
        amount: Decimal,
        description: str | None = None,
    ) -> CashMovementResponse:
        amount = to_money(amount)
        async with db.begin():
            account = await self._repo.debit(db, account_id, amount)
            if account is None:
                current = await self._repo.get_account(db, account_id)
                if current is None:
                    raise AccountNotFoundError(account_id)
                raise InsufficientFundsError(amount, current.cash_balance)
            entry = await self._trans_repo.append(
                db,
                user_id=account.user_id,
                account_id=account.id,
                trans_type=TransactionType.WITHDRAW.value,
                cost=amount,
                description=description or "Cash withdrawal",
            )
        logger.info("Withdraw: account=%d amount=%s balance=%s", account_id, amount, account.cash_balance)
        return CashMovementResponse.from_result(
            account,
            amount,
            account.cash_balance + amount,
            entry.id,
            entry.date.isoformat() if entry.date else "",
        )
