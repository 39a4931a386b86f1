"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def create_account(
        self,
        db: AsyncSession,
        user_id: int,
        account_name: str,
        account_type: str,
        is_default: bool = False,
    ) -> Account: ...

    async def get_account(self, db: AsyncSession, account_id: int) -> Account | None: ...

    async def get_account_for_update(
        self, db: AsyncSession, account_id: int
    ) -> Account | None: ...

    async def list_accounts(self, db: AsyncSession, user_id: int) -> list[Account]: ...

    async def credit(
        self, db: AsyncSession, account_id: int, amount: Decimal
    ) -> Account | None: ...

    async def debit(
        self, db: AsyncSession, account_id: int, amount: Decimal
    ) -> Account | None: ...
