"""TransactionApplicationService — read side of the transaction log.

Writes happen only inside account and order services, in their transactions.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.enums import TransactionType
from src.pm_common.errors import ValidationError
from src.pm_common.money import ZERO
from src.pm_common.pagination import cursor_decode, cursor_encode
from src.pm_transaction.application.schemas import (
    TransactionItem,
    TransactionListResponse,
    TransactionSummary,
)
from src.pm_transaction.domain.models import Transaction
from src.pm_transaction.domain.repository import TransactionRepositoryProtocol
from src.pm_transaction.infrastructure.persistence import TransactionRepository


def summarize(transactions: list[Transaction]) -> TransactionSummary:
    totals: dict[str, Decimal] = {t.value: ZERO for t in TransactionType}
    for t in transactions:
        totals[t.trans_type] += t.cost
    return TransactionSummary(
        total_deposits=totals[TransactionType.DEPOSIT.value],
        total_withdrawals=totals[TransactionType.WITHDRAW.value],
        total_buys=totals[TransactionType.BUY.value],
        total_sells=totals[TransactionType.SELL.value],
    )


class TransactionApplicationService:
    def __init__(self, repo: TransactionRepositoryProtocol | None = None) -> None:
        self._repo: TransactionRepositoryProtocol = repo or TransactionRepository()

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: int,
        account_id: int | None,
        trans_type: str | None,
        cursor: str | None,
        limit: int,
    ) -> TransactionListResponse:
        # type=None or 'all' → no filter
        sql_type = None
        if trans_type and trans_type.lower() != "all":
            sql_type = trans_type.upper()
            if sql_type not in {t.value for t in TransactionType}:
                raise ValidationError(f"unknown transaction type {trans_type}")

        # Fetch limit+1 to detect has_more without a COUNT(*) query
        rows = await self._repo.list_by_user(
            db, user_id, account_id, sql_type, cursor_decode(cursor), limit + 1
        )
        has_more = len(rows) > limit
        page = rows[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(t) for t in page],
            summary=summarize(page),
            next_cursor=next_cursor,
            has_more=has_more,
        )
