"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

All balance-mutating operations use atomic PostgreSQL UPDATE ... RETURNING.
A result of 0 rows means the account is missing or a business constraint was
violated (insufficient funds); the caller distinguishes the two.

Transaction ownership: The CALLER (application service) is responsible for
starting and committing the transaction via `async with db.begin()`.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_account.domain.models import Account
from src.pm_common.errors import InternalError

_COLUMNS = """
    id, user_id, account_name, account_type, cash_balance,
    is_default, version, created_at, updated_at
"""

_INSERT_ACCOUNT_SQL = text(f"""
    INSERT INTO accounts (user_id, account_name, account_type, cash_balance, is_default)
    VALUES (
        :user_id, :account_name, :account_type, 0,
        CAST(:is_default AS BOOLEAN)
            OR NOT EXISTS (SELECT 1 FROM accounts WHERE user_id = :user_id)
    )
    RETURNING {_COLUMNS}
""")

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM accounts
    WHERE id = :account_id
""")

_GET_ACCOUNT_FOR_UPDATE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM accounts
    WHERE id = :account_id
    FOR UPDATE
""")

_LIST_ACCOUNTS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM accounts
    WHERE user_id = :user_id
    ORDER BY is_default DESC, id ASC
""")

_CREDIT_SQL = text(f"""
    UPDATE accounts
    SET cash_balance = cash_balance + :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :account_id
    RETURNING {_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE accounts
    SET cash_balance = cash_balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :account_id AND cash_balance >= :amount
    RETURNING {_COLUMNS}
""")


def _row_to_account(row: object) -> Account:
    return Account(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        account_name=row.account_name,  # type: ignore[attr-defined]
        account_type=row.account_type,  # type: ignore[attr-defined]
        cash_balance=Decimal(row.cash_balance),  # type: ignore[attr-defined]
        is_default=row.is_default,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def create_account(
        self,
        db: AsyncSession,
        user_id: int,
        account_name: str,
        account_type: str,
        is_default: bool = False,
    ) -> Account:
        result = await db.execute(
            _INSERT_ACCOUNT_SQL,
            {
                "user_id": user_id,
                "account_name": account_name,
                "account_type": account_type,
                "is_default": is_default,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Account insert returned no rows — this should never happen")
        return _row_to_account(row)

    async def get_account(self, db: AsyncSession, account_id: int) -> Account | None:
        result = await db.execute(_GET_ACCOUNT_SQL, {"account_id": account_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def get_account_for_update(
        self, db: AsyncSession, account_id: int
    ) -> Account | None:
        result = await db.execute(_GET_ACCOUNT_FOR_UPDATE_SQL, {"account_id": account_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def list_accounts(self, db: AsyncSession, user_id: int) -> list[Account]:
        result = await db.execute(_LIST_ACCOUNTS_SQL, {"user_id": user_id})
        return [_row_to_account(row) for row in result.fetchall()]

    async def credit(
        self, db: AsyncSession, account_id: int, amount: Decimal
    ) -> Account | None:
        result = await db.execute(_CREDIT_SQL, {"account_id": account_id, "amount": amount})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def debit(
        self, db: AsyncSession, account_id: int, amount: Decimal
    ) -> Account | None:
        result = await db.execute(_DEBIT_SQL, {"account_id": account_id, "amount": amount})
        row = result.fetchone()
        return _row_to_account(row) if row else None
