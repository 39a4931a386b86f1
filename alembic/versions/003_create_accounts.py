"""003: create accounts table

Revision ID: 003
Revises: 002
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE accounts (
            id            BIGSERIAL      PRIMARY KEY,
            user_id       BIGINT         NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            account_name  VARCHAR(100)   NOT NULL,
            account_type  VARCHAR(20)    NOT NULL,
            cash_balance  NUMERIC(24, 4) NOT NULL DEFAULT 0,
            is_default    BOOLEAN        NOT NULL DEFAULT FALSE,
            version       BIGINT         NOT NULL DEFAULT 0,
            created_at    TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at    TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_accounts_cash_gte_0 CHECK (cash_balance >= 0),
            CONSTRAINT ck_accounts_type CHECK (account_type IN ('checking', 'savings', 'brokerage'))
        );
    """)
    op.execute("CREATE INDEX idx_accounts_user ON accounts (user_id);")
    op.execute("""
        CREATE TRIGGER trg_accounts_updated_at
            BEFORE UPDATE ON accounts
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE accounts IS 'Cash accounts; amounts in dollars at 4 decimal places';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS accounts CASCADE;")
