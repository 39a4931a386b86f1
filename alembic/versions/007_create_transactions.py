"""007: create transactions table

Revision ID: 007
Revises: 006
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id              BIGSERIAL      PRIMARY KEY,
            user_id         BIGINT         NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            account_id      BIGINT         NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            asset_id        BIGINT         REFERENCES assets(id),
            order_id        BIGINT,
            trans_type      VARCHAR(10)    NOT NULL,
            units           NUMERIC(24, 8),
            price_per_unit  NUMERIC(24, 4),
            cost            NUMERIC(24, 4) NOT NULL,
            description     VARCHAR(500),
            date            TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type CHECK (trans_type IN ('BUY', 'SELL', 'DEPOSIT', 'WITHDRAW')),
            CONSTRAINT ck_transactions_cost_gt_0 CHECK (cost > 0),
            CONSTRAINT ck_transactions_trade_fields CHECK (
                (trans_type IN ('BUY', 'SELL')
                    AND asset_id IS NOT NULL AND order_id IS NOT NULL
                    AND units IS NOT NULL AND price_per_unit IS NOT NULL)
                OR (trans_type IN ('DEPOSIT', 'WITHDRAW')
                    AND asset_id IS NULL AND order_id IS NULL
                    AND units IS NULL AND price_per_unit IS NULL)
            )
        );
    """)
    # One settlement row per order
    op.execute("""
        CREATE UNIQUE INDEX uq_transactions_order_id
            ON transactions (order_id) WHERE order_id IS NOT NULL;
    """)
    op.execute("CREATE INDEX idx_transactions_user_id_desc ON transactions (user_id, id DESC);")
    op.execute("COMMENT ON TABLE transactions IS 'Append-only transaction log; never updated';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
