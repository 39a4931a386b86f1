"""005: create orders table

Revision ID: 005
Revises: 004
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE orders (
            id                   BIGSERIAL      PRIMARY KEY,
            user_id              BIGINT         NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            account_id           BIGINT         NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            asset_id             BIGINT         NOT NULL REFERENCES assets(id),
            symbol               VARCHAR(16)    NOT NULL,
            description          TEXT,
            buy_sell             VARCHAR(4)     NOT NULL,
            order_type           VARCHAR(16)    NOT NULL,
            qty                  NUMERIC(24, 8) NOT NULL,
            unit_price           NUMERIC(24, 4) NOT NULL,
            limit_price          NUMERIC(24, 4),
            amount               NUMERIC(24, 4) NOT NULL,
            order_status         VARCHAR(20)    NOT NULL DEFAULT 'Placed',
            confirmation_status  VARCHAR(32)    NOT NULL DEFAULT 'pending_confirmation',
            order_date           TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            settlement_date      DATE           NOT NULL,
            created_at           TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at           TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_orders_buy_sell   CHECK (buy_sell IN ('Buy', 'Sell')),
            CONSTRAINT ck_orders_order_type CHECK (order_type IN ('Market Open', 'Limit')),
            CONSTRAINT ck_orders_qty_gt_0   CHECK (qty > 0),
            CONSTRAINT ck_orders_price_gt_0 CHECK (unit_price > 0),
            CONSTRAINT ck_orders_limit_gt_0 CHECK (limit_price IS NULL OR limit_price > 0),
            CONSTRAINT ck_orders_limit_only_on_limit
                CHECK (limit_price IS NULL OR order_type = 'Limit'),
            CONSTRAINT ck_orders_state CHECK (
                (order_status IN ('Placed', 'Under Review', 'Cancelled')
                    AND confirmation_status = 'pending_confirmation')
                OR (order_status = 'Cancelled' AND confirmation_status = 'rejected')
                OR (order_status = 'Executed' AND confirmation_status = 'confirmed')
            )
        );
    """)
    op.execute("CREATE INDEX idx_orders_user_id_desc ON orders (user_id, id DESC);")
    op.execute("""
        CREATE TRIGGER trg_orders_updated_at
            BEFORE UPDATE ON orders
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders CASCADE;")
