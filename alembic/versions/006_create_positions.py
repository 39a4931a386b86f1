"""006: create positions table

Revision ID: 006
Revises: 005
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE positions (
            id                 BIGSERIAL      PRIMARY KEY,
            user_id            BIGINT         NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            asset_id           BIGINT         NOT NULL REFERENCES assets(id),
            units              NUMERIC(24, 8) NOT NULL,
            avg_cost_per_unit  NUMERIC(24, 8) NOT NULL,
            investment_amount  NUMERIC(24, 4) NOT NULL,
            created_at         TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at         TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_positions_user_asset     UNIQUE (user_id, asset_id),
            CONSTRAINT ck_positions_units_gt_0     CHECK (units > 0),
            CONSTRAINT ck_positions_avg_gte_0      CHECK (avg_cost_per_unit >= 0),
            CONSTRAINT ck_positions_investment_gte_0 CHECK (investment_amount >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_positions_updated_at
            BEFORE UPDATE ON positions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS positions CASCADE;")
