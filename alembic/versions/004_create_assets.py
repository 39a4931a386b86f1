"""004: create assets table

Revision ID: 004
Revises: 003
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE assets (
            id           BIGSERIAL    PRIMARY KEY,
            ticker       VARCHAR(10)  NOT NULL,
            name         VARCHAR(200) NOT NULL,
            asset_class  VARCHAR(100) NOT NULL,
            CONSTRAINT uq_assets_ticker       UNIQUE (ticker),
            CONSTRAINT ck_assets_ticker_upper CHECK (ticker = UPPER(ticker))
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS assets CASCADE;")
