"""008: seed asset catalog

Revision ID: 008
Revises: 007
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO assets (ticker, name, asset_class) VALUES
            ('AAPL', 'Apple Inc.', 'Stock'),
            ('MSFT', 'Microsoft Corporation', 'Stock'),
            ('GOOGL', 'Alphabet Inc. Class A', 'Stock'),
            ('AMZN', 'Amazon.com Inc.', 'Stock'),
            ('TSLA', 'Tesla Inc.', 'Stock'),
            ('SPY', 'SPDR S&P 500 ETF Trust', 'ETF'),
            ('QQQ', 'Invesco QQQ Trust', 'ETF'),
            ('BND', 'Vanguard Total Bond Market ETF', 'Bond'),
            ('CASH', 'Cash', 'Cash');
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM assets
        WHERE ticker IN ('AAPL', 'MSFT', 'GOOGL', 'AMZN', 'TSLA', 'SPY', 'QQQ', 'BND', 'CASH');
    """)
