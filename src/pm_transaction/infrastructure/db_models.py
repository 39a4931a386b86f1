"""SQLAlchemy ORM model for the transactions table (DDL reference only — queries use raw SQL)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pm_common.database import Base


class TransactionORM(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    account_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    asset_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("assets.id"), nullable=True
    )
    order_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    trans_type: Mapped[str] = mapped_column(String(10), nullable=False)
    units: Mapped[Decimal | None] = mapped_column(Numeric(24, 8), nullable=True)
    price_per_unit: Mapped[Decimal | None] = mapped_column(Numeric(24, 4), nullable=True)
    cost: Mapped[Decimal] = mapped_column(Numeric(24, 4), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    # NOTE: No updated_at, transactions is append-only
