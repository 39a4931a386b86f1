"""SQLAlchemy ORM model for the positions table (DDL reference only — queries use raw SQL)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Numeric, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pm_common.database import Base


class PositionORM(Base):
    __tablename__ = "positions"
    __table_args__ = (UniqueConstraint("user_id", "asset_id", name="uq_positions_user_asset"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    asset_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("assets.id"), nullable=False
    )
    units: Mapped[Decimal] = mapped_column(Numeric(24, 8), nullable=False)
    avg_cost_per_unit: Mapped[Decimal] = mapped_column(Numeric(24, 8), nullable=False)
    investment_amount: Mapped[Decimal] = mapped_column(Numeric(24, 4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
