"""
SQLAlchemy ORM models (movements + recurring rules)
"""
from decimal import Decimal
from datetime import date as date_type, datetime
from sqlalchemy import String, Integer, Text, TIMESTAMP, Date, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column

from neobudget.infrastructure.db.session import Base


class MovementModel(Base):
    """
    Real (user-entered) transaction
    """
    __tablename__ = "movements"

    movement_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    type: Mapped[str] = mapped_column(String(16), nullable=False)  # income | expense
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    account_type: Mapped[str] = mapped_column(String(16), nullable=False, server_default="liquid")
    note: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    # insertion order (import order, then creation order)
    position: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class RecurringRuleModel(Base):
    """
    Recurring income/expense rule (expanded into virtual transactions on read)
    """
    __tablename__ = "recurring_rules"

    rule_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    type: Mapped[str] = mapped_column(String(16), nullable=False)  # income | expense
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    account_type: Mapped[str] = mapped_column(String(16), nullable=False, server_default="liquid")
    category: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")

    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    # daily/everyXDays/weekly/weeklySpecific/everyXMonths/monthly/yearly
    mode: Mapped[str] = mapped_column(String(32), nullable=False, server_default="monthly")
    interval: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")
    days_of_week: Mapped[str] = mapped_column(String(32), nullable=False, server_default="")  # "1,3,5" (Mon=1)
    position: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
