"""SQLAlchemy ORM model for per-symbol signal history."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from projector_core.db.base import Base


class SignalHistoryRow(Base):
    __tablename__ = "signal_history"
    __table_args__ = (Index("ix_signal_history_symbol_ts", "symbol", "ts"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    ts: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    signal: Mapped[str] = mapped_column(Text, nullable=False)
    confidence: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    reasons: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    indicators: Mapped[dict | None] = mapped_column(JSON, nullable=True)
