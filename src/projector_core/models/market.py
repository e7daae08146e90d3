"""Market data models — price bars and quotes."""

from __future__ import annotations

from collections.abc import Sequence
import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

MIN_BARS = 50


class AssetClass(str, Enum):
    EQUITY = "equity"
    CRYPTO = "crypto"


class PriceBar(BaseModel):
    """One daily (or weekly/monthly) OHLCV bar."""

    date: dt.date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = Decimal(0)


class Quote(BaseModel):
    """Latest quote metadata for a symbol."""

    symbol: str
    price: Decimal | None = None
    short_name: str | None = None
    long_name: str | None = None

    @property
    def display_name(self) -> str | None:
        return self.short_name or self.long_name


def validate_bars(bars: Sequence[PriceBar]) -> None:
    """Raise ValueError unless *bars* is strictly increasing by date."""
    for prev, cur in zip(bars, bars[1:]):
        if cur.date <= prev.date:
            raise ValueError(
                f"bars must be strictly increasing by date: {prev.date} then {cur.date}"
            )
