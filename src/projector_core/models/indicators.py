"""Indicator snapshot — the frozen set of last values computed for one symbol."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from projector_core.models.market import AssetClass

INSUFFICIENT_DATA = "Insufficient data for analysis"


class SMAValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    sma20: Decimal | None = None
    sma50: Decimal | None = None
    sma200: Decimal | None = None


class MACDValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    macd: Decimal
    signal: Decimal
    histogram: Decimal


class BollingerValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    lower: Decimal
    middle: Decimal
    upper: Decimal


class IndicatorSnapshot(BaseModel):
    """Last value of every indicator for one symbol's bar series.

    When ``error`` is set the series was too short and every indicator
    field is None; such a snapshot must never be scored.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    asset_class: AssetClass = AssetClass.EQUITY
    last_price: Decimal | None = None
    sma: SMAValues = SMAValues()
    rsi: Decimal | None = None
    macd: MACDValue | None = None
    bollinger_bands: BollingerValue | None = None
    support_level: Decimal | None = None
    resistance_level: Decimal | None = None
    avg_volume_20: Decimal = Decimal(0)
    current_volume: Decimal = Decimal(0)
    error: str | None = None

    @classmethod
    def insufficient(
        cls,
        symbol: str,
        asset_class: AssetClass = AssetClass.EQUITY,
        error: str = INSUFFICIENT_DATA,
    ) -> IndicatorSnapshot:
        return cls(symbol=symbol, asset_class=asset_class, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
