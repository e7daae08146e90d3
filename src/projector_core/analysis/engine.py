"""Indicator engine — turns a bar series into an IndicatorSnapshot."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from projector_core.analysis import indicators as ind
from projector_core.analysis.classifier import AnalysisParams, resolve_params
from projector_core.config.schema import AppConfig
from projector_core.errors import InsufficientDataError
from projector_core.models import (
    BollingerValue,
    IndicatorSnapshot,
    MACDValue,
    PriceBar,
    SMAValues,
)

log = structlog.get_logger("indicator_engine")


def _last(series: list) -> object | None:
    return series[-1] if series else None


def _derive(bars: Sequence[PriceBar], symbol: str, params: AnalysisParams) -> IndicatorSnapshot:
    if len(bars) < params.min_bars:
        raise InsufficientDataError(f"{len(bars)} bars, {params.min_bars} required")

    closes = [b.close for b in bars]
    volumes = [b.volume for b in bars]

    rsi_value = ind.rsi(closes, period=params.rsi.period)
    macd_value = ind.macd(
        closes,
        fast_period=params.macd.fast_period,
        slow_period=params.macd.slow_period,
        signal_period=params.macd.signal_period,
    )
    bands = ind.bollinger_bands(
        closes,
        period=params.bollinger.period,
        num_std=params.bollinger.std_dev,
    )
    levels = ind.support_resistance(closes, lookback=params.support_resistance.lookback)

    missing = [
        name
        for name, value in (("rsi", rsi_value), ("macd", macd_value), ("bollinger", bands), ("levels", levels))
        if value is None
    ]
    if missing:
        raise InsufficientDataError(f"no final value for {', '.join(missing)}")

    avg_volume, current_volume = ind.volume_stats(volumes, period=params.volume.period)
    lower, middle, upper = bands
    support, resistance = levels

    return IndicatorSnapshot(
        symbol=symbol,
        asset_class=params.asset_class,
        last_price=closes[-1],
        sma=SMAValues(
            sma20=_last(ind.sma(closes, params.sma.short_period)),
            sma50=_last(ind.sma(closes, params.sma.medium_period)),
            sma200=_last(ind.sma(closes, params.sma.long_period)),
        ),
        rsi=rsi_value,
        macd=MACDValue(macd=macd_value[0], signal=macd_value[1], histogram=macd_value[2]),
        bollinger_bands=BollingerValue(lower=lower, middle=middle, upper=upper),
        support_level=support,
        resistance_level=resistance,
        avg_volume_20=avg_volume,
        current_volume=current_volume,
    )


def compute_indicators(
    bars: Sequence[PriceBar],
    symbol: str,
    params: AnalysisParams | None = None,
) -> IndicatorSnapshot:
    """Compute the last value of every indicator for *bars* (oldest first).

    Never raises on short input: fewer than ``params.min_bars`` bars, or an
    indicator that cannot produce a final value, yields a snapshot with
    ``error`` set. SMA200 is simply None when history is shorter than 200.
    """
    params = params or resolve_params(symbol, AppConfig())
    try:
        return _derive(bars, symbol, params)
    except InsufficientDataError as exc:
        log.info("insufficient_data", symbol=symbol, bars=len(bars), detail=str(exc))
        return IndicatorSnapshot.insufficient(symbol, params.asset_class)
