"""Pydantic domain models."""

from projector_core.models.indicators import (
    BollingerValue,
    IndicatorSnapshot,
    MACDValue,
    SMAValues,
)
from projector_core.models.market import MIN_BARS, AssetClass, PriceBar, Quote, validate_bars
from projector_core.models.signal import (
    AnalysisResult,
    FusedSignal,
    HistoryEntry,
    SignalEvent,
    SignalOpinion,
    clamp_confidence,
)

__all__ = [
    "AnalysisResult",
    "AssetClass",
    "BollingerValue",
    "FusedSignal",
    "HistoryEntry",
    "IndicatorSnapshot",
    "MACDValue",
    "MIN_BARS",
    "PriceBar",
    "Quote",
    "SMAValues",
    "SignalEvent",
    "SignalOpinion",
    "clamp_confidence",
    "validate_bars",
]
