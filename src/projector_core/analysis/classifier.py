"""Asset classification and per-asset-class parameter selection."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from projector_core.config.schema import (
    DEFAULT_CRYPTO_SYMBOLS,
    AppConfig,
    BollingerParams,
    MACDParams,
    RSIParams,
    SMAParams,
    SupportResistanceParams,
    VolumeParams,
)
from projector_core.models import MIN_BARS, AssetClass

CRYPTO_SUFFIXES = ("-USD", ".X")


def classify(symbol: str, supported: Iterable[str] | None = None) -> AssetClass:
    """Return CRYPTO for allowlisted symbols or ``-USD`` / ``.X`` suffixes, else EQUITY."""
    normalized = symbol.strip().upper()
    allowlist = DEFAULT_CRYPTO_SYMBOLS if supported is None else supported
    if normalized in {s.upper() for s in allowlist}:
        return AssetClass.CRYPTO
    if normalized.endswith(CRYPTO_SUFFIXES):
        return AssetClass.CRYPTO
    return AssetClass.EQUITY


def select_params(asset_class: AssetClass, indicator: str, config: AppConfig) -> BaseModel:
    """Crypto override for *indicator* when one is configured, else the default set."""
    default = getattr(config.analysis, indicator)
    if asset_class is AssetClass.CRYPTO:
        override = getattr(config.crypto, indicator, None)
        if override is not None:
            return override
    return default


class AnalysisParams(BaseModel):
    """Parameters resolved once per symbol.

    The same instance is handed to the indicator engine and the signal
    generator, so both see the same RSI and Bollinger settings.
    """

    asset_class: AssetClass = AssetClass.EQUITY
    sma: SMAParams = SMAParams()
    rsi: RSIParams = RSIParams()
    macd: MACDParams = MACDParams()
    bollinger: BollingerParams = BollingerParams()
    support_resistance: SupportResistanceParams = SupportResistanceParams()
    volume: VolumeParams = VolumeParams()
    signal_threshold: int = 30
    min_bars: int = MIN_BARS

    @classmethod
    def defaults(cls, asset_class: AssetClass = AssetClass.EQUITY) -> AnalysisParams:
        """Parameters for *asset_class* under the built-in configuration."""
        return params_for(asset_class, AppConfig())


def resolve_params(symbol: str, config: AppConfig) -> AnalysisParams:
    """Classify *symbol* and build its parameter set from *config*."""
    return params_for(classify(symbol, config.crypto.supported_symbols), config)


def params_for(asset_class: AssetClass, config: AppConfig) -> AnalysisParams:
    analysis = config.analysis
    return AnalysisParams(
        asset_class=asset_class,
        sma=analysis.sma,
        rsi=select_params(asset_class, "rsi", config),
        macd=analysis.macd,
        bollinger=select_params(asset_class, "bollinger", config),
        support_resistance=analysis.support_resistance,
        volume=analysis.volume,
        signal_threshold=analysis.signal_threshold,
        min_bars=analysis.min_bars,
    )
