"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from projector_core.models.market import MIN_BARS

DEFAULT_PROMPT_TEMPLATE = """
Analyze the following stock data and technical signals to provide an enhanced trading signal (buy, sell, or hold),
a confidence score (0-100), and a brief reasoning (max 3 bullet points).
Symbol: {symbol}
Current Price: {currentPrice}
Technical Signal: {technicalSignal}
Technical Reasons: {technicalReasons}
Indicators:
  RSI: {rsi}
  MACD: {macdValue} (Signal: {macdSignal}, Histogram: {macdHistogram})
  SMA20: {sma20}
  SMA50: {sma50}
  SMA200: {sma200}
  Bollinger Bands: Lower: {bbLower}, Middle: {bbMiddle}, Upper: {bbUpper}
  Support: {support}
  Resistance: {resistance}

Respond in JSON format: {"signal": "buy/sell/hold", "confidence": <number>, "reasons": ["reason1", "reason2"]}
"""

DEFAULT_CRYPTO_SYMBOLS = [
    "BTC-USD",
    "ETH-USD",
    "USDT-USD",
    "XRP-USD",
    "BNB-USD",
    "ADA-USD",
    "SOL-USD",
    "DOT-USD",
    "DOGE-USD",
    "SHIB-USD",
]


class SMAParams(BaseModel):
    short_period: int = 20
    medium_period: int = 50
    long_period: int = 200


class RSIParams(BaseModel):
    period: int = 14
    oversold: float = 30
    overbought: float = 70


class MACDParams(BaseModel):
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9


class BollingerParams(BaseModel):
    period: int = 20
    std_dev: float = 2.0


class SupportResistanceParams(BaseModel):
    lookback: int = 30


class VolumeParams(BaseModel):
    period: int = 20
    high_ratio: float = 1.5
    low_ratio: float = 0.7


class AnalysisConfig(BaseModel):
    sma: SMAParams = Field(default_factory=SMAParams)
    rsi: RSIParams = Field(default_factory=RSIParams)
    macd: MACDParams = Field(default_factory=MACDParams)
    bollinger: BollingerParams = Field(default_factory=BollingerParams)
    support_resistance: SupportResistanceParams = Field(default_factory=SupportResistanceParams)
    volume: VolumeParams = Field(default_factory=VolumeParams)
    signal_threshold: int = 30
    min_bars: int = MIN_BARS


class CryptoConfig(BaseModel):
    """Symbols treated as crypto, plus the per-indicator overrides they get."""

    supported_symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_CRYPTO_SYMBOLS))
    rsi: RSIParams | None = Field(
        default_factory=lambda: RSIParams(period=14, oversold=25, overbought=75)
    )
    bollinger: BollingerParams | None = Field(
        default_factory=lambda: BollingerParams(period=20, std_dev=2.5)
    )


class ProviderConfig(BaseModel):
    api_key: str | None = None
    model: str
    base_url: str
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE
    max_tokens: int = 1024


def _default_providers() -> dict[str, ProviderConfig]:
    return {
        "openai": ProviderConfig(model="gpt-3.5-turbo", base_url="https://api.openai.com/v1"),
        "claude": ProviderConfig(model="claude-3-opus-20240229", base_url="https://api.anthropic.com/v1"),
        "deepseek": ProviderConfig(model="deepseek-coder", base_url="https://api.deepseek.com"),
    }


class AISettings(BaseModel):
    enabled: bool = False
    provider: str = "openai"
    timeout_s: float = 30.0
    providers: dict[str, ProviderConfig] = Field(default_factory=_default_providers)

    @field_validator("providers", mode="before")
    @classmethod
    def _merge_with_defaults(cls, value: object) -> object:
        """Let a config file override single provider fields without restating the rest."""
        if not isinstance(value, dict):
            return value
        merged: dict[str, dict] = {
            name: cfg.model_dump() for name, cfg in _default_providers().items()
        }
        for name, override in value.items():
            if isinstance(override, ProviderConfig):
                override = override.model_dump(exclude_unset=True)
            merged.setdefault(name, {}).update(override or {})
        return merged


class MarketDataConfig(BaseModel):
    base_url: str = "https://query1.finance.yahoo.com"
    interval: str = "1d"
    range: str = "2y"
    timeout_s: float = 15.0


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///data/projector.db"


class EmailConfig(BaseModel):
    user: str | None = None
    password: str | None = None
    notification_email: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465


class ScheduleConfig(BaseModel):
    interval_minutes: int = 1440


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"


class AppConfig(BaseModel):
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    crypto: CryptoConfig = Field(default_factory=CryptoConfig)
    ai: AISettings = Field(default_factory=AISettings)
    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
