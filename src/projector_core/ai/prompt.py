"""Prompt construction for opinion providers."""

from __future__ import annotations

from decimal import Decimal

from projector_core.models import IndicatorSnapshot, SignalOpinion

NOT_AVAILABLE = "N/A"


def fmt_number(value: Decimal | float | int | None) -> str:
    """Two decimals, or "N/A" for a missing value."""
    if value is None:
        return NOT_AVAILABLE
    return f"{Decimal(str(value)):.2f}"


def prompt_fields(
    symbol: str,
    current_price: Decimal | float | None,
    technical: SignalOpinion,
    snapshot: IndicatorSnapshot,
) -> dict[str, str]:
    """Placeholder name -> substituted text."""
    macd = snapshot.macd
    bands = snapshot.bollinger_bands
    return {
        "symbol": symbol,
        "currentPrice": fmt_number(current_price),
        "technicalSignal": technical.signal,
        "technicalReasons": ", ".join(technical.reasons),
        "rsi": fmt_number(snapshot.rsi),
        "macdValue": fmt_number(macd.macd if macd else None),
        "macdSignal": fmt_number(macd.signal if macd else None),
        "macdHistogram": fmt_number(macd.histogram if macd else None),
        "sma20": fmt_number(snapshot.sma.sma20),
        "sma50": fmt_number(snapshot.sma.sma50),
        "sma200": fmt_number(snapshot.sma.sma200),
        "bbLower": fmt_number(bands.lower if bands else None),
        "bbMiddle": fmt_number(bands.middle if bands else None),
        "bbUpper": fmt_number(bands.upper if bands else None),
        "support": fmt_number(snapshot.support_level),
        "resistance": fmt_number(snapshot.resistance_level),
    }


def format_prompt(
    template: str,
    symbol: str,
    current_price: Decimal | float | None,
    technical: SignalOpinion,
    snapshot: IndicatorSnapshot,
) -> str:
    """Substitute ``{placeholder}`` tokens in *template*.

    Plain replacement rather than str.format, since templates carry a
    literal JSON example with braces.
    """
    prompt = template
    for key, value in prompt_fields(symbol, current_price, technical, snapshot).items():
        prompt = prompt.replace("{" + key + "}", value)
    return prompt
