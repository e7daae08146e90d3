"""Technical indicators — pure functions on price series.

Every function takes the full oldest-first series and works in Decimal so
the same bars and parameters always give the same values.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

ZERO = Decimal(0)


def _mean(values: Sequence[Decimal]) -> Decimal:
    return sum(values, ZERO) / len(values)


def sma(values: Sequence[Decimal], period: int) -> list[Decimal]:
    """Simple moving average series.

    Element ``i`` is the mean of ``values[i : i + period]``; the series is
    empty when there are fewer than *period* values.
    """
    if period <= 0 or len(values) < period:
        return []
    window_sum = sum(values[:period], ZERO)
    out = [window_sum / period]
    for i in range(period, len(values)):
        window_sum += values[i] - values[i - period]
        out.append(window_sum / period)
    return out


def ema(values: Sequence[Decimal], period: int) -> list[Decimal]:
    """Exponential moving average series, seeded with the SMA of the first *period* values.

    Multiplier is ``2 / (period + 1)``. Output is aligned like :func:`sma`:
    its first element corresponds to ``values[period - 1]``.
    """
    if period <= 0 or len(values) < period:
        return []
    k = Decimal(2) / (period + 1)
    current = _mean(values[:period])
    out = [current]
    for price in values[period:]:
        current = (price - current) * k + current
        out.append(current)
    return out


def rsi(closes: Sequence[Decimal], period: int = 14) -> Decimal | None:
    """Relative Strength Index (Wilder's smoothing).

    Returns a Decimal in [0, 100] or None if there are fewer than
    ``period + 1`` data points.
    """
    if len(closes) < period + 1:
        return None

    deltas = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    # Seed with simple average of first *period* changes
    avg_gain = _mean([d if d > 0 else ZERO for d in deltas[:period]])
    avg_loss = _mean([-d if d < 0 else ZERO for d in deltas[:period]])

    for d in deltas[period:]:
        avg_gain = (avg_gain * (period - 1) + (d if d > 0 else ZERO)) / period
        avg_loss = (avg_loss * (period - 1) + (-d if d < 0 else ZERO)) / period

    if avg_loss == 0:
        return Decimal(100)
    rs = avg_gain / avg_loss
    return Decimal(100) - Decimal(100) / (1 + rs)


def macd(
    closes: Sequence[Decimal],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[Decimal, Decimal, Decimal] | None:
    """Last MACD triple ``(macd, signal, histogram)``.

    MACD is fast EMA minus slow EMA, taken from the first bar where the slow
    EMA exists; the signal line is the EMA of that MACD series. Returns None
    when the series is too short for a signal value
    (``slow_period + signal_period - 1`` closes).
    """
    fast = ema(closes, fast_period)
    slow = ema(closes, slow_period)
    if not slow:
        return None

    # Both series end on the last close; trim fast to slow's start.
    offset = len(fast) - len(slow)
    macd_line = [f - s for f, s in zip(fast[offset:], slow)]
    signal_line = ema(macd_line, signal_period)
    if not signal_line:
        return None

    last_macd = macd_line[-1]
    last_signal = signal_line[-1]
    return (last_macd, last_signal, last_macd - last_signal)


def bollinger_bands(
    closes: Sequence[Decimal],
    period: int = 20,
    num_std: int | float | Decimal = 2,
) -> tuple[Decimal, Decimal, Decimal] | None:
    """Bollinger Bands (SMA +/- num_std * population stdev).

    Returns ``(lower, middle, upper)`` or None if fewer than *period* data
    points are available.
    """
    if len(closes) < period:
        return None

    window = closes[-period:]
    middle = _mean(window)
    variance = sum(((p - middle) ** 2 for p in window), ZERO) / period
    offset = variance.sqrt() * Decimal(str(num_std))
    return (middle - offset, middle, middle + offset)


def support_resistance(
    closes: Sequence[Decimal],
    lookback: int = 30,
) -> tuple[Decimal, Decimal] | None:
    """Min and max close over the trailing *lookback* bars, or None for no data."""
    recent = closes[-lookback:]
    if not recent:
        return None
    return (min(recent), max(recent))


def volume_stats(
    volumes: Sequence[Decimal],
    period: int = 20,
) -> tuple[Decimal, Decimal]:
    """``(average of trailing period volume, latest volume)``.

    Both are zero for an empty series, so callers never divide by zero.
    """
    if not volumes:
        return (ZERO, ZERO)
    window = volumes[-period:]
    return (_mean(window), volumes[-1])
