"""Weighted rule table for the technical signal generator.

Each rule is a (name, side, weight, reason, predicate) row; the generator
walks the table in order and never branches on individual rules. A predicate
that touches a missing indicator value does not match.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from projector_core.analysis.classifier import AnalysisParams
from projector_core.models import IndicatorSnapshot

Side = Literal["buy", "sell"]
Predicate = Callable[[IndicatorSnapshot, AnalysisParams], bool]

CROSS_BAND = Decimal("0.02")
LEVEL_BAND = Decimal("0.05")


@dataclass(frozen=True)
class Rule:
    name: str
    side: Side
    weight: int
    reason: str
    predicate: Predicate


@dataclass
class Scores:
    """Running buy/sell confidence and the reasons behind each side."""

    buy: int = 0
    sell: int = 0
    buy_reasons: list[str] = field(default_factory=list)
    sell_reasons: list[str] = field(default_factory=list)

    def add(self, side: Side, weight: int, reason: str) -> None:
        if side == "buy":
            self.buy += weight
            self.buy_reasons.append(reason)
        else:
            self.sell += weight
            self.sell_reasons.append(reason)

    def leader(self) -> Side | None:
        if self.buy > self.sell:
            return "buy"
        if self.sell > self.buy:
            return "sell"
        return None


def _just_above(value: Decimal | None, base: Decimal | None) -> bool:
    if value is None or base is None:
        return False
    return base < value < base * (1 + CROSS_BAND)


def _just_below(value: Decimal | None, base: Decimal | None) -> bool:
    if value is None or base is None:
        return False
    return base * (1 - CROSS_BAND) < value < base


def _rsi_oversold(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    return s.rsi is not None and s.rsi < Decimal(str(p.rsi.oversold))


def _rsi_overbought(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    return s.rsi is not None and s.rsi > Decimal(str(p.rsi.overbought))


def _macd_bullish(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    return s.macd is not None and s.macd.macd > s.macd.signal and s.macd.histogram > 0


def _macd_bearish(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    return s.macd is not None and s.macd.macd < s.macd.signal and s.macd.histogram < 0


def _near_support(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    if s.last_price is None or s.support_level is None:
        return False
    return s.last_price < s.support_level * (1 + LEVEL_BAND)


def _near_resistance(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    if s.last_price is None or s.resistance_level is None:
        return False
    return s.last_price > s.resistance_level * (1 - LEVEL_BAND)


def _below_lower_band(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    bb = s.bollinger_bands
    return bb is not None and s.last_price is not None and s.last_price < bb.lower


def _above_upper_band(s: IndicatorSnapshot, p: AnalysisParams) -> bool:
    bb = s.bollinger_bands
    return bb is not None and s.last_price is not None and s.last_price > bb.upper


RULES: tuple[Rule, ...] = (
    Rule("sma50_cross_up", "buy", 15, "Price crossed above 50-day SMA",
         lambda s, p: _just_above(s.last_price, s.sma.sma50)),
    Rule("sma50_cross_down", "sell", 15, "Price crossed below 50-day SMA",
         lambda s, p: _just_below(s.last_price, s.sma.sma50)),
    Rule("rsi_oversold", "buy", 20, "RSI indicates oversold condition", _rsi_oversold),
    Rule("rsi_overbought", "sell", 20, "RSI indicates overbought condition", _rsi_overbought),
    Rule("macd_bullish", "buy", 20, "MACD crossed above signal line", _macd_bullish),
    Rule("macd_bearish", "sell", 20, "MACD crossed below signal line", _macd_bearish),
    Rule("near_support", "buy", 15, "Price near support level", _near_support),
    Rule("near_resistance", "sell", 15, "Price near resistance level", _near_resistance),
    Rule("below_lower_band", "buy", 15, "Price below lower Bollinger Band", _below_lower_band),
    Rule("above_upper_band", "sell", 15, "Price above upper Bollinger Band", _above_upper_band),
    Rule("golden_cross", "buy", 25, "Golden Cross detected",
         lambda s, p: _just_above(s.sma.sma50, s.sma.sma200)),
    Rule("death_cross", "sell", 25, "Death Cross detected",
         lambda s, p: _just_below(s.sma.sma50, s.sma.sma200)),
)


def score_rules(
    snapshot: IndicatorSnapshot,
    params: AnalysisParams,
    rules: tuple[Rule, ...] = RULES,
) -> Scores:
    """Evaluate *rules* in order and accumulate the matching weights."""
    scores = Scores()
    for rule in rules:
        if rule.predicate(snapshot, params):
            scores.add(rule.side, rule.weight, rule.reason)
    return scores
