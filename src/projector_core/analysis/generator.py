"""Rule-based technical signal generator."""

from __future__ import annotations

from decimal import Decimal

from projector_core.analysis.classifier import AnalysisParams
from projector_core.analysis.rules import RULES, Rule, Scores, score_rules
from projector_core.models import IndicatorSnapshot, SignalOpinion, clamp_confidence

INSUFFICIENT_DATA_REASON = "Insufficient data"
NO_SIGNAL_REASON = "No strong buy or sell signals detected"
HIGH_VOLUME_REASON = "High volume confirms {side} pressure ({ratio}x 20-day average)"
LOW_VOLUME_REASON = "Low volume reduces {side} confidence ({ratio}x 20-day average)"

HIGH_VOLUME_BOOST = 10
HIGH_VOLUME_TIE_BOOST = 5
LOW_VOLUME_CUT = 5
LOW_VOLUME_TIE_CUT = 2


def apply_volume_adjustment(
    scores: Scores,
    snapshot: IndicatorSnapshot,
    params: AnalysisParams,
) -> Scores:
    """Boost or cut the leading side based on the latest bar's volume.

    Skipped when there is no volume history or neither side has any score.
    A tie moves both sides by the smaller amount. Scores never go below 0.
    """
    avg = snapshot.avg_volume_20
    if avg <= 0 or max(scores.buy, scores.sell) == 0:
        return scores

    ratio = snapshot.current_volume / avg
    ratio_text = f"{ratio:.1f}"
    leader = scores.leader()

    if ratio > Decimal(str(params.volume.high_ratio)):
        sides = [leader] if leader else ["buy", "sell"]
        delta = HIGH_VOLUME_BOOST if leader else HIGH_VOLUME_TIE_BOOST
        template = HIGH_VOLUME_REASON
    elif ratio < Decimal(str(params.volume.low_ratio)):
        sides = [leader] if leader else ["buy", "sell"]
        delta = -(LOW_VOLUME_CUT if leader else LOW_VOLUME_TIE_CUT)
        template = LOW_VOLUME_REASON
    else:
        return scores

    for side in sides:
        reason = template.format(side=side, ratio=ratio_text)
        if side == "buy":
            scores.buy = max(0, scores.buy + delta)
            scores.buy_reasons.append(reason)
        else:
            scores.sell = max(0, scores.sell + delta)
            scores.sell_reasons.append(reason)
    return scores


def decide(scores: Scores, threshold: int) -> SignalOpinion:
    """Pick buy/sell when one side strictly leads and clears *threshold*, else hold."""
    if scores.buy > scores.sell and scores.buy >= threshold:
        return SignalOpinion(
            signal="buy",
            confidence=clamp_confidence(scores.buy),
            reasons=list(scores.buy_reasons),
        )
    if scores.sell > scores.buy and scores.sell >= threshold:
        return SignalOpinion(
            signal="sell",
            confidence=clamp_confidence(scores.sell),
            reasons=list(scores.sell_reasons),
        )
    return SignalOpinion(
        signal="hold",
        confidence=clamp_confidence(100 - max(scores.buy, scores.sell)),
        reasons=[NO_SIGNAL_REASON],
    )


def generate_signal(
    snapshot: IndicatorSnapshot,
    params: AnalysisParams | None = None,
    rules: tuple[Rule, ...] = RULES,
) -> SignalOpinion:
    """Score *snapshot* into a technical buy/sell/hold opinion.

    *params* must be the same set the snapshot was computed with; an errored
    snapshot short-circuits to hold with confidence 0.
    """
    if not snapshot.ok:
        return SignalOpinion(signal="hold", confidence=0, reasons=[INSUFFICIENT_DATA_REASON])

    params = params or AnalysisParams.defaults(snapshot.asset_class)
    scores = score_rules(snapshot, params, rules)
    scores = apply_volume_adjustment(scores, snapshot, params)
    return decide(scores, params.signal_threshold)
