"""Signal fusion — merge the technical opinion with an AI opinion."""

from __future__ import annotations

from decimal import Decimal

from projector_core.models import FusedSignal, SignalOpinion, clamp_confidence

AGREE_NOTE = "Both technical analysis and AI agree on {signal}"
OVERRIDE_NOTE = "{winner} signal ({signal}, {confidence}%) overrides {loser} signal ({other})"
CONFLICT_NOTE = "Technical and AI signals conflict with equal confidence, defaulting to HOLD"


def fuse(technical: SignalOpinion, ai: SignalOpinion) -> FusedSignal:
    """Merge two opinions into the final signal.

    - Same signal: average confidence (half-up), union of reasons,
      source "ai+technical".
    - Different signals: the strictly more confident opinion wins,
      source "ai" or "technical".
    - Different signals with equal confidence: hold, source "conflict".
    """
    if ai.signal == technical.signal:
        average = Decimal(technical.confidence + ai.confidence) / 2
        reasons = [AGREE_NOTE.format(signal=ai.signal.upper())]
        reasons.extend(dict.fromkeys([*technical.reasons, *ai.reasons]))
        return FusedSignal(
            signal=ai.signal,
            confidence=clamp_confidence(average),
            reasons=reasons,
            source="ai+technical",
        )

    if ai.confidence != technical.confidence:
        ai_wins = ai.confidence > technical.confidence
        winner, loser = (ai, technical) if ai_wins else (technical, ai)
        note = OVERRIDE_NOTE.format(
            winner="AI" if ai_wins else "Technical",
            loser="technical" if ai_wins else "AI",
            signal=winner.signal.upper(),
            confidence=winner.confidence,
            other=loser.signal.upper(),
        )
        return FusedSignal(
            signal=winner.signal,
            confidence=winner.confidence,
            reasons=[note, *winner.reasons],
            source="ai" if ai_wins else "technical",
        )

    return FusedSignal(
        signal="hold",
        confidence=technical.confidence,
        reasons=[CONFLICT_NOTE],
        source="conflict",
    )
