"""Tests for technical/AI signal fusion."""

from __future__ import annotations

import random

from projector_core.analysis import fuse
from projector_core.analysis.fusion import CONFLICT_NOTE
from projector_core.models import FusedSignal, SignalOpinion
from projector_core.pipeline import fuse_opinions


def _technical(signal, confidence, reasons=("RSI indicates oversold condition",)):
    return SignalOpinion(signal=signal, confidence=confidence, reasons=list(reasons))


def _ai(signal, confidence, reasons=("Strong momentum",), source="openai"):
    return SignalOpinion(signal=signal, confidence=confidence, reasons=list(reasons), source=source)


class TestFuse:
    def test_equal_confidence_conflict_is_hold(self):
        fused = fuse(_technical("buy", 60), _ai("sell", 60))
        assert fused.signal == "hold"
        assert fused.confidence == 60
        assert fused.source == "conflict"
        assert fused.reasons == [CONFLICT_NOTE]

    def test_agreement_averages_confidence(self):
        fused = fuse(_technical("buy", 30), _ai("buy", 50))
        assert fused.signal == "buy"
        assert fused.confidence == 40
        assert fused.source == "ai+technical"
        assert fused.reasons[0] == "Both technical analysis and AI agree on BUY"
        assert fused.reasons[1:] == ["RSI indicates oversold condition", "Strong momentum"]

    def test_agreement_rounds_half_up(self):
        assert fuse(_technical("sell", 55), _ai("sell", 60)).confidence == 58

    def test_agreement_deduplicates_reasons(self):
        fused = fuse(
            _technical("buy", 50, ["Price near support level", "RSI indicates oversold condition"]),
            _ai("buy", 50, ["Price near support level", "Volume rising"]),
        )
        assert fused.reasons[1:] == [
            "Price near support level",
            "RSI indicates oversold condition",
            "Volume rising",
        ]

    def test_more_confident_ai_overrides(self):
        fused = fuse(_technical("buy", 40), _ai("sell", 70, ["Earnings risk"]))
        assert fused.signal == "sell"
        assert fused.confidence == 70
        assert fused.source == "ai"
        assert fused.reasons[0] == "AI signal (SELL, 70%) overrides technical signal (BUY)"
        assert fused.reasons[1:] == ["Earnings risk"]

    def test_more_confident_technical_overrides(self):
        fused = fuse(_technical("sell", 80), _ai("hold", 50))
        assert fused.signal == "sell"
        assert fused.confidence == 80
        assert fused.source == "technical"
        assert fused.reasons[0] == "Technical signal (SELL, 80%) overrides AI signal (HOLD)"

    def test_self_fusion_is_identity(self):
        opinion = _technical("hold", 73)
        fused = fuse(opinion, opinion)
        assert fused.signal == opinion.signal
        assert fused.confidence == opinion.confidence

    def test_deterministic(self):
        technical, ai = _technical("buy", 40), _ai("buy", 61)
        assert fuse(technical, ai).model_dump_json() == fuse(technical, ai).model_dump_json()

    def test_equal_forty_conflict(self):
        fused = fuse(_technical("buy", 40), _ai("sell", 40))
        assert (fused.signal, fused.source) == ("hold", "conflict")

    def test_swapping_roles_flips_only_the_label(self):
        forward = fuse(_technical("buy", 40), _ai("sell", 70))
        swapped = fuse(_technical("sell", 70), _ai("buy", 40))
        assert (forward.signal, forward.confidence) == (swapped.signal, swapped.confidence)
        assert (forward.source, swapped.source) == ("ai", "technical")

    def test_random_pairs_stay_in_bounds(self):
        rng = random.Random(7)
        for _ in range(300):
            t = _technical(rng.choice(["buy", "sell", "hold"]), rng.randint(0, 100))
            a = _ai(rng.choice(["buy", "sell", "hold"]), rng.randint(0, 100))
            fused = fuse(t, a)
            assert 0 <= fused.confidence <= 100
            assert fused.reasons
            if t.signal == a.signal:
                assert fused.signal == t.signal
            elif t.confidence == a.confidence:
                assert fused.signal == "hold"
            else:
                assert fused.signal == max(t, a, key=lambda o: o.confidence).signal


class TestFuseOpinions:
    def test_no_ai_opinion(self):
        technical = _technical("buy", 45)
        assert fuse_opinions(technical, None) == FusedSignal.from_opinion(technical)

    def test_fallback_opinion_is_not_fused(self):
        technical = _technical("buy", 45)
        fallback = technical.model_copy(update={"error": "openai API key is missing"})
        fused = fuse_opinions(technical, fallback)
        assert fused.source == "technical"
        assert fused.confidence == 45
        assert fused.reasons == technical.reasons

    def test_provider_opinion_is_fused(self):
        fused = fuse_opinions(_technical("buy", 30), _ai("buy", 50))
        assert fused.source == "ai+technical"
        assert fused.confidence == 40
