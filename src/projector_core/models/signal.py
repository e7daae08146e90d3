"""Signal models — opinions, the fused signal, and what the pipeline hands out."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from projector_core.models.indicators import IndicatorSnapshot
from projector_core.models.market import AssetClass

SignalKind = Literal["buy", "sell", "hold"]
FusedSource = Literal["technical", "ai", "ai+technical", "conflict"]

TECHNICAL_SOURCE = "technical"


def clamp_confidence(value: int | float | Decimal) -> int:
    """Round half-up to an integer and clamp into [0, 100]."""
    bounded = max(Decimal(0), min(Decimal(100), Decimal(str(value))))
    return int(bounded.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class SignalOpinion(BaseModel):
    """One independently produced buy/sell/hold opinion.

    ``source`` is "technical" for the rule-based generator, or the provider
    name for an LLM opinion. A provider failure yields the technical opinion
    again with ``error`` describing what went wrong.
    """

    model_config = ConfigDict(frozen=True)

    signal: SignalKind
    confidence: int = Field(ge=0, le=100)
    reasons: list[str] = Field(min_length=1)
    source: str = TECHNICAL_SOURCE
    error: str | None = None


class FusedSignal(BaseModel):
    """The single final signal of one analysis run."""

    model_config = ConfigDict(frozen=True)

    signal: SignalKind
    confidence: int = Field(ge=0, le=100)
    reasons: list[str] = Field(min_length=1)
    source: FusedSource

    @classmethod
    def from_opinion(cls, opinion: SignalOpinion) -> FusedSignal:
        """Wrap a technical-only opinion when there is nothing to fuse."""
        return cls(
            signal=opinion.signal,
            confidence=opinion.confidence,
            reasons=list(opinion.reasons),
            source="technical",
        )


class AnalysisResult(BaseModel):
    """Everything one analysis run produced for a symbol."""

    symbol: str
    asset_class: AssetClass
    current_price: Decimal
    snapshot: IndicatorSnapshot
    technical: SignalOpinion
    ai: SignalOpinion | None = None
    fused: FusedSignal
    ts: datetime
    company_name: str | None = None


class SignalEvent(BaseModel):
    """A buy or sell trigger handed to the notification collaborator."""

    symbol: str
    signal: Literal["buy", "sell"]
    price: Decimal
    reasons: list[str]
    ts: datetime


class HistoryEntry(BaseModel):
    """One persisted signal in a symbol's capped history."""

    signal: SignalKind
    confidence: int
    source: str
    price: Decimal
    ts: datetime
    reasons: list[str] = Field(default_factory=list)
