"""AI-enhanced signal — ask an LLM provider for a second opinion."""

from __future__ import annotations

from decimal import Decimal

import httpx
import structlog

from projector_core.ai.base import OpinionProvider
from projector_core.ai.prompt import format_prompt
from projector_core.ai.registry import build_provider
from projector_core.ai.response import parse_provider_response
from projector_core.config.schema import DEFAULT_PROMPT_TEMPLATE, AISettings
from projector_core.errors import ExternalOpinionError
from projector_core.models import IndicatorSnapshot, SignalOpinion
from projector_core.models.signal import TECHNICAL_SOURCE

import projector_core.ai.providers  # noqa: F401 — trigger @register_provider decorators

log = structlog.get_logger("ai_enhancer")


def _fallback(technical: SignalOpinion, error: str | None = None) -> SignalOpinion:
    return technical.model_copy(update={"source": TECHNICAL_SOURCE, "error": error})


async def get_enhanced_signal(
    symbol: str,
    current_price: Decimal | float | None,
    technical: SignalOpinion,
    snapshot: IndicatorSnapshot,
    settings: AISettings,
    provider: OpinionProvider | None = None,
) -> SignalOpinion:
    """Return the provider's opinion, or *technical* tagged "technical" if there is none.

    *settings* is the session's AI configuration; *provider* overrides the
    one it names (the caller then owns closing it). Never raises: every
    provider failure comes back as the technical opinion with ``error`` set.
    """
    if not settings.enabled:
        return _fallback(technical)

    owns_provider = provider is None
    try:
        if provider is None:
            provider = build_provider(settings.provider, settings)
    except ExternalOpinionError as exc:
        log.warning("ai_provider_unavailable", symbol=symbol, provider=settings.provider, error=str(exc))
        return _fallback(technical, str(exc))

    template = provider.config.prompt_template or DEFAULT_PROMPT_TEMPLATE
    prompt = format_prompt(template, symbol, current_price, technical, snapshot)

    try:
        payload = await provider.produce_opinion(prompt)
        opinion = parse_provider_response(payload, provider.name)
    except (ExternalOpinionError, httpx.HTTPError, ValueError) as exc:
        log.warning("ai_opinion_failed", symbol=symbol, provider=provider.name, error=str(exc))
        return _fallback(technical, str(exc) or type(exc).__name__)
    finally:
        if owns_provider:
            await provider.close()

    log.info(
        "ai_opinion",
        symbol=symbol,
        provider=provider.name,
        signal=opinion.signal,
        confidence=opinion.confidence,
    )
    return opinion
