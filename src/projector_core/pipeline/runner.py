"""Analysis pipeline — fetch, score, fuse, persist, notify.

One symbol flows linearly through::

    fetch bars → classify → indicators → technical opinion
        → (optional) AI opinion → fuse → persist / notify

Batches run symbols one after another; a failing symbol is logged and
skipped, never aborting the rest.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Protocol

import structlog
from sqlalchemy.orm import Session

from projector_core.ai import OpinionProvider, get_enhanced_signal
from projector_core.analysis import compute_indicators, fuse, generate_signal, resolve_params
from projector_core.config.schema import AISettings, AppConfig
from projector_core.db.engine import get_session
from projector_core.errors import PersistenceError
from projector_core.market import format_symbol
from projector_core.models import (
    AnalysisResult,
    FusedSignal,
    PriceBar,
    Quote,
    SignalEvent,
    SignalOpinion,
    validate_bars,
)
from projector_core.notify import Notifier
from projector_core.store import load_watchlist, normalize_symbol, save_signal_history

log = structlog.get_logger("pipeline")


class MarketDataSource(Protocol):
    async def fetch_bars(self, symbol: str, interval: str = ..., range_: str = ...) -> list[PriceBar] | None: ...

    async def fetch_quote(self, symbol: str) -> Quote | None: ...


def session_ai_settings(
    config: AppConfig,
    provider: str | None = None,
    enabled: bool | None = None,
) -> AISettings:
    """AI settings for one CLI session, with per-run overrides applied.

    Returns a copy; the loaded config is never mutated.
    """
    update: dict = {}
    if provider is not None:
        update["provider"] = provider
    if enabled is not None:
        update["enabled"] = enabled
    return config.ai.model_copy(update=update)


def fuse_opinions(technical: SignalOpinion, ai: SignalOpinion | None) -> FusedSignal:
    """Fuse only when the adapter produced a real provider opinion."""
    if ai is None or ai.source == technical.source:
        return FusedSignal.from_opinion(technical)
    return fuse(technical, ai)


def signal_event(result: AnalysisResult) -> SignalEvent | None:
    """The buy/sell trigger for *result*, or None for hold."""
    if result.fused.signal == "hold":
        return None
    return SignalEvent(
        symbol=result.symbol,
        signal=result.fused.signal,
        price=result.current_price,
        reasons=list(result.fused.reasons),
        ts=result.ts,
    )


async def analyze_symbol(
    symbol: str,
    config: AppConfig,
    market: MarketDataSource,
    *,
    ai_settings: AISettings | None = None,
    provider: OpinionProvider | None = None,
    session: Session | None = None,
) -> AnalysisResult | None:
    """Run the full pipeline for *symbol*.

    Returns None when the provider has no usable bars ("unable to
    analyze"). A history write failure is logged and the result is still
    returned.
    """
    symbol = normalize_symbol(symbol)
    ai_settings = ai_settings or config.ai

    with structlog.contextvars.bound_contextvars(symbol=symbol):
        quote = await market.fetch_quote(symbol)
        bars = await market.fetch_bars(
            symbol,
            interval=config.market_data.interval,
            range_=config.market_data.range,
        )
        if not bars:
            log.warning("unable_to_analyze", reason="no_bars")
            return None
        try:
            validate_bars(bars)
        except ValueError as exc:
            log.warning("unable_to_analyze", reason="bad_bars", error=str(exc))
            return None

        # Classify the ticker the market client fetches: "BTC" is served as BTC-USD.
        market_symbol = format_symbol(symbol)
        params = resolve_params(market_symbol, config)
        snapshot = compute_indicators(bars, market_symbol, params)
        technical = generate_signal(snapshot, params)

        current_price: Decimal = quote.price if quote and quote.price is not None else bars[-1].close

        ai_opinion = None
        if snapshot.ok and ai_settings.enabled:
            ai_opinion = await get_enhanced_signal(
                symbol, current_price, technical, snapshot, ai_settings, provider=provider
            )
        fused = fuse_opinions(technical, ai_opinion)

        result = AnalysisResult(
            symbol=symbol,
            asset_class=params.asset_class,
            current_price=current_price,
            snapshot=snapshot,
            technical=technical,
            ai=ai_opinion,
            fused=fused,
            ts=datetime.now(timezone.utc),
            company_name=quote.display_name if quote else None,
        )
        log.info(
            "signal_generated",
            asset_class=params.asset_class.value,
            signal=fused.signal,
            confidence=fused.confidence,
            source=fused.source,
        )

        if session is not None:
            try:
                save_signal_history(session, result)
            except PersistenceError:
                log.exception("history_save_failed")

    return result


async def analyze_batch(
    symbols: Iterable[str],
    config: AppConfig,
    market: MarketDataSource,
    *,
    ai_settings: AISettings | None = None,
    provider: OpinionProvider | None = None,
    session: Session | None = None,
    notifier: Notifier | None = None,
) -> list[AnalysisResult]:
    """Analyze *symbols* sequentially; failures are skipped, results appended."""
    results: list[AnalysisResult] = []
    for symbol in list(symbols):
        try:
            result = await analyze_symbol(
                symbol,
                config,
                market,
                ai_settings=ai_settings,
                provider=provider,
                session=session,
            )
        except Exception:
            log.exception("symbol_error", symbol=symbol)
            continue
        if result is None:
            continue
        results.append(result)

        event = signal_event(result)
        if event is not None and notifier is not None:
            await asyncio.to_thread(notifier.notify, event)
    return results


async def run_scheduled(
    config: AppConfig,
    market: MarketDataSource,
    *,
    ai_settings: AISettings | None = None,
    notifier: Notifier | None = None,
    max_runs: int | None = None,
) -> None:
    """Re-analyze the watchlist every ``schedule.interval_minutes``.

    Requires init_engine() to have been called. Runs forever unless
    *max_runs* is given.
    """
    interval_s = config.schedule.interval_minutes * 60
    log.info("schedule_started", interval_minutes=config.schedule.interval_minutes)

    runs = 0
    while max_runs is None or runs < max_runs:
        try:
            session_gen = get_session()
            session = next(session_gen)
            try:
                watchlist = load_watchlist(session)
                results = await analyze_batch(
                    watchlist,
                    config,
                    market,
                    ai_settings=ai_settings,
                    session=session,
                    notifier=notifier,
                )
                log.info(
                    "scheduled_run_complete",
                    symbols=len(watchlist),
                    analyzed=len(results),
                    actionable=sum(1 for r in results if r.fused.signal != "hold"),
                )
            finally:
                try:
                    next(session_gen)
                except StopIteration:
                    pass
        except PersistenceError:
            log.exception("scheduled_run_failed")

        runs += 1
        if max_runs is None or runs < max_runs:
            await asyncio.sleep(interval_s)
