"""Command-line interface.

Usage: python -m projector_core [--config config.yaml] <command> ...

    analyze SYMBOL [SYMBOL ...] [--add]
    watchlist show | add SYMBOL | remove SYMBOL
    scan [--details]
    schedule [--once]
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog
from sqlalchemy.orm import Session

from projector_core.ai.registry import PROVIDER_REGISTRY
from projector_core.config import AISettings, AppConfig, load_config
from projector_core.db.engine import get_session, init_engine
from projector_core.errors import PersistenceError
from projector_core.logging import setup_logging
from projector_core.market import YahooFinanceClient
from projector_core.notify import build_notifier
from projector_core.pipeline.display import format_result, format_summary_table, format_watchlist_table
from projector_core.pipeline.runner import analyze_batch, analyze_symbol, run_scheduled, session_ai_settings
from projector_core.store import (
    add_to_watchlist,
    latest_signals,
    load_watchlist,
    normalize_symbol,
    remove_from_watchlist,
)

import projector_core.ai.providers  # noqa: F401 — trigger @register_provider decorators

log = structlog.get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="projector", description="Stock & crypto signal projector")
    parser.add_argument("--config", default="config.yaml", help="Path to config file")
    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDER_REGISTRY),
        default=None,
        help="AI provider for this run (overrides config)",
    )
    parser.add_argument(
        "--ai",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable AI enhancement for this run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze one or more symbols")
    analyze.add_argument("symbols", nargs="+")
    analyze.add_argument("--add", action="store_true", help="Add analyzed symbols to the watchlist")

    watchlist = sub.add_parser("watchlist", help="Show or edit the watchlist")
    wl_sub = watchlist.add_subparsers(dest="action", required=True)
    wl_sub.add_parser("show", help="Show the watchlist with the last signals")
    wl_add = wl_sub.add_parser("add", help="Analyze a symbol and add it to the watchlist")
    wl_add.add_argument("symbol")
    wl_remove = wl_sub.add_parser("remove", help="Remove a symbol from the watchlist")
    wl_remove.add_argument("symbol")

    scan = sub.add_parser("scan", help="Analyze every watchlist symbol")
    scan.add_argument("--details", action="store_true", help="Print the full analysis per symbol")

    schedule = sub.add_parser("schedule", help="Re-analyze the watchlist on an interval and send alerts")
    schedule.add_argument("--once", action="store_true", help="Run a single pass and exit")

    return parser


async def _analyze(args, config: AppConfig, ai: AISettings, market, session: Session) -> int:
    watchlist = load_watchlist(session) if args.add else []
    status = 0
    for symbol in args.symbols:
        result = await analyze_symbol(symbol, config, market, ai_settings=ai, session=session)
        if result is None:
            print(f"Unable to analyze {normalize_symbol(symbol)}.")
            status = 1
            continue
        print(format_result(result))
        print()
        if args.add and result.symbol not in watchlist:
            add_to_watchlist(session, result.symbol)
            print(f"{result.symbol} added to watchlist.")
    return status


async def _watchlist(args, config: AppConfig, ai: AISettings, market, session: Session) -> int:
    if args.action == "show":
        symbols = load_watchlist(session)
        print(format_watchlist_table(symbols, latest_signals(session, symbols)))
        return 0

    symbol = normalize_symbol(args.symbol)
    if args.action == "remove":
        if remove_from_watchlist(session, symbol):
            print(f"{symbol} removed from watchlist.")
            return 0
        print(f"{symbol} is not in your watchlist.")
        return 1

    if symbol in load_watchlist(session):
        print(f"{symbol} is already in your watchlist.")
        return 0
    # Only symbols the provider can analyze make it onto the watchlist.
    result = await analyze_symbol(symbol, config, market, ai_settings=ai, session=session)
    if result is None:
        print(f"Unable to analyze {symbol}. Not adding to watchlist.")
        return 1
    add_to_watchlist(session, symbol)
    print(f"{symbol} added to watchlist.")
    print(format_result(result))
    return 0


async def _scan(args, config: AppConfig, ai: AISettings, market, session: Session) -> int:
    symbols = load_watchlist(session)
    if not symbols:
        print(format_watchlist_table(symbols, {}))
        return 0
    results = await analyze_batch(symbols, config, market, ai_settings=ai, session=session)
    print(format_summary_table(results))
    if args.details:
        for result in results:
            print()
            print(format_result(result))
    skipped = len(symbols) - len(results)
    if skipped:
        print(f"\n{skipped} symbol(s) could not be analyzed.")
    return 0


_COMMANDS = {"analyze": _analyze, "watchlist": _watchlist, "scan": _scan}


async def run(args: argparse.Namespace, config: AppConfig) -> int:
    ai = session_ai_settings(config, provider=args.provider, enabled=args.ai)
    market = YahooFinanceClient(
        base_url=config.market_data.base_url,
        timeout_s=config.market_data.timeout_s,
    )
    init_engine(config.database.url)

    try:
        if args.command == "schedule":
            await run_scheduled(
                config,
                market,
                ai_settings=ai,
                notifier=build_notifier(config.email),
                max_runs=1 if args.once else None,
            )
            return 0

        session_gen = get_session()
        session = next(session_gen)
        try:
            return await _COMMANDS[args.command](args, config, ai, market, session)
        finally:
            try:
                next(session_gen)
            except StopIteration:
                pass
    except PersistenceError as exc:
        log.error("persistence_error", error=str(exc))
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    finally:
        await market.close()


def main(argv: list[str] | None = None) -> None:
    """Entry point — load config, set up logging, dispatch the command."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    try:
        status = asyncio.run(run(args, config))
    except KeyboardInterrupt:
        status = 130
    sys.exit(status)
