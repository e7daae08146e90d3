"""Yahoo Finance client — historical bars and quote metadata from the chart API.

The chart endpoint returns parallel arrays::

    {"chart": {"result": [{"meta": {...}, "timestamp": [...],
               "indicators": {"quote": [{"open": [...], "close": [...], ...}]}}],
               "error": null}}

Entries can be null for bars that did not trade; those bars are dropped.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import httpx
import structlog

from projector_core.errors import ProviderUnavailableError
from projector_core.models import PriceBar, Quote

log = structlog.get_logger("yahoo_finance")

CRYPTO_BASES = {"BTC", "ETH", "USDT", "XRP", "BNB", "ADA", "SOL", "DOT", "DOGE", "SHIB"}

_INTERVALS = {"daily": "1d", "weekly": "1wk", "monthly": "1mo"}
_RANGES = {"compact": "1y", "full": "max"}
_CRYPTO_SUFFIX = re.compile(r"-USD$|\.X$")

# Yahoo rejects requests without a browser-like agent.
_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; stock-projector/0.1)"}


def format_symbol(symbol: str) -> str:
    """Map crypto tickers (``BTC``, ``ETH.X``) to Yahoo's ``<BASE>-USD`` form."""
    symbol = symbol.strip().upper()
    base = _CRYPTO_SUFFIX.sub("", symbol)
    if base in CRYPTO_BASES:
        return f"{base}-USD"
    return symbol


def _dec(value: Any) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


def parse_chart(body: dict) -> tuple[dict, list[PriceBar]]:
    """Return ``(meta, bars)`` from a chart response, bars oldest first and unique by date."""
    chart = body.get("chart") or {}
    if chart.get("error"):
        raise ProviderUnavailableError(str(chart["error"]))
    results = chart.get("result") or []
    if not results:
        raise ProviderUnavailableError("empty chart result")

    result = results[0]
    meta = result.get("meta") or {}
    timestamps = result.get("timestamp") or []
    quote = ((result.get("indicators") or {}).get("quote") or [{}])[0]

    columns = {key: quote.get(key) or [] for key in ("open", "high", "low", "close", "volume")}

    by_date: dict = {}
    for i, ts in enumerate(timestamps):
        row = {key: _dec(values[i]) if i < len(values) else None for key, values in columns.items()}
        if any(row[key] is None for key in ("open", "high", "low", "close")):
            continue
        day = datetime.fromtimestamp(ts, tz=timezone.utc).date()
        # Later rows win: Yahoo appends today's live bar after the last close.
        by_date[day] = PriceBar(
            date=day,
            open=row["open"],
            high=row["high"],
            low=row["low"],
            close=row["close"],
            volume=row["volume"] or Decimal(0),
        )

    bars = [by_date[d] for d in sorted(by_date)]
    return meta, bars


class YahooFinanceClient:
    """Async client for Yahoo Finance's public chart API."""

    def __init__(
        self,
        base_url: str = "https://query1.finance.yahoo.com",
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                timeout=self.timeout_s,
                headers=_HEADERS,
                transport=self._transport,
            )
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def _get_chart(self, symbol: str, interval: str, range_: str) -> dict:
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/v8/finance/chart/{format_symbol(symbol)}",
            params={
                "interval": _INTERVALS.get(interval, interval),
                "range": _RANGES.get(range_, range_),
                "includePrePost": "false",
            },
        )
        resp.raise_for_status()
        return resp.json()

    async def fetch_bars(
        self,
        symbol: str,
        interval: str = "1d",
        range_: str = "2y",
    ) -> list[PriceBar] | None:
        """Historical bars for *symbol*, or None if the provider failed."""
        try:
            body = await self._get_chart(symbol, interval, range_)
            _, bars = parse_chart(body)
        except (httpx.HTTPError, ValueError, ProviderUnavailableError) as exc:
            log.warning("fetch_bars_failed", symbol=symbol, error=str(exc))
            return None
        if not bars:
            log.warning("fetch_bars_empty", symbol=symbol)
            return None
        log.debug("fetched_bars", symbol=symbol, bars=len(bars))
        return bars

    async def fetch_quote(self, symbol: str) -> Quote | None:
        """Latest price and display names, or None (analysis continues without it)."""
        try:
            body = await self._get_chart(symbol, "1d", "1d")
            meta, _ = parse_chart(body)
        except (httpx.HTTPError, ValueError, ProviderUnavailableError) as exc:
            log.info("fetch_quote_failed", symbol=symbol, error=str(exc))
            return None
        return Quote(
            symbol=meta.get("symbol", format_symbol(symbol)),
            price=_dec(meta.get("regularMarketPrice")),
            short_name=meta.get("shortName"),
            long_name=meta.get("longName"),
        )
