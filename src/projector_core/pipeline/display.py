"""Plain-text rendering of analysis results for the terminal."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal

from projector_core.ai.prompt import fmt_number
from projector_core.models import AnalysisResult, HistoryEntry


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    rule = "  ".join("-" * w for w in widths)
    return "\n".join([line(headers), rule, *(line(r) for r in rows)])


def _money(value: Decimal | None) -> str:
    return "N/A" if value is None else f"${fmt_number(value)}"


def format_result(result: AnalysisResult) -> str:
    """Detailed multi-line view of one analysis."""
    fused = result.fused
    snap = result.snapshot
    name = f" ({result.company_name})" if result.company_name else ""
    lines = [
        f"Analysis for {result.symbol}{name} - {_money(result.current_price)}",
        "",
        f"Signal: {fused.signal.upper()}",
        f"Confidence: {fused.confidence}%",
        f"Source: {fused.source}",
    ]
    if result.ai is not None and result.ai.error:
        lines.append(f"AI opinion unavailable: {result.ai.error}")

    lines += ["", "Reasons:", *(f"- {r}" for r in fused.reasons)]

    if snap.ok:
        lines += [
            "",
            "Key Indicators:",
            f"- RSI: {fmt_number(snap.rsi)}",
            f"- Support Level: {_money(snap.support_level)}",
            f"- Resistance Level: {_money(snap.resistance_level)}",
            f"- SMA 20: {_money(snap.sma.sma20)}",
            f"- SMA 50: {_money(snap.sma.sma50)}",
            f"- SMA 200: {_money(snap.sma.sma200)}",
        ]
        if snap.macd is not None:
            lines += [
                f"- MACD: {fmt_number(snap.macd.macd)}",
                f"- MACD Signal: {fmt_number(snap.macd.signal)}",
                f"- MACD Histogram: {fmt_number(snap.macd.histogram)}",
            ]
        if snap.bollinger_bands is not None:
            lines += [
                f"- Bollinger Upper: {_money(snap.bollinger_bands.upper)}",
                f"- Bollinger Middle: {_money(snap.bollinger_bands.middle)}",
                f"- Bollinger Lower: {_money(snap.bollinger_bands.lower)}",
            ]
    return "\n".join(lines)


def format_summary_table(results: Sequence[AnalysisResult]) -> str:
    rows = [
        [r.symbol, _money(r.current_price), r.fused.signal.upper(), f"{r.fused.confidence}%", r.fused.source]
        for r in results
    ]
    return _table(["Symbol", "Price", "Signal", "Confidence", "Source"], rows)


def format_watchlist_table(symbols: Sequence[str], latest: Mapping[str, HistoryEntry]) -> str:
    if not symbols:
        return 'Your watchlist is empty. Add symbols with "watchlist add SYMBOL".'
    rows = []
    for symbol in symbols:
        entry = latest.get(symbol)
        if entry is None:
            rows.append([symbol, "N/A", "N/A", "N/A", "N/A"])
            continue
        rows.append([
            symbol,
            _money(entry.price),
            entry.signal.upper(),
            f"{entry.confidence}%",
            entry.ts.strftime("%Y-%m-%d %H:%M"),
        ])
    return _table(["Symbol", "Last Price", "Signal", "Confidence", "Date"], rows)
