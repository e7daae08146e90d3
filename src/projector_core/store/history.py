"""Signal history persistence — a capped per-symbol log of fused signals."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from projector_core.db.tables.signals import SignalHistoryRow
from projector_core.errors import PersistenceError
from projector_core.models import AnalysisResult, HistoryEntry

HISTORY_LIMIT = 10


def _to_entry(row: SignalHistoryRow) -> HistoryEntry:
    return HistoryEntry(
        signal=row.signal,
        confidence=row.confidence,
        source=row.source,
        price=row.price,
        ts=row.ts,
        reasons=list(row.reasons or []),
    )


def load_signal_history(session: Session, symbol: str) -> list[HistoryEntry]:
    """Persisted signals for *symbol*, oldest first (empty if none)."""
    try:
        rows = session.scalars(
            select(SignalHistoryRow)
            .where(SignalHistoryRow.symbol == symbol)
            .order_by(SignalHistoryRow.ts, SignalHistoryRow.id)
        ).all()
    except SQLAlchemyError as exc:
        raise PersistenceError(f"could not load history for {symbol}") from exc
    return [_to_entry(r) for r in rows]


def save_signal_history(
    session: Session,
    result: AnalysisResult,
    limit: int = HISTORY_LIMIT,
) -> int:
    """Append *result*'s fused signal and drop all but the *limit* newest rows.

    Returns the new row id.
    """
    row = SignalHistoryRow(
        symbol=result.symbol,
        ts=result.ts,
        signal=result.fused.signal,
        confidence=result.fused.confidence,
        source=result.fused.source,
        price=result.current_price,
        reasons=list(result.fused.reasons),
        indicators=result.snapshot.model_dump(mode="json"),
    )
    try:
        session.add(row)
        session.flush()

        keep = (
            select(SignalHistoryRow.id)
            .where(SignalHistoryRow.symbol == result.symbol)
            .order_by(desc(SignalHistoryRow.ts), desc(SignalHistoryRow.id))
            .limit(limit)
        )
        session.execute(
            delete(SignalHistoryRow)
            .where(SignalHistoryRow.symbol == result.symbol)
            .where(SignalHistoryRow.id.not_in(keep.scalar_subquery()))
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"could not save history for {result.symbol}") from exc
    return row.id


def latest_signals(session: Session, symbols: Iterable[str]) -> dict[str, HistoryEntry]:
    """Most recent persisted signal per symbol; symbols without history are absent."""
    latest: dict[str, HistoryEntry] = {}
    try:
        for symbol in symbols:
            row = session.scalars(
                select(SignalHistoryRow)
                .where(SignalHistoryRow.symbol == symbol)
                .order_by(desc(SignalHistoryRow.ts), desc(SignalHistoryRow.id))
                .limit(1)
            ).first()
            if row is not None:
                latest[symbol] = _to_entry(row)
    except SQLAlchemyError as exc:
        raise PersistenceError("could not load latest signals") from exc
    return latest
