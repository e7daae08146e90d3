"""Watchlist persistence."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from projector_core.db.tables.watchlist import WatchlistRow
from projector_core.errors import PersistenceError


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def load_watchlist(session: Session) -> list[str]:
    """Watchlist symbols in the order they were added."""
    try:
        return list(
            session.scalars(
                select(WatchlistRow.symbol).order_by(WatchlistRow.added_at, WatchlistRow.symbol)
            ).all()
        )
    except SQLAlchemyError as exc:
        raise PersistenceError("could not load watchlist") from exc


def add_to_watchlist(session: Session, symbol: str) -> bool:
    """Add *symbol*; False if it was already present."""
    symbol = normalize_symbol(symbol)
    try:
        if session.get(WatchlistRow, symbol) is not None:
            return False
        session.add(WatchlistRow(symbol=symbol, added_at=datetime.now(timezone.utc)))
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"could not add {symbol} to watchlist") from exc
    return True


def remove_from_watchlist(session: Session, symbol: str) -> bool:
    """Remove *symbol*; False if it was not on the watchlist."""
    symbol = normalize_symbol(symbol)
    try:
        row = session.get(WatchlistRow, symbol)
        if row is None:
            return False
        session.delete(row)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"could not remove {symbol} from watchlist") from exc
    return True
