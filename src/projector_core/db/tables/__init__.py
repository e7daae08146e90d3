"""Import all table modules so Base.metadata knows about them."""

from projector_core.db.tables.signals import SignalHistoryRow
from projector_core.db.tables.watchlist import WatchlistRow

__all__ = ["SignalHistoryRow", "WatchlistRow"]
