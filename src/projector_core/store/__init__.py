"""Persistence store — watchlist and capped signal history."""

from projector_core.store.history import (
    HISTORY_LIMIT,
    latest_signals,
    load_signal_history,
    save_signal_history,
)
from projector_core.store.watchlist import (
    add_to_watchlist,
    load_watchlist,
    normalize_symbol,
    remove_from_watchlist,
)

__all__ = [
    "HISTORY_LIMIT",
    "add_to_watchlist",
    "latest_signals",
    "load_signal_history",
    "load_watchlist",
    "normalize_symbol",
    "remove_from_watchlist",
    "save_signal_history",
]
