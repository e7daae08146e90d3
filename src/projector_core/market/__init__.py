"""Market data provider clients."""

from projector_core.market.yahoo import YahooFinanceClient, format_symbol

__all__ = ["YahooFinanceClient", "format_symbol"]
