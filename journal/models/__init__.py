"""Domain models."""

from journal.models.trade import TradeRecord, normalize_pnl, normalize_date, chronological_key

__all__ = [
    "TradeRecord",
    "normalize_pnl",
    "normalize_date",
    "chronological_key",
]
