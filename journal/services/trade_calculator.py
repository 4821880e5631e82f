"""Per-trade derived metrics: P&L, reward-to-risk, duration, profit %."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from journal.models.trade import normalize_date

logger = logging.getLogger(__name__)


class InvalidTradeError(ValueError):
    """Raised when trade prices or quantity cannot produce a profit figure."""


@dataclass
class ProfitResult:
    profit: float
    profit_pct: float


def calculate_pnl(
    side: str,
    entry_price: float,
    exit_price: float | None,
    position_size: float,
) -> float | None:
    """Realised P&L, or None while the trade is open.

    position_size is already leveraged, so leverage is not applied again.
    """
    if exit_price is None:
        return None
    if side == "SHORT":
        return (entry_price - exit_price) * position_size
    return (exit_price - entry_price) * position_size


def calculate_rrr(
    side: str,
    entry_price: float,
    exit_price: float | None,
    stop_loss: float | None,
) -> float | None:
    """Realised reward-to-risk ratio against the initial stop."""
    if not exit_price or not stop_loss:
        return None

    if side == "SHORT":
        reward = entry_price - exit_price
        risk = stop_loss - entry_price
    else:
        reward = exit_price - entry_price
        risk = entry_price - stop_loss

    if risk == 0:
        return None
    return reward / risk


def calculate_duration(trade_date: datetime, exit_date: datetime | None) -> int | None:
    """Holding time in whole seconds, or None without an exit."""
    opened = normalize_date(trade_date)
    closed = normalize_date(exit_date)
    if opened is None or closed is None:
        return None
    return math.floor((closed - opened).total_seconds())


def calculate_profit(buy_price: float, sell_price: float, quantity: float) -> ProfitResult:
    if not buy_price or not sell_price or not quantity:
        raise InvalidTradeError("Invalid trade data")
    if buy_price < 0 or sell_price < 0:
        raise InvalidTradeError("Invalid price values")

    profit = (sell_price - buy_price) * quantity
    profit_pct = (sell_price - buy_price) / buy_price * 100
    return ProfitResult(profit=round(profit, 2), profit_pct=round(profit_pct, 2))


@dataclass
class TradeMetrics:
    pnl: float | None
    rrr: float | None
    duration_seconds: int | None
    profit: float | None = None
    profit_pct: float | None = None


def calculate_trade_metrics(trade) -> TradeMetrics:
    """All per-trade metrics for one record; anything not derivable is None."""
    side = trade.side or "LONG"
    rrr = None
    if trade.entry_price is not None:
        rrr = calculate_rrr(side, trade.entry_price, trade.exit_price, trade.stop_loss)
    metrics = TradeMetrics(
        pnl=trade.pnl,
        rrr=rrr,
        duration_seconds=calculate_duration(trade.trade_date, trade.exit_date),
    )

    if trade.entry_price is None or trade.exit_price is None or trade.position_size is None:
        return metrics
    if side == "SHORT":
        buy_price, sell_price = trade.exit_price, trade.entry_price
    else:
        buy_price, sell_price = trade.entry_price, trade.exit_price
    try:
        result = calculate_profit(buy_price, sell_price, trade.position_size)
    except InvalidTradeError as e:
        logger.debug(f"No profit figure for {trade.symbol or 'trade'}: {e}")
        return metrics
    metrics.profit = result.profit
    metrics.profit_pct = result.profit_pct
    return metrics
