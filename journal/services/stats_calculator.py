"""Trade performance statistics.

Pure computation over a collection of trade records: counts, P&L aggregates,
ratios, extremes and win/loss streaks. No I/O, no state between calls.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Iterable

from journal.models.trade import normalize_pnl, chronological_key
from journal.utils.constants import (
    CURRENT_STREAK_WINDOW,
    STREAK_WIN,
    STREAK_LOSS,
    STREAK_BREAKEVEN,
    STREAK_NONE,
)

logger = logging.getLogger(__name__)

INF = float("inf")

# snake_case field -> wire key used by the journal frontend
_WIRE_KEYS = {
    "total_trades": "totalTrades",
    "total_pnl": "totalPnL",
    "win_rate": "winRate",
    "avg_win": "avgWin",
    "avg_loss": "avgLoss",
    "profit_factor": "profitFactor",
    "expectancy": "expectancy",
    "payoff_ratio": "payoffRatio",
    "win_loss_ratio": "winLossRatio",
    "recovery_factor": "recoveryFactor",
    "max_consecutive_wins": "maxConsecutiveWins",
    "max_consecutive_losses": "maxConsecutiveLosses",
    "current_streak": "currentStreak",
    "current_streak_type": "currentStreakType",
    "largest_win": "largestWin",
    "largest_loss": "largestLoss",
    "gross_profit": "grossProfit",
    "gross_loss": "grossLoss",
    "winning_trades": "winningTrades",
    "losing_trades": "losingTrades",
    "break_even_trades": "breakEvenTrades",
}


@dataclass(frozen=True)
class TradeStats:
    """Statistics snapshot for a set of trades.

    win_rate is a fraction in [0, 1]. Ratios whose denominator is zero are
    inf when the numerator is positive and 0.0 otherwise.
    """
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    break_even_trades: int = 0
    total_pnl: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    win_rate: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    payoff_ratio: float = 0.0
    win_loss_ratio: float = 0.0
    recovery_factor: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    current_streak: int = 0
    current_streak_type: str = STREAK_NONE

    @property
    def closed_trades(self) -> int:
        return self.winning_trades + self.losing_trades + self.break_even_trades

    def to_dict(self) -> dict:
        """camelCase dict in the shape the journal frontend consumes."""
        return {_WIRE_KEYS[k]: v for k, v in asdict(self).items()}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or inf / 0.0 when the denominator is zero."""
    if denominator > 0:
        return numerator / denominator
    if numerator > 0:
        return INF
    return 0.0


def _outcome(pnl: float) -> str:
    if pnl > 0:
        return STREAK_WIN
    if pnl < 0:
        return STREAK_LOSS
    return STREAK_BREAKEVEN


def closed_trades_in_order(trades: Iterable) -> list[tuple[object, float]]:
    """(trade, pnl) pairs for closed trades, oldest first.

    Trades with a missing or unparsable date sort after all dated trades;
    ties keep input order.
    """
    closed = []
    for trade in trades:
        pnl = normalize_pnl(getattr(trade, "pnl", None))
        if pnl is not None:
            closed.append((trade, pnl))
    closed.sort(key=lambda item: chronological_key(getattr(item[0], "trade_date", None)))
    return closed


def _max_streaks(pnls: list[float]) -> tuple[int, int]:
    max_wins = max_losses = 0
    win_run = loss_run = 0
    for pnl in pnls:
        if pnl > 0:
            win_run += 1
            loss_run = 0
            max_wins = max(max_wins, win_run)
        elif pnl < 0:
            loss_run += 1
            win_run = 0
            max_losses = max(max_losses, loss_run)
        else:
            win_run = loss_run = 0
    return max_wins, max_losses


def _current_streak(pnls: list[float]) -> tuple[int, str]:
    """Trailing run of the latest outcome within the look-back window."""
    recent = pnls[-CURRENT_STREAK_WINDOW:]
    if not recent:
        return 0, STREAK_NONE

    streak_type = _outcome(recent[-1])
    count = 0
    for pnl in reversed(recent):
        if _outcome(pnl) != streak_type:
            break
        count += 1
    return count, streak_type


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def calculate_trade_stats(trades: Iterable) -> TradeStats:
    """Compute a TradeStats snapshot.

    Each trade needs ``trade_date`` and ``pnl`` attributes. A trade whose pnl
    is not a finite number is open: it counts toward total_trades only.
    The input is never mutated.
    """
    trades = list(trades)
    ordered = closed_trades_in_order(trades)
    logger.debug(f"Computing stats for {len(ordered)} closed / {len(trades)} total trades")

    if not ordered:
        return TradeStats(total_trades=len(trades))

    pnls = [pnl for _, pnl in ordered]

    winning = losing = break_even = 0
    gross_profit = gross_loss = 0.0
    largest_win = largest_loss = 0.0
    for pnl in pnls:
        if pnl > 0:
            winning += 1
            gross_profit += pnl
            largest_win = max(largest_win, pnl)
        elif pnl < 0:
            losing += 1
            gross_loss += -pnl
            largest_loss = min(largest_loss, pnl)
        else:
            break_even += 1

    closed = len(pnls)
    total_pnl = sum(pnls)
    avg_win = gross_profit / winning if winning else 0.0
    avg_loss = gross_loss / losing if losing else 0.0

    max_wins, max_losses = _max_streaks(pnls)
    current_streak, current_streak_type = _current_streak(pnls)

    return TradeStats(
        total_trades=len(trades),
        winning_trades=winning,
        losing_trades=losing,
        break_even_trades=break_even,
        total_pnl=total_pnl,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        win_rate=winning / closed,
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=_ratio(gross_profit, gross_loss),
        expectancy=total_pnl / closed,
        payoff_ratio=_ratio(avg_win, avg_loss),
        win_loss_ratio=_ratio(winning, losing),
        recovery_factor=_ratio(total_pnl, abs(largest_loss)),
        largest_win=largest_win,
        largest_loss=largest_loss,
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        current_streak=current_streak,
        current_streak_type=current_streak_type,
    )
