"""Time-based analytics over closed trades.

Equity curve, max drawdown, Sharpe ratio and calendar breakdowns (day, week,
month, weekday, hour). All functions are pure; open trades are ignored.
Calendar buckets are computed in UTC.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

import numpy as np

from journal.models.trade import normalize_date
from journal.services.stats_calculator import closed_trades_in_order
from journal.utils.constants import TRADING_DAYS_PER_YEAR, VALID_TIMEFRAMES, WEEKDAY_NAMES


@dataclass
class DrawdownResult:
    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    start_index: int = -1  # index of the peak
    end_index: int = -1  # index of the trough


@dataclass
class DailyPnL:
    date: str  # ISO date
    pnl: float
    cumulative: float


@dataclass
class PeriodStats:
    total_pnl: float = 0.0
    trade_count: int = 0
    avg_pnl: float = 0.0
    win_rate: float = 0.0


# ---------------------------------------------------------------------------
# Equity curve and risk
# ---------------------------------------------------------------------------

def build_equity_curve(trades: Iterable) -> list[float]:
    """Cumulative P&L of closed trades in chronological order."""
    pnls = [pnl for _, pnl in closed_trades_in_order(trades)]
    if not pnls:
        return []
    return np.cumsum(pnls).tolist()


def calculate_max_drawdown(equity_curve: list[float]) -> DrawdownResult:
    """Largest peak-to-trough decline of an equity curve.

    Only a strictly larger decline replaces the current maximum, so the
    earliest of equal drawdowns is reported.
    """
    if len(equity_curve) == 0:
        return DrawdownResult()

    curve = np.asarray(equity_curve, dtype=float)
    peaks = np.maximum.accumulate(curve)
    drawdowns = peaks - curve

    end = int(np.argmax(drawdowns))
    max_dd = float(drawdowns[end])
    if max_dd <= 0:
        return DrawdownResult()

    peak = float(peaks[end])
    # first index where the running peak reached its value at the trough
    start = int(np.argmax(curve[: end + 1] == peak))
    pct = max_dd / peak * 100 if peak > 0 else 0.0
    return DrawdownResult(
        max_drawdown=max_dd,
        max_drawdown_pct=pct,
        start_index=start,
        end_index=end,
    )


def calculate_sharpe_ratio(returns: list[float], annual_risk_free_rate: float = 0.02) -> float:
    """Annualised Sharpe ratio of daily returns (population std dev)."""
    if len(returns) == 0:
        return 0.0

    values = np.asarray(returns, dtype=float)
    daily_risk_free = annual_risk_free_rate / TRADING_DAYS_PER_YEAR
    excess = float(np.mean(values)) - daily_risk_free
    std = float(np.std(values))

    if std == 0:
        return float("inf") if excess > 0 else 0.0
    return float(excess / std * np.sqrt(TRADING_DAYS_PER_YEAR))


# ---------------------------------------------------------------------------
# Calendar breakdowns
# ---------------------------------------------------------------------------

def _bucket_key(dt: datetime, timeframe: str) -> str:
    if timeframe == "day":
        return dt.date().isoformat()
    if timeframe == "week":
        # weeks start on Sunday
        week_start = dt.date() - timedelta(days=(dt.weekday() + 1) % 7)
        return week_start.isoformat()
    return f"{dt.year}-{dt.month:02d}"


def group_by_timeframe(trades: Iterable, timeframe: str) -> dict[str, list]:
    """Group closed trades by day, week (Sunday start) or month.

    Trades without a usable date are skipped.
    """
    if timeframe not in VALID_TIMEFRAMES:
        raise ValueError("Invalid timeframe")

    grouped: dict[str, list] = defaultdict(list)
    for trade, _ in closed_trades_in_order(trades):
        dt = normalize_date(getattr(trade, "trade_date", None))
        if dt is None:
            continue
        grouped[_bucket_key(dt, timeframe)].append(trade)
    return dict(grouped)


def calculate_daily_pnl(trades: Iterable) -> list[DailyPnL]:
    """Per-day P&L with a running cumulative total, oldest day first."""
    totals: dict[str, float] = defaultdict(float)
    for trade, pnl in closed_trades_in_order(trades):
        dt = normalize_date(getattr(trade, "trade_date", None))
        if dt is None:
            continue
        totals[_bucket_key(dt, "day")] += pnl

    result = []
    cumulative = 0.0
    for day in sorted(totals):
        cumulative += totals[day]
        result.append(DailyPnL(date=day, pnl=totals[day], cumulative=cumulative))
    return result


def _period_stats(pnls: list[float]) -> PeriodStats:
    if not pnls:
        return PeriodStats()
    total = sum(pnls)
    wins = sum(1 for p in pnls if p > 0)
    return PeriodStats(
        total_pnl=total,
        trade_count=len(pnls),
        avg_pnl=total / len(pnls),
        win_rate=wins / len(pnls),
    )


def _dated_pnls(trades: Iterable):
    for trade, pnl in closed_trades_in_order(trades):
        dt = normalize_date(getattr(trade, "trade_date", None))
        if dt is not None:
            yield dt, pnl


def calculate_weekday_stats(trades: Iterable) -> dict[str, PeriodStats]:
    """Stats per weekday, Sunday through Saturday. Every day is present."""
    buckets: dict[str, list[float]] = {day: [] for day in WEEKDAY_NAMES}
    for dt, pnl in _dated_pnls(trades):
        # datetime.weekday() is Monday=0; WEEKDAY_NAMES starts on Sunday
        buckets[WEEKDAY_NAMES[(dt.weekday() + 1) % 7]].append(pnl)
    return {day: _period_stats(pnls) for day, pnls in buckets.items()}


def calculate_hourly_stats(trades: Iterable) -> dict[int, PeriodStats]:
    """Stats per hour of day (0-23). Every hour is present."""
    buckets: dict[int, list[float]] = {hour: [] for hour in range(24)}
    for dt, pnl in _dated_pnls(trades):
        buckets[dt.hour].append(pnl)
    return {hour: _period_stats(pnls) for hour, pnls in buckets.items()}
