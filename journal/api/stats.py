"""Statistics API: server-computed stats for trades posted in the body."""

import logging
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, HTTPException

from journal.config import settings
from journal.schemas.trade import StatsRequest
from journal.services import analytics
from journal.services.stats_calculator import calculate_trade_stats
from journal.services.trade_calculator import calculate_trade_metrics
from journal.utils.formatters import json_safe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.post("")
def trade_stats(body: StatsRequest):
    """Summary statistics (win rate, ratios, streaks) for the posted trades."""
    stats = calculate_trade_stats(body.records())
    logger.info(
        f"Stats: {stats.total_trades} trades, {stats.closed_trades} closed, "
        f"pnl={stats.total_pnl:.2f}"
    )
    return json_safe(stats.to_dict())


@router.post("/drawdown")
def max_drawdown(body: StatsRequest):
    """Max drawdown of the chronological cumulative P&L curve."""
    curve = analytics.build_equity_curve(body.records())
    result = analytics.calculate_max_drawdown(curve)
    return json_safe({
        "maxDrawdown": result.max_drawdown,
        "maxDrawdownPercent": result.max_drawdown_pct,
        "drawdownStart": result.start_index,
        "drawdownEnd": result.end_index,
    })


@router.post("/daily")
def daily_pnl(body: StatsRequest):
    """Per-day P&L with cumulative totals."""
    return [asdict(d) for d in analytics.calculate_daily_pnl(body.records())]


@router.post("/breakdown")
def breakdown(body: StatsRequest, by: Literal["weekday", "hour"] = "weekday"):
    """Total/average P&L and win rate per weekday or hour of day."""
    records = body.records()
    if by == "hour":
        periods = analytics.calculate_hourly_stats(records)
    else:
        periods = analytics.calculate_weekday_stats(records)
    return {
        str(key): {
            "totalPnL": p.total_pnl,
            "tradeCount": p.trade_count,
            "avgPnL": p.avg_pnl,
            "winRate": p.win_rate,
        }
        for key, p in periods.items()
    }


@router.post("/grouped")
def grouped(body: StatsRequest, timeframe: str = "day"):
    """Closed trades grouped by day, week or month, with a stats summary per group."""
    try:
        groups = analytics.group_by_timeframe(body.records(), timeframe)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        key: json_safe(calculate_trade_stats(trades).to_dict())
        for key, trades in sorted(groups.items())
    }


@router.post("/sharpe")
def sharpe_ratio(body: StatsRequest):
    """Annualised Sharpe ratio over daily P&L."""
    daily = analytics.calculate_daily_pnl(body.records())
    ratio = analytics.calculate_sharpe_ratio(
        [d.pnl for d in daily],
        annual_risk_free_rate=settings.risk_free_rate,
    )
    return json_safe({"sharpeRatio": ratio})


@router.post("/trade-metrics")
def trade_metrics(body: StatsRequest):
    """Per-trade P&L, reward-to-risk, holding time and profit %, in request order."""
    results = []
    for record in body.records():
        m = calculate_trade_metrics(record)
        results.append({
            "symbol": record.symbol,
            "pnl": m.pnl,
            "rrr": m.rrr,
            "durationSeconds": m.duration_seconds,
            "profit": m.profit,
            "profitPercent": m.profit_pct,
        })
    return json_safe(results)
