"""CLI tool for computing journal statistics offline.

Usage:
    python -m journal.cli stats trades.json [--json]
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from journal.schemas.trade import StatsRequest
from journal.services.stats_calculator import TradeStats, calculate_trade_stats
from journal.utils.formatters import format_currency, format_percentage, format_ratio, json_safe
from journal.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def load_trades(path: Path) -> StatsRequest:
    """Read a JSON file holding a list of trades or {"trades": [...]}."""
    data = json.loads(path.read_text())
    if isinstance(data, list):
        data = {"trades": data}
    return StatsRequest.model_validate(data)


def render_report(stats: TradeStats) -> str:
    lines = [
        f"Total trades:       {stats.total_trades} ({stats.closed_trades} closed)",
        f"Win / Loss / BE:    {stats.winning_trades} / {stats.losing_trades} / {stats.break_even_trades}",
        f"Win rate:           {format_percentage(stats.win_rate * 100)}",
        f"Total P&L:          {format_currency(stats.total_pnl)}",
        f"Gross profit:       {format_currency(stats.gross_profit)}",
        f"Gross loss:         {format_currency(stats.gross_loss)}",
        f"Average win:        {format_currency(stats.avg_win)}",
        f"Average loss:       {format_currency(stats.avg_loss)}",
        f"Largest win:        {format_currency(stats.largest_win)}",
        f"Largest loss:       {format_currency(stats.largest_loss)}",
        f"Expectancy:         {format_currency(stats.expectancy)}",
        f"Profit factor:      {format_ratio(stats.profit_factor)}",
        f"Payoff ratio:       {format_ratio(stats.payoff_ratio)}",
        f"Win/loss ratio:     {format_ratio(stats.win_loss_ratio)}",
        f"Recovery factor:    {format_ratio(stats.recovery_factor)}",
        f"Max consec. wins:   {stats.max_consecutive_wins}",
        f"Max consec. losses: {stats.max_consecutive_losses}",
        f"Current streak:     {stats.current_streak} {stats.current_streak_type}",
    ]
    return "\n".join(lines)


def stats_command(args: list[str]):
    if not args:
        print("Usage: python -m journal.cli stats <trades.json> [--json]")
        sys.exit(1)

    path = Path(args[0])
    if not path.is_file():
        print(f"File not found: {path}")
        sys.exit(1)

    try:
        request = load_trades(path)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Could not read trades from {path}: {e}")
        sys.exit(1)

    logger.info(f"Loaded {len(request.trades)} trades from {path}")
    stats = calculate_trade_stats(request.records())
    if "--json" in args[1:]:
        print(json.dumps(json_safe(stats.to_dict()), indent=2))
    else:
        print(render_report(stats))


def main():
    setup_logging()

    if len(sys.argv) < 2:
        print("Usage: python -m journal.cli <command>")
        print("Commands: stats")
        sys.exit(1)

    command = sys.argv[1]
    if command == "stats":
        stats_command(sys.argv[2:])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
