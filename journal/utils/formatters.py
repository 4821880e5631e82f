"""Display formatting for prices, sizes, money and percentages."""

import math

from journal.models.trade import normalize_pnl


def _number(value) -> float | None:
    return normalize_pnl(value)


def format_price(price) -> str:
    """2 decimals at or above 1, 4 decimals below."""
    number = _number(price)
    if number is None:
        return "0.00"
    return f"{number:.2f}" if number >= 1 else f"{number:.4f}"


def format_size(size) -> str:
    return format_price(size)


def format_currency(amount) -> str:
    """USD with thousands separators and 2 decimals, e.g. -$1,234.50."""
    number = _number(amount)
    if number is None:
        return "$0.00"
    sign = "-" if number < 0 and round(number, 2) != 0 else ""
    return f"{sign}${abs(number):,.2f}"


def format_percentage(value) -> str:
    """Value already in percent, one decimal."""
    number = _number(value)
    if number is None:
        return "0.0%"
    return f"{number:.1f}%"


def format_ratio(value: float) -> str:
    """Ratios with an unbounded value render as the infinity sign."""
    if isinstance(value, float) and math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def json_safe(value):
    """Replace inf/nan with None so JSON serialization doesn't blow up."""
    if isinstance(value, float) and (math.isinf(value) or math.isnan(value)):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    return value
