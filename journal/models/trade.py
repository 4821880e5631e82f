"""Trade record: the typed, already-normalised view of a journal trade."""

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class TradeRecord:
    trade_date: datetime | None
    pnl: float | None = None  # None = still open
    side: str | None = None  # "LONG" or "SHORT"
    symbol: str | None = None
    entry_price: float | None = None
    exit_price: float | None = None
    position_size: float | None = None
    stop_loss: float | None = None
    exit_date: datetime | None = None
    leverage: float = 1.0

    @property
    def is_closed(self) -> bool:
        return normalize_pnl(self.pnl) is not None


def normalize_pnl(value) -> float | None:
    """Return a finite float P&L, or None for anything that is not one.

    Accepts real numbers (including numpy scalars), Decimals and numeric
    strings. Booleans, NaN, infinities and values too large for a float
    count as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (numbers.Real, Decimal)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError, InvalidOperation):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_date(value) -> datetime | None:
    """Coerce a timestamp-like value to an aware UTC datetime, or None.

    Naive datetimes are taken to be UTC. Numbers are epoch milliseconds.
    Datetimes that fall outside the calendar once shifted to UTC are None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, numbers.Real):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def chronological_key(trade_date) -> tuple[int, float]:
    """Sort key placing valid dates in ascending order and missing ones last."""
    dt = normalize_date(trade_date)
    if dt is None:
        return (1, 0.0)
    return (0, dt.timestamp())
