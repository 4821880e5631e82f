"""Shared constants for trade statistics."""

# Number of most recent closed trades scanned for the current streak.
CURRENT_STREAK_WINDOW = 10

STREAK_WIN = "win"
STREAK_LOSS = "loss"
STREAK_BREAKEVEN = "breakeven"
STREAK_NONE = "none"
STREAK_TYPES = [STREAK_WIN, STREAK_LOSS, STREAK_BREAKEVEN, STREAK_NONE]

VALID_SIDES = ["LONG", "SHORT"]

VALID_TIMEFRAMES = ["day", "week", "month"]

# Trading days per year for annualising daily returns
TRADING_DAYS_PER_YEAR = 252

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
