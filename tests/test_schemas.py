"""Tests for trade input normalisation and display formatters."""

import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import numpy as np
import pytest

from journal.models.trade import TradeRecord, normalize_date, normalize_pnl
from journal.schemas.trade import StatsRequest, TradeIn
from journal.utils.formatters import (
    format_currency,
    format_percentage,
    format_price,
    format_ratio,
    format_size,
    json_safe,
)


# ---------------------------------------------------------------------------
# 1. Normalisation helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value,expected", [
    (12, 12.0),
    (-3.5, -3.5),
    ("42.5", 42.5),
    (" -1 ", -1.0),
    (0, 0.0),
    (None, None),
    ("", None),
    ("abc", None),
    (True, None),
    (float("nan"), None),
    (float("inf"), None),
    ([1], None),
    (10**400, None),
    ("1e400", None),
    (Decimal("2.5"), 2.5),
    (Decimal("sNaN"), None),
    (np.int64(7), 7.0),
])
def test_normalize_pnl(value, expected):
    assert normalize_pnl(value) == expected


class TestNormalizeDate:
    def test_iso_z_suffix(self):
        assert normalize_date("2024-01-01T10:00:00Z") == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        assert normalize_date(datetime(2024, 1, 1)).tzinfo == timezone.utc

    def test_epoch_millis(self):
        assert normalize_date(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_garbage(self):
        assert normalize_date("yesterday") is None
        assert normalize_date(object()) is None

    def test_outside_calendar_once_in_utc(self):
        assert normalize_date(datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1)))) is None
        assert normalize_date("0001-01-01T00:00:00+01:00") is None
        assert normalize_date(10**20) is None


# ---------------------------------------------------------------------------
# 2. TradeIn boundary
# ---------------------------------------------------------------------------

class TestTradeIn:
    def test_camel_case_payload(self):
        trade = TradeIn.model_validate({
            "id": "1",
            "tradeDate": "2024-01-01T10:00:00Z",
            "symbol": "BTCUSD",
            "side": "long",
            "entryPrice": 40000,
            "exitPrice": 42000,
            "positionSize": 0.1,
            "leverage": 2,
            "notes": "Win trade",
            "pnl": 200,
        })
        assert trade.side == "LONG"
        assert trade.pnl == 200.0
        assert trade.trade_date == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)

    def test_snake_case_payload(self):
        trade = TradeIn(trade_date="2024-01-01", pnl="-5")
        assert trade.pnl == -5.0

    def test_malformed_values_become_none(self, caplog):
        trade = TradeIn.model_validate({"tradeDate": "not a date", "pnl": "n/a", "side": "FLAT"})
        assert trade.trade_date is None
        assert trade.pnl is None
        assert trade.side is None
        assert "Ignoring non-numeric pnl" in caplog.text

    def test_unusable_leverage_falls_back_to_one(self, caplog):
        for value in (0.5, "x", 0):
            trade = TradeIn(pnl=1, leverage=value)
            assert trade.leverage is None
            assert trade.to_record().leverage == 1.0
        assert "Ignoring leverage below 1" in caplog.text
        assert TradeIn(leverage="3").to_record().leverage == 3.0

    def test_pnl_derived_from_prices(self):
        trade = TradeIn(side="SHORT", entry_price=3000, exit_price=2900, position_size=1)
        assert trade.to_record().pnl == 100.0

    def test_explicit_pnl_wins(self):
        trade = TradeIn(side="LONG", entry_price=10, exit_price=20, position_size=1, pnl=3)
        assert trade.to_record().pnl == 3.0

    def test_open_trade_record(self):
        record = TradeIn(side="LONG", entry_price=10, position_size=1).to_record()
        assert isinstance(record, TradeRecord)
        assert record.pnl is None
        assert not record.is_closed
        assert record.leverage == 1.0


def test_stats_request_records():
    request = StatsRequest.model_validate({"trades": [{"pnl": 1}, {"pnl": None}]})
    records = request.records()
    assert [r.pnl for r in records] == [1.0, None]


# ---------------------------------------------------------------------------
# 3. Formatters
# ---------------------------------------------------------------------------

class TestFormatters:
    def test_price_and_size(self):
        assert format_price(1234.5) == "1234.50"
        assert format_price(0.12345) == "0.1235"
        assert format_price("oops") == "0.00"
        assert format_size(0.5) == "0.5000"

    def test_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-100) == "-$100.00"
        assert format_currency(-0.001) == "$0.00"
        assert format_currency(None) == "$0.00"

    def test_percentage(self):
        assert format_percentage(66.6666) == "66.7%"
        assert format_percentage(None) == "0.0%"

    def test_ratio(self):
        assert format_ratio(math.inf) == "∞"
        assert format_ratio(1.5) == "1.50"

    def test_json_safe(self):
        assert json_safe({"a": math.inf, "b": [math.nan, 1.0], "c": "x"}) == {"a": None, "b": [None, 1.0], "c": "x"}
