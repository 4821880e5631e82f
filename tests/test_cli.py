"""Tests for the stats CLI command."""

import json

import pytest

from journal import cli

TRADES = [
    {"tradeDate": "2024-01-01T10:00:00Z", "pnl": 100},
    {"tradeDate": "2024-01-02T10:00:00Z", "pnl": 200},
    {"tradeDate": "2024-01-03T10:00:00Z", "pnl": None},
]


@pytest.fixture
def trades_file(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(TRADES))
    return path


def test_stats_report(trades_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["journal.cli", "stats", str(trades_file)])
    cli.main()
    out = capsys.readouterr().out
    assert "Total trades:       3 (2 closed)" in out
    assert "Win rate:           100.0%" in out
    assert "Total P&L:          $300.00" in out
    assert "Profit factor:      ∞" in out
    assert "Current streak:     2 win" in out


def test_stats_json(trades_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["journal.cli", "stats", str(trades_file), "--json"])
    cli.main()
    data = json.loads(capsys.readouterr().out)
    assert data["totalTrades"] == 3
    assert data["profitFactor"] is None


def test_wrapped_trades_object(tmp_path):
    path = tmp_path / "wrapped.json"
    path.write_text(json.dumps({"trades": TRADES}))
    assert len(cli.load_trades(path).trades) == 3


def test_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.argv", ["journal.cli", "stats", str(tmp_path / "nope.json")])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 1


def test_unknown_command(monkeypatch):
    monkeypatch.setattr("sys.argv", ["journal.cli", "frobnicate"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 1
