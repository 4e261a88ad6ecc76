from datetime import date

import pytest

from conftest import FakeSource
from insight_cli import main as cli
from insight_core.auth import AuthSession
from insight_core.orchestrator import AnalysisOrchestrator


class StubAuth:
    def __init__(self, valid=True):
        self.valid = valid

    def is_valid(self, session):
        return self.valid


def _prompts(monkeypatch, symbols, choices=()):
    symbols, choices = list(symbols), list(choices)
    monkeypatch.setattr(cli, "prompt_symbol", lambda username: symbols.pop(0))
    monkeypatch.setattr(cli, "prompt_menu_choice", lambda: choices.pop(0))
    monkeypatch.setattr(cli, "pause", lambda: None)


def test_show_overview(capsys, sample_series):
    report = AnalysisOrchestrator(FakeSource(series=sample_series)).analyze(sample_series)
    cli.show_overview(report)
    out = capsys.readouterr().out
    assert "Stock Analysis for AAPL" in out
    assert "Current Price: $105.00" in out
    assert "Price Change: +$5.00 (+5.00%)" in out
    assert "Price Chart - Last 4 Sessions" in out
    assert "Historical Price Comparison" in out
    assert "3 months" in out


def test_fetch_failure_message_and_quit(monkeypatch, capsys):
    _prompts(monkeypatch, ["BAD", None])
    orchestrator = AnalysisOrchestrator(FakeSource())
    session = AuthSession("tok", "alice", expires_at=10 ** 12)

    expired = cli.symbol_loop(orchestrator, StubAuth(), session, "alice")

    out = capsys.readouterr().out
    assert expired is False
    assert "Failed to fetch data for BAD" in out
    assert "Thank you for using Alpha Insight!" in out


def test_expired_session_returns_to_login(monkeypatch, capsys):
    _prompts(monkeypatch, [])
    session = AuthSession("tok", "alice", expires_at=0)
    expired = cli.symbol_loop(AnalysisOrchestrator(FakeSource()), StubAuth(valid=False), session, "alice")
    assert expired is True
    assert session.access_token == ""
    assert "session has expired" in capsys.readouterr().out


def test_menu_basic_analysis_then_return(monkeypatch, capsys, sample_series):
    _prompts(monkeypatch, ["AAPL", None], choices=["8", "11"])
    source = FakeSource(series=sample_series, closes={date.today(): 100.0})
    session = AuthSession("tok", "alice", expires_at=10 ** 12)

    assert cli.symbol_loop(AnalysisOrchestrator(source), StubAuth(), session, "alice") is False

    out = capsys.readouterr().out
    assert "Basic Analysis for AAPL" in out
    assert "Price is ABOVE average by 2.94%" in out
    assert "NEUTRAL momentum" in out
    assert "MODERATE volatility (1.83%)" in out
    # overview drawn once after the fetch and again after the action
    assert out.count("Historical Price Comparison") == 2


def test_statement_menu_action(monkeypatch, capsys, sample_series):
    monkeypatch.setattr(
        cli, "fetch_statement",
        lambda symbol, endpoint: [{"date": "2023-09-30", "revenue": 2.5e9, "netIncome": None}],
    )
    report = AnalysisOrchestrator(FakeSource(series=sample_series)).analyze(sample_series)
    cli.run_menu_action("1", report)
    out = capsys.readouterr().out
    assert "Income Statement:" in out
    assert "2.50 B" in out
    assert "N/A" in out


def test_narrative_failure_message(capsys, sample_series):
    report = AnalysisOrchestrator(FakeSource(series=sample_series)).analyze(sample_series)
    cli.run_menu_action("10", report)
    assert "Failed to perform Groq AI analysis" in capsys.readouterr().out


def test_comparison_colours_zero_change_as_gain(monkeypatch, capsys):
    from insight_cli import terminal_ui as ui
    from insight_core.indicators import ComparisonRow

    monkeypatch.setattr(ui, "GREEN", "<up>")
    monkeypatch.setattr(ui, "RED", "<down>")
    ui.print_comparison([
        ComparisonRow("1 day", 24, 0.0),
        ComparisonRow("1 week", 168, -1.5),
    ])
    out = capsys.readouterr().out
    assert "<up>+    0.00%" in out
    assert "<down>    -1.50%" in out
