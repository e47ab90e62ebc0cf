"""Tests for report formatting and the command-line entry point."""

import pytest

from trader_app import main as cli
from trader_app.config import Settings
from trader_app.report import ReportFormatter
from trader_app.storage import StateStore
from trader_core.context import EngineContext
from trader_core.models import (
    DEFAULT_INSTRUMENTS,
    PerformanceStats,
    RiskState,
    TradeOutcome,
)


class TestReportFormatter:
    def test_performance_report(self):
        stats = PerformanceStats()
        stats.record(TradeOutcome(success=True, profit=0.05))
        stats.record(TradeOutcome(success=True, profit=-0.03))

        report = ReportFormatter.format_performance(stats, RiskState(confidence=0.62))

        assert "PERFORMANCE REPORT" in report
        assert "Total Trades:      2" in report
        assert "Profitable Trades: 1" in report
        assert "Win Rate:          50.0%" in report
        assert "Total Return:      2.00%" in report
        assert "Best Trade:        5.00%" in report
        assert "Worst Trade:       -3.00%" in report
        assert "Bot Confidence:    62.0%" in report

    def test_empty_report(self):
        report = ReportFormatter.format_performance(PerformanceStats(), RiskState())
        assert "Win Rate:          0.0%" in report

    def test_configuration_banner(self):
        banner = ReportFormatter.format_configuration(
            Settings(_env_file=None), list(DEFAULT_INSTRUMENTS)
        )
        assert "ETH/USDC, UNI/ETH" in banner
        assert "Min Profit:     1.5%" in banner
        assert "bot_data.json" in banner

    def test_configuration_banner_without_instruments(self):
        banner = ReportFormatter.format_configuration(Settings(_env_file=None), [])
        assert "(none)" in banner


class TestCli:
    def test_parse_args(self):
        args = cli.parse_args(["--once", "--state", "s.json", "-y"])
        assert args.once is True
        assert args.state == "s.json"
        assert args.yes is True
        assert args.report is False

    def test_report_from_saved_state(self, tmp_path, capsys):
        path = tmp_path / "bot_data.json"
        context = EngineContext()
        context.performance.record(TradeOutcome(success=True, profit=0.04))
        StateStore(path).save(context.snapshot())

        assert cli.main(["--report", "--state", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Total Trades:      1" in out
        assert "Win Rate:          100.0%" in out

    def test_report_without_state(self, tmp_path, capsys):
        assert cli.main(["--report", "--state", str(tmp_path / "none.json")]) == 1
        assert "No saved state found" in capsys.readouterr().out

    def test_invalid_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("MAX_SLIPPAGE", "0.9")
        cli.get_settings.cache_clear()
        try:
            assert cli.main(["--report"]) == 2
        finally:
            cli.get_settings.cache_clear()
        assert "Configuration errors" in capsys.readouterr().out
