"""Console report formatting for engine performance and configuration."""

from __future__ import annotations

from trader_core.models import InstrumentConfig, PerformanceStats, RiskState

from trader_app.config import Settings


class ReportFormatter:
    """Format engine state for display."""

    @staticmethod
    def format_performance(stats: PerformanceStats, risk_state: RiskState) -> str:
        """Performance report as a multi-line string."""
        lines = [
            "",
            "PERFORMANCE REPORT",
            "=" * 40,
            f"Total Trades:      {stats.total_trades}",
            f"Profitable Trades: {stats.profitable_trades}",
            f"Win Rate:          {stats.win_rate * 100:.1f}%",
            f"Total Return:      {stats.cumulative_return * 100:.2f}%",
            f"Average Return:    {stats.average_return * 100:.2f}%",
            f"Best Trade:        {stats.best_trade * 100:.2f}%",
            f"Worst Trade:       {stats.worst_trade * 100:.2f}%",
            f"Bot Confidence:    {risk_state.confidence * 100:.1f}%",
            f"Learning Rate:     {risk_state.learning_rate:.4f}",
        ]
        return "\n".join(lines)

    @staticmethod
    def format_configuration(settings: Settings, instruments: list[InstrumentConfig]) -> str:
        """Startup configuration banner."""
        lines = [
            "",
            "Configuration:",
            f"   Trading Pairs:  {', '.join(i.pair for i in instruments) or '(none)'}",
            f"   Min Profit:     {settings.min_profit_threshold * 100:.1f}%",
            f"   Max Slippage:   {settings.max_slippage * 100:.2f}%",
            f"   Max Trade:      {settings.max_trade_amount}",
            f"   Confidence Gate:{settings.confidence_threshold * 100:>5.1f}%",
            f"   Cycle Interval: {settings.cycle_interval:.0f}s",
            f"   State File:     {settings.state_path}",
        ]
        return "\n".join(lines)
