"""Business services."""

from trader_app.services.trade_executor import PaperTradeExecutor, TradeExecutor
from trader_app.services.orchestrator import (
    AnalysisOrchestrator,
    AnalysisResult,
    AnalysisStatus,
    OrchestratorState,
    PriceHistoryProvider,
)

__all__ = [
    "PaperTradeExecutor",
    "TradeExecutor",
    "AnalysisOrchestrator",
    "AnalysisResult",
    "AnalysisStatus",
    "OrchestratorState",
    "PriceHistoryProvider",
]
