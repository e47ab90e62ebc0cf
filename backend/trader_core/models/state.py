"""Engine state models: risk parameters, performance, persisted snapshot."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from trader_core.models.memory import MemoryEntry
from trader_core.models.trade import TradeOutcome

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0
MIN_LEARNING_RATE = 0.001
MAX_LEARNING_RATE = 0.1

# Outcomes closer than this to the expected return count as accurate
ACCURATE_ERROR = 0.01
CONFIDENCE_STEP = 0.02
ERROR_PENALTY = 0.1

DEFAULT_REGIME = "UNKNOWN"


class RiskState(BaseModel):
    """Self-tuned risk parameters, mutated only by adaptation."""

    confidence: float = 0.5
    learning_rate: float = 0.01
    adaptation_speed: float = 0.1  # persisted, not consumed

    def adapt(self, profit: float, expected_return: float) -> float:
        """Move confidence toward accurate predictions.

        Returns the prediction error that drove the update.
        """
        error = abs(profit - expected_return)

        if error < ACCURATE_ERROR:
            self.confidence = min(MAX_CONFIDENCE, self.confidence + CONFIDENCE_STEP)
        else:
            self.confidence = max(MIN_CONFIDENCE, self.confidence - error * ERROR_PENALTY)

        self.learning_rate = max(
            MIN_LEARNING_RATE,
            min(MAX_LEARNING_RATE, self.learning_rate * (1 + error)),
        )
        return error


class PerformanceStats(BaseModel):
    """Cumulative trade statistics."""

    total_trades: int = 0
    profitable_trades: int = 0
    cumulative_return: float = 0.0
    win_rate: float = 0.0
    average_return: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0

    def record(self, outcome: TradeOutcome) -> None:
        """Record a completed trade outcome.

        Failed trades are counted but do not move the return figures.
        """
        self.total_trades += 1

        if outcome.success:
            profit = outcome.realized_profit
            self.cumulative_return += profit
            if profit > 0:
                self.profitable_trades += 1
                if profit > self.best_trade:
                    self.best_trade = profit
            elif profit < self.worst_trade:
                self.worst_trade = profit

        self.win_rate = self.profitable_trades / self.total_trades
        self.average_return = self.cumulative_return / self.total_trades


# =============================================================================
# Persisted snapshot
# =============================================================================

class MemorySnapshot(BaseModel):
    immediate: dict[str, list[MemoryEntry]] = Field(default_factory=dict)
    short_term: dict[str, list[MemoryEntry]] = Field(default_factory=dict)
    medium_term: dict[str, list[MemoryEntry]] = Field(default_factory=dict)
    long_term: dict[str, list[MemoryEntry]] = Field(default_factory=dict)
    patterns: dict[str, Any] = Field(default_factory=dict)
    performance: PerformanceStats = Field(default_factory=PerformanceStats)


class LearningParams(BaseModel):
    learning_rate: float = 0.01
    confidence: float = 0.5
    adaptation_speed: float = 0.1
    market_regime: str = DEFAULT_REGIME


class EngineSnapshot(BaseModel):
    """Everything the engine persists across restarts."""

    memory: MemorySnapshot = Field(default_factory=MemorySnapshot)
    learning_params: LearningParams = Field(default_factory=LearningParams)
    last_saved: int = 0  # epoch milliseconds
