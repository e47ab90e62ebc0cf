"""Engine context: the mutable state one engine instance owns.

Risk state, performance statistics, memory and the market-regime label
live here and are passed explicitly to the sizer and adaptation
tracker. Independent instances share nothing, which keeps tests
isolated.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trader_core.memory import MemoryStore
from trader_core.models import (
    EngineSnapshot,
    LearningParams,
    MemorySnapshot,
    PerformanceStats,
    RiskState,
)
from trader_core.models.state import DEFAULT_REGIME


@dataclass
class EngineContext:
    """Process-wide engine state, made explicit."""

    risk_state: RiskState = field(default_factory=RiskState)
    performance: PerformanceStats = field(default_factory=PerformanceStats)
    memory: MemoryStore = field(default_factory=MemoryStore)
    market_regime: str = DEFAULT_REGIME

    def snapshot(self, last_saved: int = 0) -> EngineSnapshot:
        """Build a persistable copy of the current state."""
        memory = MemorySnapshot(performance=self.performance.model_copy())
        self.memory.fill_snapshot(memory)

        return EngineSnapshot(
            memory=memory,
            learning_params=LearningParams(
                learning_rate=self.risk_state.learning_rate,
                confidence=self.risk_state.confidence,
                adaptation_speed=self.risk_state.adaptation_speed,
                market_regime=self.market_regime,
            ),
            last_saved=last_saved,
        )

    def restore(self, snapshot: EngineSnapshot) -> None:
        """Replace the current state with a snapshot's contents."""
        params = snapshot.learning_params
        self.risk_state = RiskState(
            confidence=params.confidence,
            learning_rate=params.learning_rate,
            adaptation_speed=params.adaptation_speed,
        )
        self.performance = snapshot.memory.performance.model_copy()
        self.market_regime = params.market_regime
        self.memory.load_snapshot(snapshot.memory)

    @classmethod
    def from_snapshot(cls, snapshot: EngineSnapshot, memory: MemoryStore | None = None) -> "EngineContext":
        context = cls(memory=memory or MemoryStore())
        context.restore(snapshot)
        return context
