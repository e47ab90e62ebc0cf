"""Data models for the trading engine."""

from trader_core.models.config import (
    DEFAULT_INSTRUMENTS,
    EngineConfig,
    InstrumentConfig,
    TokenConfig,
)
from trader_core.models.indicators import (
    BollingerBands,
    IndicatorSet,
    MacdValues,
    StochasticValues,
)
from trader_core.models.memory import (
    MAX_ENTRIES_PER_KEY,
    TIER_RETENTION,
    MemoryEntry,
    MemoryTierName,
)
from trader_core.models.price import PricePoint, closes
from trader_core.models.signal import Action, SignalFactor, TradeSignal
from trader_core.models.state import (
    EngineSnapshot,
    LearningParams,
    MemorySnapshot,
    PerformanceStats,
    RiskState,
)
from trader_core.models.trade import TradeOutcome

__all__ = [
    "DEFAULT_INSTRUMENTS",
    "EngineConfig",
    "InstrumentConfig",
    "TokenConfig",
    "BollingerBands",
    "IndicatorSet",
    "MacdValues",
    "StochasticValues",
    "MAX_ENTRIES_PER_KEY",
    "TIER_RETENTION",
    "MemoryEntry",
    "MemoryTierName",
    "PricePoint",
    "closes",
    "Action",
    "SignalFactor",
    "TradeSignal",
    "EngineSnapshot",
    "LearningParams",
    "MemorySnapshot",
    "PerformanceStats",
    "RiskState",
    "TradeOutcome",
]
