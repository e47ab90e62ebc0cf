"""Multi-timeframe memory store."""

from trader_core.memory.tier import MemoryTier
from trader_core.memory.store import MemoryStore, calculate_importance

__all__ = [
    "MemoryTier",
    "MemoryStore",
    "calculate_importance",
]
