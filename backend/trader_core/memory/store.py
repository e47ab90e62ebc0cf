"""Multi-timeframe memory store.

Four ``MemoryTier`` instances (immediate, short, medium and long term)
that differ only in retention window, plus a ``patterns`` mapping
reserved for higher-level aggregates. Nothing populates ``patterns``
yet; it is carried through snapshots untouched.

The store is an append-and-prune audit log of decisions.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from trader_core.models import (
    MAX_ENTRIES_PER_KEY,
    TIER_RETENTION,
    MemoryEntry,
    MemorySnapshot,
    MemoryTierName,
)
from trader_core.models.memory import MAX_IMPORTANCE, MIN_IMPORTANCE
from trader_core.memory.tier import MemoryTier

logger = logging.getLogger(__name__)

Clock = Callable[[], float]  # returns epoch seconds


def calculate_importance(payload: dict[str, Any]) -> float:
    """
    Score how worth keeping an observation is.

    Multiplicative from a base of 1.0:
      - x1.5 if |price_change| > 0.05
      - x1.3 if profit > 0
      - x1.2 if volatility > 0.15
      - x2.0 if regime_change is set
    Capped at 3.0.
    """
    importance = MIN_IMPORTANCE

    price_change = payload.get("price_change")
    if price_change and abs(price_change) > 0.05:
        importance *= 1.5

    profit = payload.get("profit")
    if profit and profit > 0:
        importance *= 1.3

    vol = payload.get("volatility")
    if vol and vol > 0.15:
        importance *= 1.2

    if payload.get("regime_change"):
        importance *= 2.0

    return min(importance, MAX_IMPORTANCE)


class MemoryStore:
    """Tiered, importance-ranked event log keyed by instrument."""

    def __init__(
        self,
        capacity: int = MAX_ENTRIES_PER_KEY,
        clock: Clock = time.time,
    ):
        self._clock = clock
        self.tiers: dict[MemoryTierName, MemoryTier] = {
            name: MemoryTier(retention=retention, capacity=capacity)
            for name, retention in TIER_RETENTION.items()
        }
        self.patterns: dict[str, Any] = {}

    def now_ms(self) -> int:
        return int(self._clock() * 1000)

    def store(
        self,
        key: str,
        payload: dict[str, Any],
        tier: MemoryTierName = MemoryTierName.IMMEDIATE,
    ) -> MemoryEntry:
        """
        Record an observation for ``key`` in one tier.

        Args:
            key: Instrument key (market-data id)
            payload: Structured data (price, signal, confidence, ...)
            tier: Time horizon to record into

        Returns:
            The stored MemoryEntry
        """
        now = self.now_ms()
        entry = MemoryEntry(
            timestamp=now,
            payload=dict(payload),
            importance=calculate_importance(payload),
        )
        self.tiers[MemoryTierName(tier)].append(key, entry, now)
        return entry

    def entries(self, key: str, tier: MemoryTierName = MemoryTierName.IMMEDIATE) -> list[MemoryEntry]:
        return self.tiers[MemoryTierName(tier)].entries(key)

    def latest(self, key: str, tier: MemoryTierName = MemoryTierName.IMMEDIATE) -> MemoryEntry | None:
        return self.tiers[MemoryTierName(tier)].latest(key)

    def keys(self, tier: MemoryTierName = MemoryTierName.IMMEDIATE) -> list[str]:
        return self.tiers[MemoryTierName(tier)].keys()

    def count(self, tier: MemoryTierName | None = None) -> int:
        """Entries in one tier, or across all tiers."""
        if tier is not None:
            return self.tiers[MemoryTierName(tier)].count()
        return sum(t.count() for t in self.tiers.values())

    # ------------------------------------------------------------------
    # Snapshot support
    # ------------------------------------------------------------------

    def fill_snapshot(self, snapshot: MemorySnapshot) -> None:
        """Copy tier contents and patterns into a snapshot model."""
        snapshot.immediate = self.tiers[MemoryTierName.IMMEDIATE].to_dict()
        snapshot.short_term = self.tiers[MemoryTierName.SHORT_TERM].to_dict()
        snapshot.medium_term = self.tiers[MemoryTierName.MEDIUM_TERM].to_dict()
        snapshot.long_term = self.tiers[MemoryTierName.LONG_TERM].to_dict()
        snapshot.patterns = dict(self.patterns)

    def load_snapshot(self, snapshot: MemorySnapshot) -> None:
        self.tiers[MemoryTierName.IMMEDIATE].load(snapshot.immediate)
        self.tiers[MemoryTierName.SHORT_TERM].load(snapshot.short_term)
        self.tiers[MemoryTierName.MEDIUM_TERM].load(snapshot.medium_term)
        self.tiers[MemoryTierName.LONG_TERM].load(snapshot.long_term)
        self.patterns = dict(snapshot.patterns)
        logger.debug("Loaded %d memory entries from snapshot", self.count())
