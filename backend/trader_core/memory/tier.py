"""Bounded, age- and importance-ranked event log for one time horizon.

One ``MemoryTier`` holds an ordered list of entries per key. Every
append runs eviction for that key:

1. Purge entries older than the tier's retention window.
2. If more than ``capacity`` remain, keep the ``capacity`` most
   important ones. Ties keep the earlier entry. Survivors stay in
   chronological order.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from trader_core.models import MAX_ENTRIES_PER_KEY, MemoryEntry

logger = logging.getLogger(__name__)


class MemoryTier:
    """Per-key entry lists with time-based purge and importance cap.

    Parameters
    ----------
    retention : timedelta
        Entries older than this (relative to the write time) are purged
        on the next write to the same key.
    capacity : int
        Maximum entries kept per key.
    """

    def __init__(
        self,
        retention: timedelta,
        capacity: int = MAX_ENTRIES_PER_KEY,
    ):
        self.retention = retention
        self.capacity = capacity
        self._entries: dict[str, list[MemoryEntry]] = {}

    @property
    def retention_ms(self) -> int:
        return int(self.retention.total_seconds() * 1000)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, key: str, entry: MemoryEntry, now_ms: int) -> None:
        """Append an entry for ``key`` and run eviction for that key."""
        self._entries.setdefault(key, []).append(entry)
        self.evict(key, now_ms)

    def evict(self, key: str, now_ms: int) -> int:
        """Apply the age purge and importance cap to one key.

        Returns the number of entries removed.
        """
        entries = self._entries.get(key)
        if entries is None:
            return 0

        max_age = self.retention_ms
        kept = [e for e in entries if now_ms - e.timestamp <= max_age]

        if len(kept) > self.capacity:
            ranked = sorted(range(len(kept)), key=lambda i: kept[i].importance, reverse=True)
            survivors = sorted(ranked[: self.capacity])
            kept = [kept[i] for i in survivors]

        removed = len(entries) - len(kept)
        self._entries[key] = kept
        if removed:
            logger.debug("Evicted %d entries for %s", removed, key)
        return removed

    def entries(self, key: str) -> list[MemoryEntry]:
        """Entries for a key, oldest first (a copy)."""
        return list(self._entries.get(key, []))

    def latest(self, key: str) -> MemoryEntry | None:
        entries = self._entries.get(key)
        return entries[-1] if entries else None

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def count(self, key: str | None = None) -> int:
        """Number of entries for one key, or across all keys."""
        if key is not None:
            return len(self._entries.get(key, []))
        return sum(len(v) for v in self._entries.values())

    # ------------------------------------------------------------------
    # Snapshot support
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, list[MemoryEntry]]:
        return {key: list(entries) for key, entries in self._entries.items()}

    def load(self, data: dict[str, list[MemoryEntry]]) -> None:
        """Replace contents from a snapshot (no eviction is applied)."""
        self._entries = {key: list(entries) for key, entries in data.items()}

    def __len__(self) -> int:
        return self.count()
