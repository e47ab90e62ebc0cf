"""Memory store data models."""

from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MemoryTierName(str, Enum):
    """Time-horizon partitions of the memory store."""

    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


TIER_RETENTION: dict[MemoryTierName, timedelta] = {
    MemoryTierName.IMMEDIATE: timedelta(days=1),
    MemoryTierName.SHORT_TERM: timedelta(days=7),
    MemoryTierName.MEDIUM_TERM: timedelta(days=30),
    MemoryTierName.LONG_TERM: timedelta(days=365),
}

MAX_ENTRIES_PER_KEY = 1000
MIN_IMPORTANCE = 1.0
MAX_IMPORTANCE = 3.0


class MemoryEntry(BaseModel):
    """A recorded observation. Never mutated after creation, only purged."""

    model_config = ConfigDict(frozen=True)

    timestamp: int  # epoch milliseconds
    payload: dict[str, Any] = Field(default_factory=dict)
    importance: float = MIN_IMPORTANCE
    verified: bool = False
