"""JSON snapshot persistence for engine state.

Stores one EngineSnapshot per process in a single file:
- memory tiers, the reserved pattern tier, performance statistics
- learning parameters (risk state and market regime)
- last-saved timestamp

Uses orjson for serialization. Writes go to a temporary file first and
are moved into place, so a crash never leaves a half-written snapshot.
Failures are logged and reported through return values; they never
stop the engine.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

import orjson
from pydantic import ValidationError

from trader_core.models import EngineSnapshot

logger = logging.getLogger(__name__)


def encode_snapshot(snapshot: EngineSnapshot) -> bytes:
    return orjson.dumps(snapshot.model_dump(mode="json"), option=orjson.OPT_INDENT_2)


def decode_snapshot(data: bytes) -> EngineSnapshot:
    return EngineSnapshot.model_validate(orjson.loads(data))


class StateStore:
    """File-backed snapshot store."""

    def __init__(self, path: str | Path = "bot_data.json"):
        self.path = Path(path)

    def save(self, snapshot: EngineSnapshot, now_ms: int | None = None) -> bool:
        """Write a snapshot, stamping ``last_saved``.

        Returns:
            True if saved successfully
        """
        stamped = snapshot.model_copy(
            update={"last_saved": now_ms if now_ms is not None else int(time.time() * 1000)}
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(encode_snapshot(stamped))
            os.replace(tmp_path, self.path)
        except (OSError, TypeError) as e:
            logger.error("Failed to save engine state to %s: %s", self.path, e)
            return False

        logger.info("Engine state saved to %s", self.path)
        return True

    def load(self) -> EngineSnapshot | None:
        """Read the snapshot.

        Returns:
            EngineSnapshot, or None if missing or unreadable
        """
        if not self.path.exists():
            logger.info("No existing state at %s, starting fresh", self.path)
            return None

        try:
            snapshot = decode_snapshot(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Failed to load engine state from %s: %s. Starting fresh.", self.path, e)
            return None

        logger.info("Engine state loaded from %s", self.path)
        return snapshot
