"""Data storage layer."""

from trader_app.storage.state_store import StateStore, decode_snapshot, encode_snapshot

__all__ = [
    "StateStore",
    "decode_snapshot",
    "encode_snapshot",
]
