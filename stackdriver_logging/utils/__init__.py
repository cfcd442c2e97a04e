"""Utility helpers."""
from .hashing import event_id_hash, fingerprint  # noqa: F401
from .time import format_round_trip, to_utc  # noqa: F401
