"""Time helpers."""
from __future__ import annotations

from datetime import UTC, datetime


def to_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, treating naive datetimes as already UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_round_trip(value: datetime) -> str:
    """Format a UTC round-trip timestamp with seven fractional digits.

    ``2024-01-01T00:30:00.1234560Z``
    """

    utc = to_utc(value)
    return f"{utc.year:04d}-{utc:%m-%dT%H:%M:%S}.{utc.microsecond:06d}0Z"
