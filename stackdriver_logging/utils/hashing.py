"""Stable hashing of message templates."""
from __future__ import annotations

_MASK = 0xFFFFFFFF


def event_id_hash(text: str) -> int:
    """Jenkins one-at-a-time hash of ``text`` over its UTF-16 code units."""

    data = text.encode("utf-16-le", "surrogatepass")
    value = 0
    for index in range(0, len(data), 2):
        value = (value + (data[index] | (data[index + 1] << 8))) & _MASK
        value = (value + (value << 10)) & _MASK
        value ^= value >> 6
    value = (value + (value << 3)) & _MASK
    value ^= value >> 11
    value = (value + (value << 15)) & _MASK
    return value


def fingerprint(template_text: str) -> str:
    """Return the eight hex digit fingerprint of a template."""

    return f"{event_id_hash(template_text):08x}"
