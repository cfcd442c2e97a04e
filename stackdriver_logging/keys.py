"""Property names reserved for the Stackdriver ``httpRequest`` object."""
from __future__ import annotations

REMOTE_IP = "remoteIp"
SERVER_IP = "serverIp"
USER_AGENT = "userAgent"
REFERER = "referer"
PROTOCOL = "protocol"
REQUEST_METHOD = "requestMethod"
STATUS = "status"

# Enumeration order of the keys inside ``httpRequest``.
HTTP_REQUEST_KEYS: tuple[str, ...] = (
    REMOTE_IP,
    SERVER_IP,
    USER_AGENT,
    REFERER,
    PROTOCOL,
    REQUEST_METHOD,
    STATUS,
)

_RESERVED = frozenset(HTTP_REQUEST_KEYS)


def is_reserved(key: str) -> bool:
    """Return ``True`` when ``key`` belongs inside ``httpRequest``."""

    return key in _RESERVED
