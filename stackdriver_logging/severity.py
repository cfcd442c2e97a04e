"""Mapping of log levels onto Stackdriver severities."""
from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Ordered log levels, lowest first."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Return the level matching a stdlib ``logging`` level number."""

        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


DEBUG = "DEBUG"
INFO = "INFO"
WARNING = "WARNING"
ERROR = "ERROR"
CRITICAL = "CRITICAL"
DEFAULT = "DEFAULT"

# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#LogSeverity
_SEVERITIES = {
    Level.TRACE: DEBUG,  # Stackdriver has no trace level
    Level.DEBUG: DEBUG,
    Level.INFO: INFO,
    Level.WARNING: WARNING,
    Level.ERROR: ERROR,
    Level.FATAL: CRITICAL,
}


def severity_for(level: object) -> str:
    """Return the Stackdriver severity for ``level``, ``DEFAULT`` if unknown."""

    if not isinstance(level, Level):
        return DEFAULT
    return _SEVERITIES.get(level, DEFAULT)
