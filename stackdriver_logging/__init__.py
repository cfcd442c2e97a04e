"""Stackdriver-compatible JSON log formatting."""

from .config import Settings, get_settings
from .counting import CountingWriter
from .events import (
    DictionaryValue,
    LogEvent,
    MessageTemplate,
    ScalarValue,
    SequenceValue,
    StructureValue,
    capture,
)
from .formatter import (
    HttpRequest,
    InvalidArgumentError,
    ServiceContext,
    StackdriverJsonFormatter,
)
from .logging_config import StackdriverFormatter, configure_logging
from .severity import Level, severity_for
from .values import JsonValueFormatter, SerializationError

__all__ = [
    "CountingWriter",
    "DictionaryValue",
    "HttpRequest",
    "InvalidArgumentError",
    "JsonValueFormatter",
    "Level",
    "LogEvent",
    "MessageTemplate",
    "ScalarValue",
    "SequenceValue",
    "SerializationError",
    "ServiceContext",
    "Settings",
    "StackdriverFormatter",
    "StackdriverJsonFormatter",
    "StructureValue",
    "capture",
    "configure_logging",
    "get_settings",
    "severity_for",
]
