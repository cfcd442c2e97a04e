"""Stdlib ``logging`` integration for the Stackdriver formatter."""
from __future__ import annotations

import io
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Dict, Mapping

from .config import Settings, get_settings
from .context import get_http_request
from .events import LogEvent, MessageTemplate, PropertyValue, capture
from .formatter import SOURCE_CONTEXT_PROPERTY, StackdriverJsonFormatter
from .severity import Level

# Attributes every LogRecord has; anything else arrived through ``extra``.
_DEFAULT_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class _RecordTemplate(MessageTemplate):
    """Template for ``%``-style records, rendered by the record itself."""

    def __init__(self, record: logging.LogRecord) -> None:
        super().__init__(str(record.msg))
        self._record = record

    def render(self, properties: Mapping[str, PropertyValue]) -> str:
        return self._record.getMessage()


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Convert a ``LogRecord`` into a ``LogEvent``."""

    properties: Dict[str, PropertyValue] = {SOURCE_CONTEXT_PROPERTY: capture(record.name)}
    for key, value in record.__dict__.items():
        if key not in _DEFAULT_RECORD_ATTRS:
            properties[key] = capture(value)

    if record.args:
        template: MessageTemplate = _RecordTemplate(record)
    else:
        template = MessageTemplate(str(record.msg))

    exception: Any = None
    if record.exc_info and record.exc_info[1] is not None:
        exception = record.exc_info[1]
    elif record.exc_text:
        exception = record.exc_text

    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created, tz=UTC),
        level=Level.from_logging(record.levelno),
        message_template=template,
        properties=properties,
        exception=exception,
    )


class StackdriverFormatter(logging.Formatter):
    """Render log records as Stackdriver JSON lines."""

    def __init__(self, json_formatter: StackdriverJsonFormatter | None = None) -> None:
        super().__init__()
        self.json_formatter = json_formatter or StackdriverJsonFormatter()

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        buffer = io.StringIO()
        self.json_formatter.format(record_to_event(record), buffer, get_http_request())
        # the handler terminates the last line
        return buffer.getvalue().rstrip("\n")


def build_formatter(settings: Settings) -> StackdriverJsonFormatter:
    return StackdriverJsonFormatter(
        check_for_payload_limit=settings.check_payload_limit,
        include_message_template=settings.include_message_template,
        entry_limit_bytes=settings.entry_limit_bytes,
        service_context=settings.service_context,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure the root logger to write Stackdriver JSON to stdout."""

    settings = settings or get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StackdriverFormatter(build_formatter(settings)))
    logging.basicConfig(level=settings.log_level, handlers=[handler], force=True)
