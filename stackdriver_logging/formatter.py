"""JSON formatter producing Stackdriver-compatible log entries.

Each event is written as one line of JSON using the field names Cloud
Logging understands (``timestamp``, ``message``, ``severity``,
``httpRequest``...). The line is measured while it is written, and an entry
that crosses the configured size budget is followed by a short CRITICAL
entry so that oversized lines can be found and fixed at their source.
"""
from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

from . import keys
from .counting import CountingWriter
from .events import LogEvent, MessageTemplate, PropertyValue, ScalarValue
from .severity import Level, severity_for
from .utils import fingerprint, format_round_trip
from .values import JsonValueFormatter, write_quoted_json_string

# Cloud Logging documents 256 KiB per entry; stay well below it.
DEFAULT_ENTRY_LIMIT_BYTES = 200 * 1024

# Worst case bytes per character once encoded.
BYTES_PER_CHARACTER = 4

OVERSIZED_ENTRY_MESSAGE = (
    "An attempt was made to write a log event to Stackdriver that exceeds the "
    "entry size limit - check the logs for the oversized entry just prior to "
    "this and fix it at source"
)

ERROR_REPORTING_TYPE = (
    "type.googleapis.com/google.devtools.clouderrorreporting.v1beta1.ReportedErrorEvent"
)
SOURCE_CONTEXT_PROPERTY = "SourceContext"


class InvalidArgumentError(ValueError):
    """Raised when a required formatter argument is missing."""


@dataclass(frozen=True)
class HttpRequest:
    """HTTP request details rendered into the ``httpRequest`` object."""

    remote_ip: Optional[str] = None
    server_ip: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    protocol: Optional[str] = None
    request_method: Optional[str] = None
    status: Optional[int] = None

    def as_properties(self) -> dict[str, PropertyValue]:
        """Return the populated fields keyed by their ``httpRequest`` names."""

        fields = {
            keys.REMOTE_IP: self.remote_ip,
            keys.SERVER_IP: self.server_ip,
            keys.USER_AGENT: self.user_agent,
            keys.REFERER: self.referer,
            keys.PROTOCOL: self.protocol,
            keys.REQUEST_METHOD: self.request_method,
            keys.STATUS: self.status,
        }
        return {name: ScalarValue(value) for name, value in fields.items() if value is not None}


@dataclass(frozen=True)
class ServiceContext:
    """Identifies the service for Error Reporting."""

    service: str
    version: Optional[str] = None


class StackdriverJsonFormatter:
    """Formats log events as newline-delimited Stackdriver JSON."""

    def __init__(
        self,
        check_for_payload_limit: bool = True,
        include_message_template: bool = False,
        value_formatter: JsonValueFormatter | None = None,
        entry_limit_bytes: int = DEFAULT_ENTRY_LIMIT_BYTES,
        service_context: ServiceContext | None = None,
    ) -> None:
        self.check_for_payload_limit = check_for_payload_limit
        self.include_message_template = include_message_template
        self.value_formatter = value_formatter or JsonValueFormatter(type_tag_name="$type")
        self.entry_limit_bytes = entry_limit_bytes
        self.service_context = service_context

    def format(
        self,
        log_event: LogEvent,
        output: TextIO,
        http_request: HttpRequest | None = None,
    ) -> None:
        """Format ``log_event`` into ``output`` followed by a newline."""

        self.format_event(log_event, output, self.value_formatter, http_request)

    def format_event(
        self,
        log_event: LogEvent,
        output: TextIO,
        value_formatter: JsonValueFormatter,
        http_request: HttpRequest | None = None,
    ) -> None:
        """Format ``log_event`` using ``value_formatter`` for property values.

        When the entry crosses the size budget, a single oversized-entry
        notice is written to ``output`` straight after it.
        """

        if log_event is None:
            raise InvalidArgumentError("log_event must not be None")
        if output is None:
            raise InvalidArgumentError("output must not be None")
        if value_formatter is None:
            raise InvalidArgumentError("value_formatter must not be None")

        counting = CountingWriter(output)
        self._write_entry(log_event, counting, value_formatter, http_request)

        if not self.check_for_payload_limit:
            return
        if counting.character_count * BYTES_PER_CHARACTER < self.entry_limit_bytes:
            return

        # The notice carries no user data, so it is never checked again.
        self._write_entry(oversized_entry_notice(log_event), output, value_formatter, None)

    def _write_entry(
        self,
        log_event: LogEvent,
        output: TextIO,
        value_formatter: JsonValueFormatter,
        http_request: HttpRequest | None,
    ) -> None:
        output.write('{"timestamp":"')
        output.write(format_round_trip(log_event.timestamp))

        output.write('","message":')
        write_quoted_json_string(log_event.render_message(), output)

        output.write(',"fingerprint":"')
        output.write(fingerprint(log_event.message_template.text))
        output.write('"')

        output.write(',"severity":"')
        output.write(severity_for(log_event.level))
        output.write('"')

        if log_event.exception is not None:
            output.write(',"exception":')
            write_quoted_json_string(_exception_text(log_event.exception), output)

        if self.include_message_template:
            output.write(',"messageTemplate":')
            write_quoted_json_string(log_event.message_template.text, output)

        if self.service_context is not None and _is_error(log_event.level):
            self._write_error_reporting(log_event, output)

        self._write_http_request(log_event.properties, http_request, output, value_formatter)

        for name, value in log_event.properties.items():
            if keys.is_reserved(name):
                continue
            if name.startswith("@"):
                # "@" marks type tags in the value formatter's output
                name = "@" + name
            write_key_value(output, value_formatter, name, value)

        output.write("}\n")

    def _write_error_reporting(self, log_event: LogEvent, output: TextIO) -> None:
        output.write(',"@type":')
        write_quoted_json_string(ERROR_REPORTING_TYPE, output)
        output.write(',"serviceContext":{"service":')
        write_quoted_json_string(self.service_context.service, output)
        if self.service_context.version:
            output.write(',"version":')
            write_quoted_json_string(self.service_context.version, output)
        output.write("}")

        source = log_event.properties.get(SOURCE_CONTEXT_PROPERTY)
        if isinstance(source, ScalarValue) and source.value is not None:
            output.write(',"context":{"reportLocation":{"functionName":')
            write_quoted_json_string(str(source.value), output)
            output.write("}}")

    @staticmethod
    def _write_http_request(
        properties: Mapping[str, PropertyValue],
        http_request: HttpRequest | None,
        output: TextIO,
        value_formatter: JsonValueFormatter,
    ) -> None:
        explicit = http_request.as_properties() if http_request else {}
        output.write(',"httpRequest":{')
        first = True
        for key in keys.HTTP_REQUEST_KEYS:
            value = explicit.get(key)
            if value is None:
                value = properties.get(key)
            if value is None or (isinstance(value, ScalarValue) and value.value is None):
                continue
            write_key_value(output, value_formatter, key, value, prepend_comma=not first)
            first = False
        output.write("}")


def write_key_value(
    output: TextIO,
    value_formatter: JsonValueFormatter,
    key: str,
    value: PropertyValue,
    prepend_comma: bool = True,
) -> None:
    """Write ``"key":value`` with an optional leading comma."""

    if prepend_comma:
        output.write(",")
    write_quoted_json_string(key, output)
    output.write(":")
    value_formatter.format(value, output)


def oversized_entry_notice(log_event: LogEvent) -> LogEvent:
    """Return the notice written after an entry that is over the size budget."""

    return LogEvent(
        timestamp=log_event.timestamp,
        level=Level.FATAL,
        message_template=MessageTemplate(OVERSIZED_ENTRY_MESSAGE),
    )


def _exception_text(exception: BaseException | str) -> str:
    if isinstance(exception, BaseException):
        return "".join(traceback.format_exception(exception)).rstrip("\n")
    return str(exception)


def _is_error(level: object) -> bool:
    return isinstance(level, Level) and level >= Level.ERROR
