"""JSON rendering of structured property values."""
from __future__ import annotations

import json
import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, TextIO
from uuid import UUID

from .events import (
    DictionaryValue,
    PropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)


class SerializationError(TypeError):
    """Raised when a property value cannot be written as JSON."""


def write_quoted_json_string(text: str, output: TextIO) -> None:
    """Write ``text`` as a quoted, escaped JSON string."""

    output.write(json.dumps(text, ensure_ascii=False))


class JsonValueFormatter:
    """Writes property values as JSON, one rule per value kind.

    Structures carry their type tag under ``type_tag_name`` (``$type`` by
    default); pass ``None`` to leave tags out.
    """

    def __init__(self, type_tag_name: str | None = "$type") -> None:
        self.type_tag_name = type_tag_name

    def format(self, value: PropertyValue, output: TextIO) -> None:
        if isinstance(value, ScalarValue):
            self._write_scalar(value.value, output)
        elif isinstance(value, SequenceValue):
            self._write_sequence(value, output)
        elif isinstance(value, StructureValue):
            self._write_structure(value, output)
        elif isinstance(value, DictionaryValue):
            self._write_dictionary(value, output)
        else:
            raise SerializationError(f"Unsupported property value: {type(value).__name__}")

    def _write_sequence(self, value: SequenceValue, output: TextIO) -> None:
        output.write("[")
        for index, element in enumerate(value.elements):
            if index:
                output.write(",")
            self.format(element, output)
        output.write("]")

    def _write_structure(self, value: StructureValue, output: TextIO) -> None:
        output.write("{")
        delimiter = ""
        for name, element in value.properties:
            output.write(delimiter)
            delimiter = ","
            write_quoted_json_string(name, output)
            output.write(":")
            self.format(element, output)
        if self.type_tag_name and value.type_tag is not None:
            output.write(delimiter)
            write_quoted_json_string(self.type_tag_name, output)
            output.write(":")
            write_quoted_json_string(value.type_tag, output)
        output.write("}")

    def _write_dictionary(self, value: DictionaryValue, output: TextIO) -> None:
        output.write("{")
        for index, (key, element) in enumerate(value.elements):
            if index:
                output.write(",")
            raw_key = key.value
            write_quoted_json_string("null" if raw_key is None else _scalar_text(raw_key), output)
            output.write(":")
            self.format(element, output)
        output.write("}")

    def _write_scalar(self, raw: Any, output: TextIO) -> None:
        if raw is None:
            output.write("null")
        elif isinstance(raw, bool):
            output.write("true" if raw else "false")
        elif isinstance(raw, Enum):
            write_quoted_json_string(raw.name, output)
        elif isinstance(raw, int):
            output.write(str(raw))
        elif isinstance(raw, float):
            if math.isfinite(raw):
                output.write(repr(raw))
            else:
                write_quoted_json_string(_non_finite_text(raw), output)
        elif isinstance(raw, Decimal):
            if raw.is_finite():
                output.write(str(raw))
            else:
                write_quoted_json_string(str(raw), output)
        elif isinstance(raw, (str, datetime, date, time, timedelta, UUID)):
            write_quoted_json_string(_scalar_text(raw), output)
        else:
            raise SerializationError(f"Cannot write scalar of type {type(raw).__name__} as JSON")


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def _scalar_text(raw: Any) -> str:
    if isinstance(raw, (datetime, date, time)):
        return raw.isoformat()
    if isinstance(raw, Enum):
        return raw.name
    return str(raw)
