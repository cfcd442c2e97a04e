"""In-memory log events, message templates and structured property values."""
from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union
from uuid import UUID

from .severity import Level

MAX_CAPTURE_DEPTH = 10

_SCALAR_TYPES = (str, int, float, Decimal, datetime, date, time, timedelta, UUID, Enum)


@dataclass(frozen=True)
class ScalarValue:
    value: Any


@dataclass(frozen=True)
class SequenceValue:
    elements: Tuple["PropertyValue", ...] = ()


@dataclass(frozen=True)
class StructureValue:
    properties: Tuple[Tuple[str, "PropertyValue"], ...] = ()
    type_tag: Optional[str] = None


@dataclass(frozen=True)
class DictionaryValue:
    elements: Tuple[Tuple[ScalarValue, "PropertyValue"], ...] = ()


PropertyValue = Union[ScalarValue, SequenceValue, StructureValue, DictionaryValue]
PROPERTY_VALUE_TYPES = (ScalarValue, SequenceValue, StructureValue, DictionaryValue)


def capture(obj: Any, _depth: int = 0) -> PropertyValue:
    """Convert a plain Python object into a property value.

    Mappings become dictionaries, dataclass instances become structures tagged
    with their class name and other iterables of the builtin kinds become
    sequences. Anything nested deeper than ``MAX_CAPTURE_DEPTH`` (which also
    covers self-referencing containers) is kept as its ``repr``.
    """

    if isinstance(obj, PROPERTY_VALUE_TYPES):
        return obj
    if obj is None or isinstance(obj, _SCALAR_TYPES):
        return ScalarValue(obj)
    if _depth >= MAX_CAPTURE_DEPTH:
        return ScalarValue(repr(obj))
    if isinstance(obj, Mapping):
        return DictionaryValue(
            tuple(
                (_capture_key(key), capture(value, _depth + 1))
                for key, value in obj.items()
            )
        )
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return StructureValue(
            tuple(
                (f.name, capture(getattr(obj, f.name), _depth + 1))
                for f in dataclasses.fields(obj)
            ),
            type_tag=type(obj).__name__,
        )
    if isinstance(obj, (list, tuple, set, frozenset)):
        return SequenceValue(tuple(capture(item, _depth + 1) for item in obj))
    return ScalarValue(str(obj))


def _capture_key(key: Any) -> ScalarValue:
    if key is None or isinstance(key, _SCALAR_TYPES):
        return ScalarValue(key)
    return ScalarValue(str(key))


def render_value(value: PropertyValue, fmt: str | None = None, *, top_level: bool = True) -> str:
    """Render a property value the way it appears inside a rendered message."""

    if isinstance(value, ScalarValue):
        raw = value.value
        if raw is None:
            return "null"
        if fmt:
            try:
                return format(raw, fmt)
            except (TypeError, ValueError):
                pass
        if isinstance(raw, str) and not top_level:
            return f'"{raw}"'
        if isinstance(raw, Enum):
            return raw.name
        return str(raw)
    if isinstance(value, SequenceValue):
        return "[" + ", ".join(render_value(v, top_level=False) for v in value.elements) + "]"
    if isinstance(value, StructureValue):
        body = ", ".join(f"{name}: {render_value(v, top_level=False)}" for name, v in value.properties)
        prefix = f"{value.type_tag} " if value.type_tag else ""
        return f"{prefix}{{ {body} }}" if body else f"{prefix}{{ }}"
    if isinstance(value, DictionaryValue):
        pairs = (
            f"({render_value(k, top_level=False)}: {render_value(v, top_level=False)})"
            for k, v in value.elements
        )
        return "[" + ", ".join(pairs) + "]"
    return str(value)


@dataclass(frozen=True)
class PropertyToken:
    name: str
    raw: str
    fmt: Optional[str] = None
    alignment: Optional[int] = None

    def render(self, properties: Mapping[str, PropertyValue]) -> str:
        value = properties.get(self.name)
        if value is None:
            return self.raw
        text = render_value(value, self.fmt)
        if self.alignment is not None:
            width = abs(self.alignment)
            text = text.rjust(width) if self.alignment > 0 else text.ljust(width)
        return text


# ``{{``/``}}`` escapes, or ``{[@$]name[,alignment][:format]}``
_TOKEN_RE = re.compile(r"\{\{|\}\}|\{[@$]?(\w+)(?:,(-?\d+))?(?::([^{}]*))?\}")


class MessageTemplate:
    """A message with named ``{placeholders}`` that render against properties."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: Tuple[Union[str, PropertyToken], ...] = tuple(self._parse(text))

    def __repr__(self) -> str:
        return f"MessageTemplate({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageTemplate):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    @property
    def property_names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.tokens if isinstance(t, PropertyToken))

    @staticmethod
    def _parse(text: str):
        literal: list[str] = []
        position = 0
        for match in _TOKEN_RE.finditer(text):
            literal.append(text[position:match.start()])
            position = match.end()
            token = match.group(0)
            if token in ("{{", "}}"):
                literal.append(token[0])
                continue
            if any(literal):
                yield "".join(literal)
            literal = []
            alignment = match.group(2)
            yield PropertyToken(
                name=match.group(1),
                raw=token,
                fmt=match.group(3) or None,
                alignment=int(alignment) if alignment else None,
            )
        literal.append(text[position:])
        if any(literal):
            yield "".join(literal)

    def render(self, properties: Mapping[str, PropertyValue]) -> str:
        return "".join(
            token if isinstance(token, str) else token.render(properties)
            for token in self.tokens
        )


@dataclass(frozen=True, eq=False)
class LogEvent:
    """A single log event as handed to the formatter."""

    timestamp: datetime
    level: Level
    message_template: MessageTemplate
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)
    exception: BaseException | str | None = None

    def render_message(self) -> str:
        return self.message_template.render(self.properties)

    @classmethod
    def create(
        cls,
        level: Level,
        template: str,
        /,
        *,
        exception: BaseException | str | None = None,
        timestamp: datetime | None = None,
        properties: Mapping[str, Any] | None = None,
        **extra: Any,
    ) -> "LogEvent":
        """Build an event, capturing property values.

        Keyword arguments become properties. Names taken by the keyword
        parameters (``exception``, ``timestamp``, ``properties``) go through
        the ``properties`` mapping instead; ``extra`` wins on duplicates.
        """

        bag = dict(properties or {})
        bag.update(extra)
        return cls(
            timestamp=timestamp or datetime.now(timezone.utc),
            level=level,
            message_template=MessageTemplate(template),
            properties={name: capture(value) for name, value in bag.items()},
            exception=exception,
        )
