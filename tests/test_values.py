from __future__ import annotations

import io
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

import pytest

from stackdriver_logging import (
    DictionaryValue,
    JsonValueFormatter,
    MessageTemplate,
    ScalarValue,
    SequenceValue,
    SerializationError,
    StructureValue,
    capture,
)
from stackdriver_logging.events import MAX_CAPTURE_DEPTH


@dataclass
class Point:
    x: int
    y: int


class Colour(Enum):
    RED = 1


def to_json(value, formatter=None):
    output = io.StringIO()
    (formatter or JsonValueFormatter()).format(value, output)
    return output.getvalue()


def test_scalars_render_as_json():
    assert to_json(ScalarValue(None)) == "null"
    assert to_json(ScalarValue(True)) == "true"
    assert to_json(ScalarValue(12)) == "12"
    assert to_json(ScalarValue(1.5)) == "1.5"
    assert to_json(ScalarValue(Decimal("2.50"))) == "2.50"
    assert to_json(ScalarValue("line\n\"quoted\"")) == '"line\\n\\"quoted\\""'
    assert to_json(ScalarValue(Colour.RED)) == '"RED"'


def test_non_finite_floats_are_quoted():
    assert json.loads(to_json(ScalarValue(float("nan")))) == "NaN"
    assert json.loads(to_json(ScalarValue(float("-inf")))) == "-Infinity"


def test_datetimes_use_iso_format():
    value = datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)

    assert json.loads(to_json(ScalarValue(value))) == "2024-05-06T07:08:09+00:00"


def test_structures_carry_type_tag():
    value = capture(Point(1, 2))

    assert isinstance(value, StructureValue)
    assert to_json(value) == '{"x":1,"y":2,"$type":"Point"}'
    assert to_json(value, JsonValueFormatter(type_tag_name=None)) == '{"x":1,"y":2}'


def test_collections_are_captured():
    value = capture({"tags": ("a", "b"), 3: [1, None]})

    assert isinstance(value, DictionaryValue)
    assert json.loads(to_json(value)) == {"tags": ["a", "b"], "3": [1, None]}


def test_unsupported_scalars_raise():
    with pytest.raises(SerializationError):
        to_json(ScalarValue(object()))


def test_unknown_value_kind_raises():
    with pytest.raises(SerializationError):
        to_json("not a property value")


def test_unknown_objects_are_captured_as_text():
    class Opaque:
        def __str__(self) -> str:
            return "opaque!"

    assert capture(Opaque()) == ScalarValue("opaque!")


def test_cycles_are_cut_at_max_depth():
    items: list = []
    items.append(items)

    value = capture(items)
    depth = 0
    while isinstance(value, SequenceValue):
        value = value.elements[0]
        depth += 1

    assert depth == MAX_CAPTURE_DEPTH
    assert isinstance(value, ScalarValue)
    json.loads(to_json(capture(items)))


def test_template_renders_properties():
    template = MessageTemplate("{{literal}} {name} owes {amount:0.2f}")

    rendered = template.render({"name": capture("Bob"), "amount": capture(3.14159)})

    assert rendered == "{literal} Bob owes 3.14"
    assert template.property_names == ("name", "amount")


def test_template_keeps_missing_placeholders():
    assert MessageTemplate("Hello {missing}!").render({}) == "Hello {missing}!"


def test_template_alignment_and_positional():
    template = MessageTemplate("[{0,5}|{1,-4}]")

    assert template.render({"0": capture("ab"), "1": capture("c")}) == "[   ab|c   ]"


def test_template_renders_nested_values():
    template = MessageTemplate("Moved to {@point} via {route}")

    rendered = template.render({"point": capture(Point(1, 2)), "route": capture(["a", 1])})

    assert rendered == 'Moved to Point { x: 1, y: 2 } via ["a", 1]'


def test_invalid_placeholders_stay_literal():
    assert MessageTemplate("{not valid} {}").render({}) == "{not valid} {}"
