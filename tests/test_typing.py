import datetime
import logging
import math

from simple_schema.typing import (
    MISSING, ArrayOf, FieldSpec, NestedSchema, Scalar, Structural, parse_fields,
    classify, is_empty, join_path, kind_of, lookup,
)


def test_kind_of():
    assert kind_of(True) == "boolean"
    assert kind_of(3) == "number"
    assert kind_of(2.5) == "number"
    assert kind_of("x") == "string"
    assert kind_of(datetime.date(2020, 1, 1)) == "date"
    assert kind_of(datetime.datetime(2020, 1, 1)) == "date"
    assert kind_of({}) == "object"
    assert kind_of([]) == "array"
    assert kind_of(()) == "array"
    assert kind_of(None) is None

def test_is_empty_follows_falsy_values():
    for value in (None, False, 0, 0.0, math.nan, ""):
        assert is_empty(value)
    for value in ({}, [], "0", True, 1, object()):
        assert not is_empty(value)

def test_classify_markers():
    assert classify(str) == Scalar("string")
    assert classify(int) == Scalar("number")
    assert classify(float) == Scalar("number")
    assert classify(bool) == Scalar("boolean")
    assert classify(datetime.datetime) == Scalar("date")
    assert classify("Date") == Scalar("date")
    assert classify(dict) == Structural("object")
    assert classify("Array") == Structural("array")

def test_classify_shapes():
    child = {"name": {"type": str}}
    assert classify(child) == NestedSchema((("name", FieldSpec(Scalar("string"))),))
    assert classify([child]) == ArrayOf(parse_fields(child))
    assert classify((child,)) == ArrayOf(parse_fields(child))
    assert classify({}) == NestedSchema(())

def test_classify_rejects_unknown_markers():
    for marker in (None, "string", set, object, [], [str], [{}, {}], 12):
        assert classify(marker) is None

def test_field_spec_parse():
    def check(value):
        pass

    spec = FieldSpec.parse({"type": str, "required": True, "enum": ["a", "b"], "validate": check})
    assert spec == FieldSpec(Scalar("string"), True, ("a", "b"), (check,))
    assert FieldSpec.parse({}).node is None
    assert FieldSpec.parse("nope") == FieldSpec(node=None)
    assert FieldSpec.parse({"type": int, "enum": "ab"}).enum is None

def test_field_spec_with_unusable_validators_is_invalid():
    assert FieldSpec.parse({"type": str, "validate": 5}).node is None
    assert FieldSpec.parse({"type": str, "validate": [len, "nope"]}).node is None
    assert FieldSpec.parse({"type": str, "validate": None}).node == Scalar("string")

def test_lookup_and_paths():
    assert lookup({"a": None}, "a") is None
    assert lookup({}, "a") is MISSING
    assert lookup("text", "a") is MISSING
    assert join_path("", "a") == "/a"
    assert join_path("/a", 0) == "/a/0"

def test_classify_logs_unrecognised_markers(caplog):
    with caplog.at_level(logging.DEBUG, logger="simple_schema.typing"):
        assert classify("Colour") is None
    assert "unrecognised type marker 'Colour'" in caplog.text
