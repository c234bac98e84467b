from __future__ import annotations
import datetime
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Union

logger = logging.getLogger(__name__)

Kind = Literal["string","number","boolean","date","object","array"]

TYPE_NAMES: dict[str, Kind] = {
    "String": "string",
    "Number": "number",
    "Boolean": "boolean",
    "Date": "date",
    "Object": "object",
    "Array": "array",
}
DISPLAY_NAMES: dict[Kind, str] = {kind: name for name, kind in TYPE_NAMES.items()}

# bool is looked up by identity, so it never collapses into int here
_MARKERS: dict[Any, Kind] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    datetime.datetime: "date",
    datetime.date: "date",
    dict: "object",
    list: "array",
}
SCALAR_KINDS = frozenset({"string", "number", "boolean", "date"})


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

MISSING: Any = _Missing()


def kind_of(value: Any) -> Kind | None:
    if isinstance(value, bool): return "boolean"
    if isinstance(value, (int, float)): return "number"
    if isinstance(value, str): return "string"
    if isinstance(value, datetime.date): return "date"
    if isinstance(value, Mapping): return "object"
    if isinstance(value, (list, tuple)): return "array"
    return None

def is_empty(value: Any) -> bool:
    """True for the values treated as "no data": None, False, zero, NaN and ""."""
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return not value or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False

def lookup(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, MISSING)
    return MISSING

def join_path(base: str, key: Any) -> str:
    return f"{base}/{key}"


@dataclass(frozen=True)
class Scalar:
    kind: Kind

@dataclass(frozen=True)
class Structural:
    kind: Kind

@dataclass(frozen=True)
class NestedSchema:
    fields: Fields

@dataclass(frozen=True)
class ArrayOf:
    item: Fields

Node = Union[Scalar, Structural, NestedSchema, ArrayOf]


def classify(marker: Any) -> Node | None:
    """Map the `type` of a field spec onto one of the four node kinds.

    Nested schemas are parsed here as well, so a schema tree is classified
    in one pass. Returns None when the type is missing or not a recognised
    marker.
    """
    if marker is None:
        return None
    if isinstance(marker, Mapping):
        return NestedSchema(parse_fields(marker))
    if isinstance(marker, (list, tuple)):
        if len(marker) == 1 and isinstance(marker[0], Mapping):
            return ArrayOf(parse_fields(marker[0]))
        logger.debug("array type must hold exactly one schema, got %r", marker)
        return None
    if isinstance(marker, str):
        kind = TYPE_NAMES.get(marker)
    else:
        try:
            kind = _MARKERS.get(marker)
        except TypeError:
            kind = None
    if kind is None:
        logger.debug("unrecognised type marker %r", marker)
        return None
    return Scalar(kind) if kind in SCALAR_KINDS else Structural(kind)


@dataclass(frozen=True)
class FieldSpec:
    node: Node | None
    required: bool = False
    enum: tuple[str, ...] | None = None
    validators: tuple[Callable[[Any], Any], ...] = ()

    @classmethod
    def parse(cls, raw: Any) -> "FieldSpec":
        if not isinstance(raw, Mapping):
            return cls(node=None)
        enum = raw.get("enum")
        validators = raw.get("validate") or ()
        if callable(validators):
            validators = (validators,)
        if not isinstance(validators, (list, tuple)) or not all(callable(v) for v in validators):
            logger.debug("validate must be a callable or a list of callables, got %r", validators)
            return cls(node=None)
        return cls(
            node=classify(raw.get("type")),
            required=bool(raw.get("required", False)),
            enum=tuple(enum) if isinstance(enum, (list, tuple)) else None,
            validators=tuple(validators),
        )


Fields = tuple[tuple[str, FieldSpec], ...]

def parse_fields(schema: Mapping[str, Any]) -> Fields:
    return tuple((key, FieldSpec.parse(raw)) for key, raw in schema.items())
