from __future__ import annotations
import datetime
import logging
import math
from collections.abc import Mapping
from typing import Any

from .typing import (
    MISSING, ArrayOf, Fields, Node, Scalar, Structural,
    is_empty, kind_of, lookup,
)

logger = logging.getLogger(__name__)

_FALSE_WORDS = frozenset({"false", "0", "no"})
_TRUE_WORDS = frozenset({"true", "1", "yes"})


def _to_string(value: Any) -> Any:
    return value if isinstance(value, str) else str(value)

def _text_of(value: Any) -> str:
    # whole floats read as integers, so 1.0 and 0.0 match "1" and "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def _to_boolean(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    text = _text_of(value).lower()
    if text in _FALSE_WORDS:
        return False
    if text in _TRUE_WORDS:
        return True
    return value

def _to_number(value: Any) -> Any:
    if kind_of(value) == "number":
        return value
    text = str(value)
    try:
        number = float(text) if "." in text else int(text)
    except ValueError:
        return value
    if isinstance(number, float) and math.isnan(number):
        return value
    return number

# layout of JavaScript's Date.prototype.toString, minus the zone name
_JS_DATE_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"

def _parse_date_text(text: str) -> datetime.datetime | None:
    text = text.strip()
    try:
        return datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        return datetime.datetime.strptime(text.split(" (", 1)[0], _JS_DATE_FORMAT)
    except ValueError:
        return None

def _to_date(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return value
    if kind_of(value) == "number":
        # numbers are epoch milliseconds
        if not value > 0:
            return value
        try:
            return datetime.datetime.fromtimestamp(value / 1000, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return value
    if not isinstance(value, str):
        return value
    parsed = _parse_date_text(value)
    if parsed is None or parsed.timestamp() <= 0:
        return value
    return parsed

_SCALAR_COERCERS = {
    "string": _to_string,
    "boolean": _to_boolean,
    "number": _to_number,
    "date": _to_date,
}


def _coerce_nested(fields: Fields, value: Any) -> Any:
    if not isinstance(value, Mapping):
        return value
    # fields the schema does not describe stay in the copy untouched
    result = dict(value)
    coerce_fields(fields, value, result)
    return result

def _coerce(node: Node, value: Any) -> Any:
    if isinstance(node, Scalar):
        return _SCALAR_COERCERS[node.kind](value)
    if isinstance(node, Structural):
        return value
    if isinstance(node, ArrayOf):
        if kind_of(value) != "array":
            return value
        return type(value)(_coerce_nested(node.item, item) for item in value)
    return _coerce_nested(node.fields, value)

def coerce_fields(fields: Fields, source: Any, result: dict[str, Any]) -> None:
    for key, spec in fields:
        value = lookup(source, key)
        if spec.node is None or value is MISSING:
            continue
        if value is not None:
            try:
                value = _coerce(spec.node, value)
            except Exception as exc:
                logger.debug("left %r unchanged for field %r: %s", value, key, exc)
        result[key] = value


def typeify(fields: Fields, data: Any) -> Any:
    """Coerce the leaves of `data` towards the types declared in `fields`.

    Returns a new mapping holding the fields the schema describes. Values
    that cannot be coerced are kept as they are; this never raises for bad
    data. Empty input is returned as is.
    """
    if is_empty(data):
        return data
    result: dict[str, Any] = {}
    coerce_fields(fields, data, result)
    return result
