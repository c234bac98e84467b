from __future__ import annotations
import inspect
import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any

from .errors import EmptyObjectError, Failure, SchemaError, ValidationFailed, message_of
from .typing import (
    DISPLAY_NAMES, MISSING, ArrayOf, Fields, FieldSpec, Scalar, Structural,
    is_empty, join_path, kind_of, lookup,
)

logger = logging.getLogger(__name__)

_SCALAR_MESSAGES = {
    "string": "must be a string",
    "number": "must be a number",
    "boolean": "must be true or false",
    "date": "must be of type Date",
}


@dataclass(frozen=True)
class ValidateOptions:
    ignore_missing: bool = False

@dataclass(frozen=True)
class ValidatorCall:
    path: str
    validator: Callable[[Any], Any]
    value: Any

# The walk suspends on every custom validator; the driver sends back the
# failure message or None.
Walk = Generator[ValidatorCall, "str | None", None]


def match(fields: Fields, data: Any, path: str,
          failures: list[Failure], options: ValidateOptions) -> Walk:
    for key, spec in fields:
        current = join_path(path, key)
        if spec.node is None:
            failures.append(Failure(current, "invalid schema"))
            continue
        value = lookup(data, key)
        if value is MISSING:
            if spec.required and not options.ignore_missing:
                failures.append(Failure(current, "missing value"))
            continue
        yield from _match_node(spec, value, current, failures, options)
        for validator in spec.validators:
            message = yield ValidatorCall(current, validator, value)
            if message is not None:
                failures.append(Failure(current, message))

def _match_node(spec: FieldSpec, value: Any, path: str,
                failures: list[Failure], options: ValidateOptions) -> Walk:
    node = spec.node
    if isinstance(node, Scalar):
        if kind_of(value) != node.kind:
            failures.append(Failure(path, _SCALAR_MESSAGES[node.kind]))
        elif node.kind == "string" and spec.enum is not None and value not in spec.enum:
            failures.append(Failure(path, "must be one of " + ", ".join(str(v) for v in spec.enum)))
    elif isinstance(node, Structural):
        if kind_of(value) != node.kind:
            failures.append(Failure(path, f"must be of type {DISPLAY_NAMES[node.kind]}"))
    elif isinstance(node, ArrayOf):
        if kind_of(value) != "array":
            failures.append(Failure(path, "must be an array"))
        else:
            for index, item in enumerate(value):
                yield from match(node.item, item, join_path(path, index), failures, options)
    else:
        yield from match(node.fields, value, path, failures, options)


def _invoke(call: ValidatorCall) -> str | None:
    try:
        result = call.validator(call.value)
    except Exception as exc:
        return message_of(exc)
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise SchemaError("asynchronous validator requires avalidate()", call.path)
    return None

async def _ainvoke(call: ValidatorCall) -> str | None:
    try:
        result = call.validator(call.value)
        if inspect.isawaitable(result):
            await result
    except Exception as exc:
        return message_of(exc)
    return None

def run(walk: Walk) -> None:
    try:
        call = next(walk)
        while True:
            call = walk.send(_invoke(call))
    except StopIteration:
        return
    finally:
        walk.close()

async def arun(walk: Walk) -> None:
    try:
        call = next(walk)
        while True:
            call = walk.send(await _ainvoke(call))
    except StopIteration:
        return
    finally:
        walk.close()


def _start(data: Any) -> list[Failure]:
    if is_empty(data):
        raise EmptyObjectError()
    return []

def _finish(failures: list[Failure]) -> None:
    if failures:
        logger.debug("validation failed with %d failure(s)", len(failures))
        raise ValidationFailed(failures)

def validate(fields: Fields, data: Any, options: ValidateOptions | None = None) -> None:
    """Match `data` against parsed `fields`, raising ValidationFailed on any failure.

    Raises EmptyObjectError before walking when there is no data at all.
    """
    failures = _start(data)
    run(match(fields, data, "", failures, options or ValidateOptions()))
    _finish(failures)

async def avalidate(fields: Fields, data: Any, options: ValidateOptions | None = None) -> None:
    """Same as validate, awaiting validators that return awaitables."""
    failures = _start(data)
    await arun(match(fields, data, "", failures, options or ValidateOptions()))
    _finish(failures)
