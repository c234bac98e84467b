from __future__ import annotations
from collections.abc import Mapping
from typing import Any

from . import coercer, matcher
from .errors import EmptySchemaError, SchemaError
from .matcher import ValidateOptions
from .typing import is_empty, parse_fields


class Schema:
    """A schema: a mapping of field name to field spec.

    A field spec is a mapping with a `type` and optionally `required`,
    `enum` (strings only) and `validate`, a list of callables that raise
    to report a failure. `type` is a scalar marker (str, int/float, bool,
    datetime), a structural marker (dict, list), a nested schema mapping,
    or a one-element list holding the schema of each array item.

    Fields present in the data but absent from the schema are ignored.
    """

    def __init__(self, definition: Mapping[str, Any]):
        if is_empty(definition):
            raise EmptySchemaError()
        if not isinstance(definition, Mapping):
            raise SchemaError(f"Schema must be a mapping, got {type(definition).__name__}")
        self.definition = definition
        # field specs are classified once; the definition is treated as immutable
        self.fields = parse_fields(definition)

    def __repr__(self) -> str:
        return f"Schema({list(self.definition)!r})"

    def validate(self, data: Any, ignore_missing: bool = False) -> None:
        """Validate `data` against this schema.

        Raises EmptyObjectError when there is no data, ValidationFailed when
        any field fails. `ignore_missing` suppresses "missing value" failures
        for required fields.
        """
        matcher.validate(self.fields, data, ValidateOptions(ignore_missing=ignore_missing))

    async def avalidate(self, data: Any, ignore_missing: bool = False) -> None:
        await matcher.avalidate(self.fields, data, ValidateOptions(ignore_missing=ignore_missing))

    def typeify(self, data: Any) -> Any:
        """Return a copy of `data` with leaf values coerced to their declared types.

        Useful for parsed JSON or form data where everything arrived as a
        string. Only fields described by the schema are copied into the
        top-level result; the input is left untouched.
        """
        return coercer.typeify(self.fields, data)


def make_schema(definition: Mapping[str, Any]) -> Schema:
    return Schema(definition)
