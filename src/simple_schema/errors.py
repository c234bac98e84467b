from __future__ import annotations
from typing import NamedTuple


class Failure(NamedTuple):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SchemaError(Exception):
    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

class EmptySchemaError(SchemaError):
    def __init__(self):
        super().__init__("Schema is empty")

class EmptyObjectError(SchemaError):
    def __init__(self):
        super().__init__("Object is empty")

class SchemaLoadError(SchemaError):
    pass

class ValidationFailed(SchemaError):
    """Raised once per validate call with every collected failure.

    `failures` holds the formatted "path: message" strings in traversal
    order, `details` the same failures as (path, message) records.
    """

    def __init__(self, details: list[Failure]):
        super().__init__("Validation failed")
        self.details = list(details)
        self.failures = [str(f) for f in self.details]


def message_of(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)
