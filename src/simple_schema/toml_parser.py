from __future__ import annotations
import logging
import pathlib
from typing import Any, Dict

import tomli

from .errors import SchemaLoadError
from .schema import Schema
from .typing import TYPE_NAMES, join_path

logger = logging.getLogger(__name__)

_FIELD_KEYS = frozenset({"type", "required", "enum"})


def _check_fields(fields: Any, path: str) -> None:
    if not isinstance(fields, dict):
        raise SchemaLoadError(f"expected a table of fields at {path or '/'}", path)
    for key, spec in fields.items():
        current = join_path(path, key)
        if not isinstance(spec, dict):
            raise SchemaLoadError(f"field {current} must be a table", current)
        unknown = set(spec) - _FIELD_KEYS
        if unknown:
            raise SchemaLoadError(f"unsupported keys at {current}: {', '.join(sorted(unknown))}", current)
        _check_type(spec.get("type"), current)

def _check_type(marker: Any, path: str) -> None:
    # a missing type is left for validation to report as "invalid schema"
    if marker is None:
        return
    if isinstance(marker, str):
        if marker not in TYPE_NAMES:
            raise SchemaLoadError(f"unknown type {marker!r} at {path}", path)
    elif isinstance(marker, list):
        if len(marker) != 1:
            raise SchemaLoadError(f"array type at {path} must hold exactly one table", path)
        _check_fields(marker[0], path)
    else:
        _check_fields(marker, path)


def parse_schema_section(text: str) -> Dict[str, Any]:
    # Type names stay as strings; classification understands them directly.
    try:
        data = tomli.loads(text)
    except tomli.TOMLDecodeError as exc:
        raise SchemaLoadError(f"invalid TOML: {exc}") from exc
    _check_fields(data, "")
    logger.debug("parsed schema with fields %s", list(data))
    return data

def load_schema_text(text: str) -> Schema:
    return Schema(parse_schema_section(text))

def load_schema(path: str | pathlib.Path) -> Schema:
    try:
        text = pathlib.Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"unable to read schema file: {path}") from exc
    return load_schema_text(text)
