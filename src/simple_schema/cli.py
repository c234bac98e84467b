from __future__ import annotations
import datetime
import json
import pathlib
from typing import Any

import typer
from rich import print as rprint
from rich.markup import escape

from .errors import EmptyObjectError, SchemaError, ValidationFailed
from .schema import Schema
from .toml_parser import load_schema

app = typer.Typer(add_completion=False)


def _load(schema_path: str, data_path: str) -> tuple[Schema, Any]:
    try:
        schema = load_schema(schema_path)
    except SchemaError as exc:
        raise typer.BadParameter(exc.message, param_hint="SCHEMA_PATH") from exc
    try:
        data = json.loads(pathlib.Path(data_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"unable to load JSON data: {exc}", param_hint="DATA_PATH") from exc
    return schema, data

def _json_default(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@app.command()
def check(schema_path: str, data_path: str,
          ignore_missing: bool = typer.Option(False, "--ignore-missing", help="Do not report missing required fields.")):
    schema, data = _load(schema_path, data_path)
    try:
        schema.validate(data, ignore_missing=ignore_missing)
    except EmptyObjectError as exc:
        rprint(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1)
    except ValidationFailed as exc:
        for failure in exc.failures:
            rprint(f"[red]{escape(failure)}[/red]")
        raise typer.Exit(code=1)
    rprint("[green]OK[/green]")

@app.command()
def typeify(schema_path: str, data_path: str):
    schema, data = _load(schema_path, data_path)
    print(json.dumps(schema.typeify(data), indent=2, default=_json_default))
