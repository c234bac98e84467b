import json

import pytest
from typer.testing import CliRunner

from simple_schema.cli import app

runner = CliRunner()

SCHEMA = """
[name]
type = "String"
required = true

[age]
type = "Number"

[born]
type = "Date"
"""


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.toml"
    path.write_text(SCHEMA, encoding="utf-8")
    return str(path)

@pytest.fixture
def write_json(tmp_path):
    def _write(data):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


def test_check_ok(schema_file, write_json):
    result = runner.invoke(app, ["check", schema_file, write_json({"name": "ann", "age": 3})])
    assert result.exit_code == 0
    assert "OK" in result.output

def test_check_reports_failures(schema_file, write_json):
    result = runner.invoke(app, ["check", schema_file, write_json({"age": "3"})])
    assert result.exit_code == 1
    assert "/name: missing value" in result.output
    assert "/age: must be a number" in result.output

def test_check_ignore_missing(schema_file, write_json):
    result = runner.invoke(app, ["check", "--ignore-missing", schema_file, write_json({"age": 3})])
    assert result.exit_code == 0

def test_check_empty_object(schema_file, write_json):
    result = runner.invoke(app, ["check", schema_file, write_json(None)])
    assert result.exit_code == 1
    assert "Object is empty" in result.output

def test_typeify(schema_file, write_json):
    result = runner.invoke(app, ["typeify", schema_file, write_json({"name": 7, "age": "3", "born": "2014-01-02"})])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"name": "7", "age": 3, "born": "2014-01-02T00:00:00"}

def test_bad_schema_file(tmp_path, write_json):
    path = tmp_path / "bad.toml"
    path.write_text('[name]\ntype = "Text"\n', encoding="utf-8")
    result = runner.invoke(app, ["check", str(path), write_json({"name": "x"})])
    assert result.exit_code == 2
