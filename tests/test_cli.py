"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from gql_gogen.cli import main


def literal(kind, name):
    return {"_type": "literal", "type": {"_type": kind, "name": name}}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({
        "server": {
            "enums": {"Color": {"name": "Color", "values": ["RED", "GREEN"]}},
            "objects": {
                "Event": {
                    "name": "Event",
                    "fields": {"at": {"nullable": False, "spec": literal("Scalar", "DateTime")}},
                },
                "Query": {
                    "name": "Query",
                    "fields": {"color": {"nullable": False, "spec": literal("Enum", "Color")}},
                },
            },
        }
    }))
    return path


class TestGenerateCommand:
    """Tests for 'gql-gogen generate'."""

    def test_generate(self, runner, schema_file, tmp_path):
        output = tmp_path / "out" / "schema.go"
        result = runner.invoke(main, [
            "generate", "-s", str(schema_file), "-o", str(output),
            "-p", "api", "--scalar", "DateTime=time.Time",
        ])
        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "package api\n" in content
        assert '\t"time"\n' in content
        assert "\tColor() Color\n" in content

    def test_failures_exit_nonzero_and_still_write(self, runner, schema_file, tmp_path):
        output = tmp_path / "schema.go"
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(output)])
        assert result.exit_code == 1
        assert "object Event: No scalar spec is provided for scalar: DateTime" in result.output
        content = output.read_text()
        assert "type Color string" in content
        assert "type Event" not in content

    def test_invalid_scalar_override(self, runner, schema_file, tmp_path):
        result = runner.invoke(main, [
            "generate", "-s", str(schema_file), "-o", str(tmp_path / "schema.go"), "--scalar", "DateTime",
        ])
        assert result.exit_code == 2
        assert "NAME=GoType" in result.output

    def test_invalid_package_name(self, runner, schema_file, tmp_path):
        result = runner.invoke(main, [
            "generate", "-s", str(schema_file), "-o", str(tmp_path / "schema.go"), "-p", "my-api",
        ])
        assert result.exit_code == 2

    def test_decode_error(self, runner, tmp_path):
        schema = tmp_path / "schema.json"
        schema.write_text('{"server": {"objects": {"A": {"name": "A", "fields": {"x": {"nullable": false, '
                          '"spec": {"_type": "map"}}}}}}}')
        output = tmp_path / "schema.go"
        result = runner.invoke(main, ["generate", "-s", str(schema), "-o", str(output)])
        assert result.exit_code == 1
        assert "Invalid schema document" in result.output
        assert not output.exists()

    def test_sdl_input(self, runner, tmp_path):
        schema = tmp_path / "schema.graphql"
        schema.write_text("type Query { answer: Int! }")
        output = tmp_path / "schema.go"
        result = runner.invoke(main, ["generate", "-s", str(schema), "-o", str(output), "-v"])
        assert result.exit_code == 0, result.output
        assert "\tAnswer() int32\n" in output.read_text()


class TestParseCommand:
    """Tests for 'gql-gogen parse'."""

    def test_parse(self, runner, tmp_path):
        schema = tmp_path / "schema.graphql"
        schema.write_text("enum Color { RED }")
        output = tmp_path / "schema.json"
        result = runner.invoke(main, ["parse", "-s", str(schema), "-o", str(output)])
        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text())
        assert document["server"]["enums"] == {"Color": {"name": "Color", "values": ["RED"]}}

    def test_parse_error(self, runner, tmp_path):
        schema = tmp_path / "schema.graphql"
        schema.write_text("type Query { a: [[Int]] }")
        result = runner.invoke(main, ["parse", "-s", str(schema), "-o", str(tmp_path / "schema.json")])
        assert result.exit_code == 1
        assert "Nested lists" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
