"""Tests for loading schemas from disk."""

import json

import pytest

from gql_gogen.core.errors import DecodeError, SchemaLoadError
from gql_gogen.core.loader import load_schema


class TestLoadSchema:
    """Tests for load_schema."""

    def test_json_document(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"server": {"enums": {"Color": {"name": "Color", "values": ["RED"]}}}}))
        schema = load_schema(path)
        assert schema.server.enums["Color"].values == ("RED",)

    def test_sdl_file(self, tmp_path):
        path = tmp_path / "schema.graphqls"
        path.write_text("enum Color { RED GREEN }")
        schema = load_schema(str(path))
        assert schema.server.enums["Color"].values == ("RED", "GREEN")

    def test_sdl_directory(self, tmp_path):
        (tmp_path / "types.graphql").write_text("type User { name: String }")
        schema = load_schema(tmp_path)
        assert list(schema.server.objects["User"].fields) == ["name"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            load_schema(tmp_path / "missing.json")

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"objects": {}}))
        with pytest.raises(DecodeError):
            load_schema(path)
